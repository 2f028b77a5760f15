"""
Error types raised across lambda_logs
"""


class LambdaLogsError(Exception):
    """Base class for application errors"""


class ConfigurationError(LambdaLogsError):
    """Missing or unusable AWS profile setup; fatal at startup"""


class RemoteFetchError(LambdaLogsError):
    """A function-list or log fetch failed; the current screen stays active"""


class ValidationError(LambdaLogsError):
    """User input (e.g. a custom date range) is inconsistent"""
