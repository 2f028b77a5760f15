"""
lambda_logs - Terminal browser for AWS Lambda CloudWatch logs

Pick a profile, pick a function, pick a time window, then page through
the function's log events with live keyword filtering.
"""

__version__ = "0.1.0"
