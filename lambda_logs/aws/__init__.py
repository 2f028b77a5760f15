"""
AWS collaborators - function listing and CloudWatch log fetching
"""

from .cli_backend import AwsCliBackend, log_group_for
from .responses import FilteredLogEvent, FilterLogEventsPage, ListFunctionsPage

__all__ = [
    'AwsCliBackend',
    'log_group_for',
    'FilteredLogEvent',
    'FilterLogEventsPage',
    'ListFunctionsPage',
]
