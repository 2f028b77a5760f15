"""
lambda_logs Terminal UI Package
"""

from .app import LambdaLogsApp, run_app

__all__ = [
    'LambdaLogsApp',
    'run_app'
]
