"""
Shared fixtures for lambda_logs tests
"""
from datetime import datetime, timedelta

import pytest

from lambda_logs.config import Profile
from lambda_logs.core import LogEntry, TimeRange

BASE_TS = 1_700_000_000_000


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 15, 10, 30, 0)


@pytest.fixture
def time_range(fixed_now):
    return TimeRange(fixed_now - timedelta(hours=1), fixed_now)


@pytest.fixture
def profiles():
    return [
        Profile("default", "us-east-1"),
        Profile("staging", "eu-west-1"),
        Profile("production", "eu-west-1"),
    ]


@pytest.fixture
def make_entries():
    """Factory building LogEntry values one second apart"""
    def _make(*messages):
        return [
            LogEntry(timestamp=BASE_TS + i * 1000, message=message)
            for i, message in enumerate(messages)
        ]
    return _make


class FakeBackend:
    """In-memory stand-in for the AWS collaborator"""

    def __init__(self, functions=None, entries=None):
        self.functions = functions if functions is not None else ["api-handler", "worker"]
        self.entries = entries if entries is not None else []
        self.calls = []

    def list_functions(self, profile):
        self.calls.append(("list_functions", profile.name))
        return list(self.functions)

    def fetch_logs(self, profile, function_name, start_ms, end_ms):
        self.calls.append(("fetch_logs", profile.name, function_name, start_ms, end_ms))
        return list(self.entries)


@pytest.fixture
def backend(make_entries):
    return FakeBackend(entries=make_entries("START RequestId: 1", "ERROR boom", "END RequestId: 1"))
