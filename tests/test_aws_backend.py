"""
Unit tests for the AWS CLI backend
"""
import json
import subprocess
from unittest.mock import MagicMock

import pytest

from lambda_logs.aws import AwsCliBackend, log_group_for
from lambda_logs.config import Profile
from lambda_logs.errors import RemoteFetchError

PROFILE = Profile("staging", "eu-west-1")


def completed(payload=None, returncode=0, stderr=""):
    """Build a fake CompletedProcess for subprocess.run"""
    result = MagicMock()
    result.returncode = returncode
    result.stdout = json.dumps(payload) if payload is not None else ""
    result.stderr = stderr
    return result


@pytest.fixture
def mock_run(mocker):
    return mocker.patch("lambda_logs.aws.cli_backend.subprocess.run")


@pytest.fixture
def backend():
    return AwsCliBackend(aws_cli="aws", timeout=5)


def test_log_group_name():
    assert log_group_for("orders") == "/aws/lambda/orders"


def test_list_functions_sorted_across_pages(mock_run, backend):
    mock_run.side_effect = [
        completed({"Functions": [{"FunctionName": "worker"}], "NextToken": "t1"}),
        completed({"Functions": [{"FunctionName": "api", "Runtime": "python3.12"}]}),
    ]

    assert backend.list_functions(PROFILE) == ["api", "worker"]

    first_cmd = mock_run.call_args_list[0].args[0]
    assert first_cmd[:3] == ["aws", "lambda", "list-functions"]
    assert first_cmd[first_cmd.index("--profile") + 1] == "staging"
    assert first_cmd[first_cmd.index("--region") + 1] == "eu-west-1"
    second_cmd = mock_run.call_args_list[1].args[0]
    assert second_cmd[second_cmd.index("--starting-token") + 1] == "t1"


def test_cli_runs_without_pager(mock_run, backend):
    mock_run.return_value = completed({"Functions": []})
    backend.list_functions(PROFILE)
    assert mock_run.call_args.kwargs["env"]["AWS_PAGER"] == ""
    assert mock_run.call_args.kwargs["timeout"] == 5


def test_fetch_logs_drains_pages_sorts_and_dedups(mock_run, backend):
    mock_run.side_effect = [
        completed({
            "events": [
                {"eventId": "2", "timestamp": 2000, "message": "second", "ingestionTime": 2100},
                {"eventId": "1", "timestamp": 1000, "message": "first"},
            ],
            "nextToken": "page-2",
        }),
        completed({
            "events": [
                {"eventId": "2", "timestamp": 2000, "message": "second"},
                {"eventId": "3", "timestamp": 1500, "message": '{"level": "ERROR"}'},
            ],
        }),
    ]

    entries = backend.fetch_logs(PROFILE, "orders", 1000, 5000)

    assert [entry.message for entry in entries] == ["first", '{"level": "ERROR"}', "second"]
    assert entries[2].ingestion_time == 2100
    assert mock_run.call_count == 2

    first_cmd = mock_run.call_args_list[0].args[0]
    assert first_cmd[first_cmd.index("--log-group-name") + 1] == "/aws/lambda/orders"
    assert first_cmd[first_cmd.index("--start-time") + 1] == "1000"
    assert first_cmd[first_cmd.index("--end-time") + 1] == "4999"
    assert "--next-token" not in first_cmd
    second_cmd = mock_run.call_args_list[1].args[0]
    assert second_cmd[second_cmd.index("--next-token") + 1] == "page-2"


def test_fetch_logs_stops_on_repeated_token(mock_run, backend):
    page = completed({"events": [], "nextToken": "same"})
    mock_run.side_effect = [page, page, page]
    assert backend.fetch_logs(PROFILE, "orders", 0, 1000) == []
    assert mock_run.call_count == 2


def test_fetch_logs_empty_range(mock_run, backend):
    mock_run.return_value = completed({"events": []})
    assert backend.fetch_logs(PROFILE, "orders", 0, 1000) == []


def test_missing_message_becomes_empty(mock_run, backend):
    mock_run.return_value = completed({"events": [{"eventId": "1", "timestamp": 1}]})
    assert backend.fetch_logs(PROFILE, "orders", 0, 1000)[0].message == ""


def test_nonzero_exit_raises(mock_run, backend):
    mock_run.return_value = completed(returncode=255, stderr="AccessDeniedException\n")
    with pytest.raises(RemoteFetchError, match="AccessDeniedException"):
        backend.list_functions(PROFILE)


def test_missing_cli_raises(mock_run, backend):
    mock_run.side_effect = FileNotFoundError()
    with pytest.raises(RemoteFetchError, match="not found"):
        backend.list_functions(PROFILE)


def test_timeout_raises(mock_run, backend):
    mock_run.side_effect = subprocess.TimeoutExpired(cmd="aws", timeout=5)
    with pytest.raises(RemoteFetchError, match="timed out"):
        backend.fetch_logs(PROFILE, "orders", 0, 1000)


def test_bad_json_raises(mock_run, backend):
    result = completed()
    result.stdout = "not json"
    mock_run.return_value = result
    with pytest.raises(RemoteFetchError):
        backend.list_functions(PROFILE)


def test_unexpected_shape_raises(mock_run, backend):
    mock_run.return_value = completed({"Functions": [{"Runtime": "python3.12"}]})
    with pytest.raises(RemoteFetchError):
        backend.list_functions(PROFILE)


def test_empty_range_skips_the_cli(mock_run, backend):
    assert backend.fetch_logs(PROFILE, "orders", 5000, 5000) == []
    mock_run.assert_not_called()


def test_one_millisecond_range_queries_a_single_instant(mock_run, backend):
    mock_run.return_value = completed({"events": []})
    backend.fetch_logs(PROFILE, "orders", 5000, 5001)
    cmd = mock_run.call_args.args[0]
    assert cmd[cmd.index("--start-time") + 1] == "5000"
    assert cmd[cmd.index("--end-time") + 1] == "5000"
