"""
AWS CLI Backend - Function listing and log fetching through the ``aws`` CLI

Handles:
- ``aws lambda list-functions`` for a profile/region
- ``aws logs filter-log-events`` with nextToken pagination drained
- Sorting and de-duplication of the fetched events
- Translating CLI failures into RemoteFetchError
"""
import json
import logging
import os
import subprocess
from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import ValidationError as ResponseValidationError

from lambda_logs.config import Profile
from lambda_logs.core.log_entry import LogEntry
from lambda_logs.errors import RemoteFetchError

from .responses import FilterLogEventsPage, ListFunctionsPage

LOG_GROUP_PREFIX = "/aws/lambda/"
PAGE_SIZE = 100


def log_group_for(function_name: str) -> str:
    return f"{LOG_GROUP_PREFIX}{function_name}"


class AwsCliBackend:
    """Remote collaborator used by the navigation controller"""

    def __init__(self, aws_cli: str = "aws", timeout: float = 60.0,
                 page_size: int = PAGE_SIZE):
        """
        Initialize the backend

        Args:
            aws_cli: Name or path of the aws executable
            timeout: Seconds allowed per CLI invocation
            page_size: Events requested per filter-log-events page
        """
        self.aws_cli = aws_cli
        self.timeout = timeout
        self.page_size = page_size
        self.logger = logging.getLogger(__name__)

    def _run(self, profile: Profile, args: List[str]) -> Dict[str, Any]:
        """Run one CLI command and return its decoded JSON output"""
        cmd = [
            self.aws_cli,
            *args,
            "--profile", profile.name,
            "--region", profile.region,
            "--output", "json",
        ]
        env = dict(os.environ, AWS_PAGER="")
        self.logger.debug(f"Running {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except FileNotFoundError:
            raise RemoteFetchError(f"AWS CLI not found: {self.aws_cli}")
        except subprocess.TimeoutExpired:
            raise RemoteFetchError(f"aws command timed out after {self.timeout:g} seconds")
        except subprocess.SubprocessError as e:
            raise RemoteFetchError(f"Failed to run aws: {e}")

        if result.returncode != 0:
            error_msg = result.stderr.strip() or "Unknown error"
            raise RemoteFetchError(f"aws command failed: {error_msg}")

        output = result.stdout.strip()
        if not output:
            return {}
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise RemoteFetchError(f"Failed to parse aws output: {e}")

    def list_functions(self, profile: Profile) -> List[str]:
        """
        List the Lambda functions visible to a profile

        Returns:
            Function names sorted alphabetically

        Raises:
            RemoteFetchError: If the CLI call fails
        """
        names: List[str] = []
        starting_token: Optional[str] = None
        while True:
            args = ["lambda", "list-functions"]
            if starting_token:
                args += ["--starting-token", starting_token]
            try:
                page = ListFunctionsPage.model_validate(self._run(profile, args))
            except ResponseValidationError as e:
                raise RemoteFetchError(f"Unexpected list-functions response: {e}")

            names.extend(function.function_name for function in page.functions)
            starting_token = page.next_token
            if not starting_token:
                break

        self.logger.info(f"Profile {profile.name}: {len(names)} functions")
        return sorted(names)

    def fetch_logs(self, profile: Profile, function_name: str,
                   start_ms: int, end_ms: int) -> List[LogEntry]:
        """
        Fetch every log event of a function in [start_ms, end_ms)

        All pages are drained before returning; the result is ordered by
        timestamp and contains each event once.

        Raises:
            RemoteFetchError: If any page fails
        """
        log_group = log_group_for(function_name)
        if end_ms <= start_ms:
            self.logger.info(f"Empty time range for {log_group}, nothing to fetch")
            return []

        seen: Set[Tuple[Any, ...]] = set()
        entries: List[LogEntry] = []
        next_token: Optional[str] = None
        pages = 0

        while True:
            args = [
                "logs", "filter-log-events",
                "--log-group-name", log_group,
                "--start-time", str(start_ms),
                # CloudWatch treats endTime as inclusive
                "--end-time", str(end_ms - 1),
                "--limit", str(self.page_size),
                "--no-paginate",
            ]
            if next_token:
                args += ["--next-token", next_token]

            try:
                page = FilterLogEventsPage.model_validate(self._run(profile, args))
            except ResponseValidationError as e:
                raise RemoteFetchError(f"Unexpected filter-log-events response: {e}")
            pages += 1

            for event in page.events:
                key = (event.event_id,) if event.event_id else (
                    event.log_stream_name, event.timestamp, event.message)
                if key in seen:
                    continue
                seen.add(key)
                entries.append(event.to_entry())

            if not page.next_token or page.next_token == next_token:
                break
            next_token = page.next_token

        entries.sort(key=lambda entry: entry.timestamp)
        self.logger.info(
            f"Fetched {len(entries)} events from {log_group} in {pages} page(s)"
        )
        return entries
