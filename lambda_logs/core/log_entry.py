"""
Log Entry Module - CloudWatch log events and their message bodies

Handles:
- Immutable log event values (timestamp, message, ingestion time)
- Plain vs structured (JSON) message bodies, parsed once per entry
- Deterministic pretty-printing used for expanded-mode line counts
- Log level detection for Lambda runtime and JSON log formats
"""
import json
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import cached_property
from typing import Any, List, Optional, Tuple, Union

JSON_INDENT = 2


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    PLATFORM = "PLATFORM"
    UNKNOWN = "UNKNOWN"

    @property
    def color(self) -> str:
        """Get color representation for this log level"""
        colors = {
            LogLevel.DEBUG: "blue",
            LogLevel.INFO: "green",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
            LogLevel.CRITICAL: "red bold",
            LogLevel.PLATFORM: "dim",
            LogLevel.UNKNOWN: "white",
        }
        return colors.get(self, "white")


# Lambda runtime lines: START/END/REPORT RequestId ..., INIT_START ...
PLATFORM_PATTERN = re.compile(r'^(START|END|REPORT|INIT_START|INIT_REPORT|EXTENSION)\b')
LEVEL_PATTERN = re.compile(r'\b(DEBUG|INFO|WARN|WARNING|ERROR|FATAL|CRITICAL)\b')
LEVEL_KEYS = ("level", "levelname", "severity", "log_level")


def parse_level(level_str: Optional[str]) -> LogLevel:
    """Parse log level from string"""
    if not level_str:
        return LogLevel.UNKNOWN

    level_str = level_str.strip().upper()
    try:
        return LogLevel[level_str]
    except KeyError:
        # Check for partial matches
        if 'ERR' in level_str:
            return LogLevel.ERROR
        elif 'WARN' in level_str:
            return LogLevel.WARNING
        elif 'INFO' in level_str:
            return LogLevel.INFO
        elif 'DEBUG' in level_str or 'TRACE' in level_str:
            return LogLevel.DEBUG
        elif 'CRIT' in level_str or 'FATAL' in level_str:
            return LogLevel.CRITICAL

        return LogLevel.UNKNOWN


def split_lines(text: str) -> List[str]:
    """
    Split text on newlines only

    Both ``\\n`` and ``\\r\\n`` end a line and a trailing line ending does not
    start an extra line. Other separators such as a bare ``\\r`` or a form
    feed stay inside the line.
    """
    *lines, last = text.split("\n")
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def format_json(document: Any) -> List[str]:
    """
    Pretty-print a JSON document into display lines

    One nesting level per indent step and one key/value or bracket per
    line. The output depends only on the document, so every scroll bound
    computed from it agrees with what is drawn.
    """
    return split_lines(json.dumps(document, indent=JSON_INDENT, ensure_ascii=False))


@dataclass(frozen=True)
class PlainMessage:
    """Message that is not a JSON document"""
    text: str

    def lines(self) -> List[str]:
        return split_lines(self.text)


@dataclass(frozen=True, eq=False)
class StructuredMessage:
    """Message that parsed as a JSON document"""
    document: Any
    text: str = ""

    def lines(self) -> List[str]:
        try:
            return format_json(self.document)
        except RecursionError:
            # Too deeply nested to pretty-print; show it as received
            return split_lines(self.text)


MessageBody = Union[PlainMessage, StructuredMessage]


def parse_message(message: str) -> MessageBody:
    """Classify a raw message as structured (JSON) or plain text"""
    try:
        return StructuredMessage(json.loads(message), message)
    except (ValueError, RecursionError):
        return PlainMessage(message)


@dataclass(frozen=True)
class LogEntry:
    """A single CloudWatch log event"""
    timestamp: int
    message: str
    ingestion_time: int = 0

    @cached_property
    def body(self) -> MessageBody:
        return parse_message(self.message)

    @cached_property
    def lines(self) -> Tuple[str, ...]:
        """Rendered lines of the expanded view"""
        return tuple(self.body.lines())

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_structured(self) -> bool:
        return isinstance(self.body, StructuredMessage)

    @property
    def logged_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000)

    @cached_property
    def level(self) -> LogLevel:
        body = self.body
        if isinstance(body, StructuredMessage):
            if isinstance(body.document, dict):
                for key in LEVEL_KEYS:
                    value = body.document.get(key)
                    if isinstance(value, str):
                        return parse_level(value)
            return LogLevel.UNKNOWN

        first_line = self.summary
        if PLATFORM_PATTERN.match(first_line):
            return LogLevel.PLATFORM
        match = LEVEL_PATTERN.search(first_line)
        return parse_level(match.group(1)) if match else LogLevel.UNKNOWN

    @property
    def summary(self) -> str:
        """First non-blank line of the message, for the collapsed list"""
        for line in split_lines(self.message):
            if line.strip():
                return line.strip()
        return ""


def line_count(entry: LogEntry) -> int:
    """Number of lines the expanded view renders for an entry"""
    return entry.line_count
