"""
Unit tests for log entries and message bodies
"""
from lambda_logs.core import LogEntry, LogLevel, PlainMessage, StructuredMessage, format_json, line_count
from lambda_logs.core.log_entry import split_lines


def test_json_message_is_structured():
    entry = LogEntry(timestamp=0, message='{"a":1,"b":2}')
    assert entry.is_structured
    assert isinstance(entry.body, StructuredMessage)
    assert entry.lines == ("{", '  "a": 1,', '  "b": 2', "}")
    assert line_count(entry) == 4


def test_plain_message_lines():
    entry = LogEntry(timestamp=0, message="first\nsecond\n")
    assert isinstance(entry.body, PlainMessage)
    assert entry.line_count == 2


def test_empty_message_has_no_lines():
    assert LogEntry(timestamp=0, message="").line_count == 0


def test_invalid_json_stays_plain():
    entry = LogEntry(timestamp=0, message="{not json")
    assert not entry.is_structured
    assert entry.lines == ("{not json",)


def test_json_scalar_is_structured():
    entry = LogEntry(timestamp=0, message="42")
    assert entry.is_structured
    assert entry.line_count == 1


def test_format_json_nesting():
    lines = format_json({"outer": {"inner": [1]}})
    assert lines == [
        "{",
        '  "outer": {',
        '    "inner": [',
        "      1",
        "    ]",
        "  }",
        "}",
    ]


def test_level_from_runtime_line():
    assert LogEntry(0, "2024-03-15T10:00:00Z abc ERROR Something broke").level is LogLevel.ERROR
    assert LogEntry(0, "[WARNING] slow response").level is LogLevel.WARNING
    assert LogEntry(0, "just text").level is LogLevel.UNKNOWN


def test_level_of_platform_lines():
    assert LogEntry(0, "START RequestId: abc Version: $LATEST").level is LogLevel.PLATFORM
    assert LogEntry(0, "REPORT RequestId: abc Duration: 1 ms").level is LogLevel.PLATFORM


def test_level_from_json_document():
    assert LogEntry(0, '{"level": "warn", "msg": "x"}').level is LogLevel.WARNING
    assert LogEntry(0, '{"levelname": "CRITICAL"}').level is LogLevel.CRITICAL
    assert LogEntry(0, '[1, 2]').level is LogLevel.UNKNOWN


def test_summary_skips_blank_lines():
    assert LogEntry(0, "\n  \n  hello  \nworld").summary == "hello"


def test_only_newlines_end_lines():
    entry = LogEntry(timestamp=0, message="progress 10%\rprogress 20%\x0cdone")
    assert entry.line_count == 1
    assert entry.lines == ("progress 10%\rprogress 20%\x0cdone",)


def test_crlf_and_trailing_newline():
    assert split_lines("first\r\nsecond\r\n") == ["first", "second"]
    assert split_lines("one\n\ntwo") == ["one", "", "two"]
    assert split_lines("\n") == [""]
    assert split_lines("") == []


def test_json_line_separator_stays_inside_string():
    entry = LogEntry(timestamp=0, message='{"msg": "a\\u2028b"}')
    assert entry.line_count == 3


def test_deeply_nested_message_falls_back_to_plain():
    message = "[" * 5000 + "]" * 5000
    entry = LogEntry(timestamp=0, message=message)
    assert not entry.is_structured
    assert entry.level is LogLevel.UNKNOWN
    assert entry.line_count == 1


def test_structured_body_too_deep_to_format_uses_raw_text(mocker):
    mocker.patch("lambda_logs.core.log_entry.json.dumps", side_effect=RecursionError)
    entry = LogEntry(timestamp=0, message='{"a": [1]}')
    assert entry.is_structured
    assert entry.lines == ('{"a": [1]}',)
