"""
Unit tests for whole-keyword AND filtering
"""
from lambda_logs.core import filter_items, parse_keywords


def test_parse_keywords_lowercases_and_splits():
    assert parse_keywords("  Error   TIMEOUT ") == ["error", "timeout"]
    assert parse_keywords("   ") == []


def test_filter_requires_every_keyword():
    items = ["error A", "warn B", "error B"]
    assert filter_items(items, "error") == ["error A", "error B"]
    assert filter_items(items, "error b") == ["error B"]
    assert filter_items(items, "B ERROR") == ["error B"]


def test_blank_filter_keeps_everything_in_order():
    items = ["c", "a", "b"]
    assert filter_items(items, "") == items
    assert filter_items(items, "  ") == items


def test_filter_matches_substrings_case_insensitively():
    assert filter_items(["RequestTimeout"], "timeout") == ["RequestTimeout"]
    assert filter_items(["abc"], "abd") == []

