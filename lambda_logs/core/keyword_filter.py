"""
Keyword Filter Module - Whole-keyword AND matching

Shared by the profile/function lists and the log browser so that every
filter box in the application behaves the same way.
"""
from typing import Callable, Iterable, List, TypeVar

T = TypeVar("T")


def parse_keywords(filter_text: str) -> List[str]:
    """
    Split filter text into lowercase keywords

    Args:
        filter_text: Raw text typed by the user

    Returns:
        Keywords in typed order; empty for blank text
    """
    return filter_text.lower().split()


def matches(text: str, keywords: List[str]) -> bool:
    """Check that every keyword is a substring of the lowercased text"""
    haystack = text.lower()
    return all(keyword in haystack for keyword in keywords)


def filter_items(items: Iterable[T], filter_text: str,
                 key: Callable[[T], str] = str) -> List[T]:
    """
    Filter items keeping their original order

    Args:
        items: Candidate items
        filter_text: Raw filter text; blank keeps everything
        key: Function returning the text matched for an item

    Returns:
        Order-preserving subsequence of items matching all keywords
    """
    keywords = parse_keywords(filter_text)
    if not keywords:
        return list(items)
    return [item for item in items if matches(key(item), keywords)]
