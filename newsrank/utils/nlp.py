"""
Text utilities for newsrank.

Everything here is forgiving: ``None`` and non-string input are treated as
empty text so that scoring degrades to zero instead of failing.
"""
import re
from typing import Any, Iterable

from bs4 import BeautifulSoup

WORDS_PER_MINUTE = 200

_HTML_START = re.compile(r'^\s*<\w+')


def as_text(value: Any) -> str:
    """
    Coerce a raw field value to a string.

    Args:
        value: Field value as received from the feed

    Returns:
        The string, or "" for None and non-text values
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def strip_html(text: str) -> str:
    """
    Reduce an HTML fragment to its visible text.

    Plain text is returned unchanged.
    """
    if not text or not _HTML_START.match(text):
        return text
    soup = BeautifulSoup(text, 'html.parser')
    for element in soup(['script', 'style']):
        element.decompose()
    return re.sub(r'\s+', ' ', soup.get_text(separator=' ')).strip()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in the lower-cased text."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def count_matches(text: str, keywords: Iterable[str]) -> int:
    """Number of distinct keywords present in the text (substring, case-insensitive)."""
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lowered)


def count_occurrences(text: str, keywords: Iterable[str]) -> int:
    """Total non-overlapping occurrences of all keywords in the text."""
    lowered = text.lower()
    return sum(lowered.count(keyword.lower()) for keyword in keywords if keyword)


def word_count(text: str) -> int:
    return len(text.split())


def estimate_reading_time(text: str) -> int:
    """
    Estimated reading time in minutes, never less than one.
    """
    return max(1, word_count(text) // WORDS_PER_MINUTE)
