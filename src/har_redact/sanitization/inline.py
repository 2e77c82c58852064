"""Inline ``key=value`` detection and redaction.

Composite string values such as URL query strings, form bodies and cookie
headers embed secrets as ``key=value`` segments. This module finds the keys
of those segments and rewrites only the value part of matching segments, so
``client_secret=abc&client_id=app`` keeps its shape after redaction.
"""

from __future__ import annotations

import re
from collections.abc import Collection

# Longer keys are treated as garbage from non key=value text
MAX_KEY_LENGTH = 64

_KEY_CHARS = r"A-Za-z0-9_-"

# A key must not start in the middle of another key-like run and the value
# must be non-empty and not start with "=" (base64 padding). An existing
# redaction marker is consumed as a whole value.
INLINE_KV_PATTERN = re.compile(
    rf"(?<![{_KEY_CHARS}])(?P<key>[{_KEY_CHARS}]+)=(?!=)"
    r"(?P<value>\[[^\[\]]* redacted\]|[^&;\s\"]+)"
)

_MARKER_RE = re.compile(r"^\[[^\[\]]* redacted\]$")


def redaction_marker(name: str) -> str:
    """Build the placeholder that replaces a redacted value.

    Example:
        >>> redaction_marker("Authorization")
        '[Authorization redacted]'
    """
    return f"[{name} redacted]"


def is_redaction_marker(value: str) -> bool:
    """Check if a value is already a redaction marker."""
    return bool(_MARKER_RE.match(value))


def extract_inline_kv_keys(text: str) -> list[str]:
    """Extract the keys of inline ``key=value`` segments.

    Args:
        text: Any string (header value, URL, body text)

    Returns:
        Sorted list of unique keys; keys over 64 characters are dropped

    Example:
        >>> extract_inline_kv_keys("client_secret=abc&client_id=app123")
        ['client_id', 'client_secret']
        >>> extract_inline_kv_keys("no pairs here")
        []
    """
    keys = {
        match.group("key")
        for match in INLINE_KV_PATTERN.finditer(text)
        if len(match.group("key")) <= MAX_KEY_LENGTH
    }
    return sorted(keys)


def redact_inline_kv(text: str, scrub_words: Collection[str]) -> str:
    """Redact the values of inline segments whose key is a scrub word.

    Only the value part of a matching segment is replaced; keys, delimiters and
    other segments are kept as they are.

    Args:
        text: String that may contain ``key=value`` segments
        scrub_words: Lower-cased scrub words

    Returns:
        Text with matching segment values replaced by redaction markers

    Example:
        >>> redact_inline_kv("token=abc&page=2", {"token"})
        'token=[token redacted]&page=2'
    """
    if "=" not in text:
        return text

    def replace(match: re.Match[str]) -> str:
        key = match.group("key")
        value = match.group("value")
        if (
            len(key) > MAX_KEY_LENGTH
            or key.lower() not in scrub_words
            or is_redaction_marker(value)
        ):
            return match.group(0)
        return f"{key}={redaction_marker(key)}"

    return INLINE_KV_PATTERN.sub(replace, text)
