"""Scrub set resolution.

Merges the caller's scrub words (or the default table) with the inline keys
discovered in the document being sanitized.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from har_redact.patterns import load_scrub_patterns
from har_redact.sanitization.inline import MAX_KEY_LENGTH
from har_redact.sanitization.walker import HarInfo, base_mime_type

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SanitizeConfig:
    """Options for a sanitize run.

    Attributes:
        scrub_words: Field and inline key names to redact. Empty means the default list.
        scrub_mime_types: Mime types whose content text is redacted wholesale.
            None means the default list.
        all_headers: Also redact every header value
        all_cookies: Also redact every cookie value
        all_query_args: Also redact every query parameter value
        all_mime_types: Redact the content text of every mime type
    """

    scrub_words: Sequence[str] = ()
    scrub_mime_types: Sequence[str] | None = None
    all_headers: bool = False
    all_cookies: bool = False
    all_query_args: bool = False
    all_mime_types: bool = False


def default_scrub_words(custom_patterns: str | None = None) -> list[str]:
    """Return the default scrub word list (custom table entries appended)."""
    return list(load_scrub_patterns(custom_patterns).get("scrub_words", []))


def _normalize(words: Iterable[str], *, source: str) -> set[str]:
    result = set()
    for word in words:
        if not word:
            continue
        if len(word) > MAX_KEY_LENGTH:
            _LOGGER.warning("Ignoring %s scrub word longer than %d characters: %.20s...", source, MAX_KEY_LENGTH, word)
            continue
        result.add(word.lower())
    return result


def resolve_scrub_set(
    config: SanitizeConfig,
    discovered: Iterable[str],
    *,
    names: Iterable[str] = (),
    custom_patterns: str | None = None,
) -> frozenset[str]:
    """Build the set of lower-cased names whose values get redacted.

    Args:
        config: Sanitize options; non-empty ``scrub_words`` replace the default list
        discovered: Inline keys found in the document, always included
        names: Extra field names selected by the ``all_*`` options
        custom_patterns: Optional path to custom patterns file

    Returns:
        Frozen set of scrub words

    Example:
        >>> sorted(resolve_scrub_set(SanitizeConfig(scrub_words=["Token"]), ["page"]))
        ['page', 'token']
    """
    if config.scrub_words:
        scrub = _normalize(config.scrub_words, source="configured")
    else:
        scrub = _normalize(default_scrub_words(custom_patterns), source="default")

    scrub |= {key.lower() for key in discovered if key and len(key) <= MAX_KEY_LENGTH}
    scrub |= _normalize(names, source="field")
    return frozenset(scrub)


def resolve_mime_types(
    config: SanitizeConfig,
    info: HarInfo,
    *,
    custom_patterns: str | None = None,
) -> frozenset[str]:
    """Build the set of base mime types whose content is redacted wholesale.

    Args:
        config: Sanitize options
        info: Summary of the document being sanitized
        custom_patterns: Optional path to custom patterns file

    Returns:
        Frozen set of lower-cased base mime types
    """
    if config.all_mime_types:
        return frozenset(info.mime_types)
    if config.scrub_mime_types is None:
        mime_types: Iterable[str] = load_scrub_patterns(custom_patterns).get("mime_types", [])
    else:
        mime_types = config.scrub_mime_types
    return frozenset(base_mime_type(m) for m in mime_types if m)


def selected_field_names(config: SanitizeConfig, info: HarInfo) -> list[str]:
    """Return the header, cookie and query names selected by the ``all_*`` options."""
    names: list[str] = []
    if config.all_headers:
        names.extend(info.headers)
    if config.all_cookies:
        names.extend(info.cookies)
    if config.all_query_args:
        names.extend(info.query_args)
    return names
