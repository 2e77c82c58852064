"""Redaction utilities for HAR files.

This module provides secret removal from HAR files with ZERO external
dependencies (stdlib only).

Exports:
    - sanitize: Redact secrets from HAR text
    - sanitize_har: Redact secrets from parsed HAR data
    - sanitize_har_file: Sanitize a HAR file on disk
    - get_har_info: Summarize names and inline keys of a HAR document
    - extract_inline_kv_keys: Find keys of inline key=value segments
    - resolve_scrub_set: Merge configured, default and discovered scrub words
"""

from __future__ import annotations

from har_redact.sanitization.har import (
    DEFAULT_MAX_HAR_SIZE,
    HarSizeError,
    read_har_file,
    redact_field,
    sanitize,
    sanitize_har,
    sanitize_har_file,
)
from har_redact.sanitization.inline import (
    MAX_KEY_LENGTH,
    extract_inline_kv_keys,
    is_redaction_marker,
    redact_inline_kv,
    redaction_marker,
)
from har_redact.sanitization.scrub import (
    SanitizeConfig,
    default_scrub_words,
    resolve_mime_types,
    resolve_scrub_set,
)
from har_redact.sanitization.walker import (
    HarField,
    HarInfo,
    HarParseError,
    HarValidationError,
    get_har_info,
    iter_har_fields,
    parse_har,
    summarize_har,
    validate_har_structure,
)

__all__ = [
    # Redaction
    "sanitize",
    "sanitize_har",
    "sanitize_har_file",
    "read_har_file",
    "redact_field",
    "SanitizeConfig",
    # Inline key=value handling
    "extract_inline_kv_keys",
    "redact_inline_kv",
    "redaction_marker",
    "is_redaction_marker",
    "MAX_KEY_LENGTH",
    # Scrub set
    "resolve_scrub_set",
    "resolve_mime_types",
    "default_scrub_words",
    # Walking
    "get_har_info",
    "summarize_har",
    "iter_har_fields",
    "parse_har",
    "validate_har_structure",
    "HarField",
    "HarInfo",
    # Size limits and errors
    "DEFAULT_MAX_HAR_SIZE",
    "HarParseError",
    "HarSizeError",
    "HarValidationError",
]
