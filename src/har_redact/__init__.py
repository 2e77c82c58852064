"""HAR secret redaction library.

This library provides tools for:
- Redacting credentials, tokens and other secrets from HAR files
- Summarizing the header, cookie, query and inline key names in a HAR
- Validating HAR files for unredacted secrets before sharing

Core redaction has ZERO dependencies (only stdlib).
The optional CLI requires: typer (cli).

Example usage:
    from har_redact import SanitizeConfig, get_har_info, sanitize

    # Redact with the default scrub list
    clean_text = sanitize(har_text)

    # Redact exactly these names (plus inline keys found in the document)
    clean_text = sanitize(har_text, SanitizeConfig(scrub_words=["client_secret"]))

    # Inspect what would be redacted
    info = get_har_info(har_text)
    print(info.inline_kv_pairs)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export public API for convenience
from har_redact.sanitization import (
    HarParseError,
    HarValidationError,
    SanitizeConfig,
    extract_inline_kv_keys,
    get_har_info,
    resolve_scrub_set,
    sanitize,
    sanitize_har,
    sanitize_har_file,
)

__all__ = [
    "__version__",
    "HarParseError",
    "HarValidationError",
    "SanitizeConfig",
    "extract_inline_kv_keys",
    "get_har_info",
    "resolve_scrub_set",
    "sanitize",
    "sanitize_har",
    "sanitize_har_file",
]
