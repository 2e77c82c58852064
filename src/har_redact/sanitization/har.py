"""HAR file redaction.

This module replaces secret values in HAR (HTTP Archive) documents while
preserving everything needed for debugging: entries, their order, and every
header, cookie and query parameter name stay as they are. Values are replaced
with ``[<name> redacted]`` markers.

Three rules apply to each walked value:

1. A header, cookie, query or form parameter whose name is a scrub word has
   its whole value replaced.
2. Content of a scrubbed mime type (JavaScript by default) is replaced.
3. Any other string gets segment-local redaction of embedded ``key=value``
   pairs whose key is a scrub word.

Inline keys found anywhere in the document are always scrub words, so
sanitizing already sanitized output changes nothing.
"""

from __future__ import annotations

import copy
import gzip
import json
import logging
from typing import TYPE_CHECKING, Any

from har_redact.sanitization.inline import is_redaction_marker, redact_inline_kv, redaction_marker
from har_redact.sanitization.scrub import (
    SanitizeConfig,
    resolve_mime_types,
    resolve_scrub_set,
    selected_field_names,
)
from har_redact.sanitization.walker import (
    NAMED_KINDS,
    HarField,
    HarInfo,
    base_mime_type,
    iter_har_fields,
    parse_har,
    summarize_har,
    validate_har_structure,
)

if TYPE_CHECKING:
    from pathlib import Path

_LOGGER = logging.getLogger(__name__)

# Default maximum HAR file size (100 MB)
DEFAULT_MAX_HAR_SIZE = 100 * 1024 * 1024


class HarSizeError(ValueError):
    """Raised when HAR file exceeds size limit."""

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"HAR file size ({size:,} bytes) exceeds limit ({max_size:,} bytes). "
            f"Use max_size parameter to increase or set to None to disable."
        )


def redact_field(har_field: HarField, scrub_words: frozenset[str], mime_types: frozenset[str]) -> bool:
    """Redact a single walked value in-place.

    Args:
        har_field: Field to redact
        scrub_words: Lower-cased scrub words
        mime_types: Lower-cased base mime types whose content is replaced

    Returns:
        True if the value changed
    """
    original = har_field.value

    if har_field.kind in NAMED_KINDS and har_field.name is not None:
        if har_field.name.lower() in scrub_words:
            har_field.value = redaction_marker(har_field.name)
            return har_field.value != original

    if har_field.kind == "content" and har_field.mime_type:
        if base_mime_type(har_field.mime_type) in mime_types:
            if original and not is_redaction_marker(original):
                har_field.value = redaction_marker(base_mime_type(har_field.mime_type))
                return True
            return False

    if not har_field.textual:
        return False

    har_field.value = redact_inline_kv(original, scrub_words)
    return har_field.value != original


def resolve_redaction_sets(
    har_data: dict[str, Any],
    config: SanitizeConfig,
    *,
    custom_patterns: str | None = None,
) -> tuple[HarInfo, frozenset[str], frozenset[str]]:
    """Summarize a document and resolve what gets redacted in it.

    Args:
        har_data: Parsed HAR data
        config: Sanitize options
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        Tuple of (summary, scrub words, scrubbed mime types)

    Raises:
        HarValidationError: If ``log.entries`` is missing or not an array
    """
    info = summarize_har(har_data, custom_patterns)
    scrub_words = resolve_scrub_set(
        config,
        info.inline_kv_pairs,
        names=selected_field_names(config, info),
        custom_patterns=custom_patterns,
    )
    mime_types = resolve_mime_types(config, info, custom_patterns=custom_patterns)
    return info, scrub_words, mime_types


def sanitize_har(
    har_data: dict[str, Any],
    config: SanitizeConfig | None = None,
    *,
    custom_patterns: str | None = None,
) -> dict[str, Any]:
    """Redact secrets from parsed HAR data.

    Args:
        har_data: Parsed HAR JSON data (not modified)
        config: Sanitize options (default: default scrub list)
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        Sanitized copy of the HAR data

    Raises:
        HarValidationError: If ``log.entries`` is missing or not an array

    Example:
        >>> har = {"log": {"entries": [{"request": {"headers": [
        ...     {"name": "Authorization", "value": "Bearer abc"}]}}]}}
        >>> sanitize_har(har)["log"]["entries"][0]["request"]["headers"][0]["value"]
        '[Authorization redacted]'
    """
    if config is None:
        config = SanitizeConfig()

    result = copy.deepcopy(har_data)
    info, scrub_words, mime_types = resolve_redaction_sets(result, config, custom_patterns=custom_patterns)

    redacted = 0
    for har_field in iter_har_fields(result, custom_patterns):
        if redact_field(har_field, scrub_words, mime_types):
            redacted += 1

    _LOGGER.debug(
        "Redacted %d values in %d entries (%d scrub words)", redacted, info.entry_count, len(scrub_words)
    )
    return result


def sanitize(
    har_text: str,
    config: SanitizeConfig | None = None,
    *,
    custom_patterns: str | None = None,
) -> str:
    """Redact secrets from HAR text.

    Args:
        har_text: HAR document as JSON text
        config: Sanitize options (default: default scrub list)
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        Sanitized HAR document as indented JSON text

    Raises:
        HarParseError: If the text is not valid JSON
        HarValidationError: If ``log.entries`` is missing or not an array

    Example:
        >>> out = sanitize('{"log": {"entries": [{"request": {"url": "/cb?code=xyz"}}]}}')
        >>> "code=[code redacted]" in out
        True
    """
    sanitized = sanitize_har(parse_har(har_text), config, custom_patterns=custom_patterns)
    return json.dumps(sanitized, indent=2)


def read_har_file(path: str | Path) -> str:
    """Read HAR text from a .har or .har.gz file."""
    path_str = str(path)
    if path_str.endswith(".gz"):
        with gzip.open(path_str, "rt", encoding="utf-8") as f:
            return f.read()
    with open(path_str, encoding="utf-8") as f:
        return f.read()


def sanitize_har_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    config: SanitizeConfig | None = None,
    custom_patterns: str | None = None,
    max_size: int | None = DEFAULT_MAX_HAR_SIZE,
    validate: bool = True,
) -> str:
    """Sanitize a HAR file and write to a new file.

    Args:
        input_path: Path to input HAR file (.har or .har.gz)
        output_path: Path to output file (default: input_path with .sanitized.har suffix)
        config: Sanitize options
        custom_patterns: Optional path to custom patterns JSON file
        max_size: Maximum file size in bytes (default: 100MB). Set to None to disable.
        validate: If True, log HAR structure warnings before processing (default: True)

    Returns:
        Path to the sanitized file

    Raises:
        HarSizeError: If file exceeds max_size limit
        HarParseError: If file is not valid JSON
        HarValidationError: If HAR structure is invalid
        FileNotFoundError: If input file doesn't exist

    Example:
        >>> # sanitize_har_file("device.har")  # Creates device.sanitized.har
        >>> # sanitize_har_file("device.har.gz", "clean.har")  # Creates clean.har
        >>> # sanitize_har_file("large.har", max_size=None)  # No size limit
    """
    from pathlib import Path as PathlibPath

    input_path = PathlibPath(input_path)
    input_str = str(input_path)

    if max_size is not None:
        file_size = input_path.stat().st_size
        if file_size > max_size:
            raise HarSizeError(file_size, max_size)

    if output_path is None:
        stem = input_str
        for suffix in (".gz", ".har"):
            if stem.endswith(suffix):
                stem = stem[: -len(suffix)]
        output_str = stem + ".sanitized.har"
    else:
        output_str = str(output_path)

    har_data = parse_har(read_har_file(input_str))

    if validate:
        for warning in validate_har_structure(har_data):
            _LOGGER.warning("HAR validation: %s", warning)

    sanitized = sanitize_har(har_data, config, custom_patterns=custom_patterns)

    with open(output_str, "w", encoding="utf-8") as f:
        json.dump(sanitized, f, indent=2)

    _LOGGER.info("Sanitized HAR written to: %s", output_str)
    return output_str
