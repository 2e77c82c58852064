"""Validate HAR files for secrets left unredacted before sharing.

Resolves the scrub set exactly as the redactor would and reports every
value the redactor would still change:
- Headers, cookies, query and form parameters named by a scrub word
- Inline key=value segments whose key is a scrub word
- Content of a scrubbed mime type

A sanitized HAR yields no findings. This module has ZERO external
dependencies (stdlib only).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from har_redact.sanitization.har import read_har_file, resolve_redaction_sets
from har_redact.sanitization.inline import INLINE_KV_PATTERN, MAX_KEY_LENGTH, is_redaction_marker
from har_redact.sanitization.scrub import SanitizeConfig
from har_redact.sanitization.walker import NAMED_KINDS, HarField, base_mime_type, iter_har_fields, parse_har


@dataclass
class Finding:
    """An unredacted value.

    Attributes:
        severity: Finding severity ('error' or 'warning')
        location: Where in the HAR the finding was detected
        field: Name of the field or inline key holding the value
        value: The suspicious value (truncated)
        reason: Human-readable explanation of why it was flagged
    """

    severity: str  # "error" or "warning"
    location: str  # Where in the HAR
    field: str  # Field name
    value: str  # The suspicious value (truncated)
    reason: str  # Why it's flagged


def truncate(value: str, max_len: int = 40) -> str:
    """Truncate a value for display.

    Args:
        value: Value to truncate
        max_len: Maximum length

    Returns:
        Truncated value
    """
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."


def check_field(
    har_field: HarField,
    scrub_words: frozenset[str],
    mime_types: frozenset[str],
    findings: list[Finding],
) -> None:
    """Check one walked value for unredacted secrets.

    Args:
        har_field: Value to check
        scrub_words: Lower-cased scrub words
        mime_types: Lower-cased base mime types whose content must be redacted
        findings: List to append findings to
    """
    value = har_field.value
    if not value or is_redaction_marker(value):
        return

    if har_field.kind in NAMED_KINDS and har_field.name and har_field.name.lower() in scrub_words:
        findings.append(
            Finding(
                severity="error",
                location=har_field.location,
                field=har_field.name,
                value=truncate(value),
                reason=f"Sensitive {har_field.kind} '{har_field.name}' with non-redacted value",
            )
        )
        return

    if har_field.kind == "content" and har_field.mime_type:
        mime_type = base_mime_type(har_field.mime_type)
        if mime_type in mime_types:
            findings.append(
                Finding(
                    severity="warning",
                    location=har_field.location,
                    field="content",
                    value=truncate(value),
                    reason=f"Content of scrubbed mime type '{mime_type}'",
                )
            )
            return

    if not har_field.textual:
        return

    for match in INLINE_KV_PATTERN.finditer(value):
        key = match.group("key")
        if len(key) > MAX_KEY_LENGTH or key.lower() not in scrub_words:
            continue
        if is_redaction_marker(match.group("value")):
            continue
        findings.append(
            Finding(
                severity="error",
                location=har_field.location,
                field=key,
                value=truncate(match.group("value")),
                reason=f"Inline key '{key}' with non-redacted value",
            )
        )


def find_unredacted(
    har_data: dict[str, Any],
    config: SanitizeConfig | None = None,
    *,
    custom_patterns: str | None = None,
) -> list[Finding]:
    """Find values in parsed HAR data that sanitizing would still redact.

    Args:
        har_data: Parsed HAR data
        config: Sanitize options the HAR is checked against
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        List of findings in document order (empty if clean)

    Raises:
        HarValidationError: If ``log.entries`` is missing or not an array
    """
    if config is None:
        config = SanitizeConfig()

    _, scrub_words, mime_types = resolve_redaction_sets(har_data, config, custom_patterns=custom_patterns)

    findings: list[Finding] = []
    for har_field in iter_har_fields(har_data, custom_patterns):
        check_field(har_field, scrub_words, mime_types, findings)
    return findings


def validate_har(
    har_path: Path | str,
    config: SanitizeConfig | None = None,
    *,
    custom_patterns: str | None = None,
) -> list[Finding]:
    """Validate a HAR file for unredacted secrets.

    Args:
        har_path: Path to HAR file (.har or .har.gz)
        config: Sanitize options the file is checked against
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        List of findings (empty if clean)

    Raises:
        HarParseError: If the file is not valid JSON
        HarValidationError: If HAR structure is invalid

    Example:
        >>> findings = validate_har("device.sanitized.har")  # doctest: +SKIP
        >>> if findings:
        ...     print(f"Found {len(findings)} issues")
    """
    har_data = parse_har(read_har_file(Path(har_path)))
    return find_unredacted(har_data, config, custom_patterns=custom_patterns)
