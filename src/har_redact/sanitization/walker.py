"""HAR document parsing and traversal.

The walker knows the HAR 1.2 paths that can carry secrets and yields one
``HarField`` per string value found there. It never mutates the document;
the redactor and the leak validator write through the ``owner`` reference
of the fields they decide to change.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from har_redact.patterns import load_scrub_patterns
from har_redact.sanitization.inline import extract_inline_kv_keys, is_redaction_marker

_LOGGER = logging.getLogger(__name__)

# Field kinds that carry a name next to their value
NAMED_KINDS = frozenset({"header", "cookie", "query", "param"})


class HarParseError(ValueError):
    """Raised when HAR text cannot be parsed as JSON."""

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None) -> None:
        self.lineno = lineno
        self.colno = colno
        super().__init__(message)


class HarValidationError(HarParseError):
    """Raised when HAR structure is invalid."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        full_message = f"Invalid HAR structure: {message}"
        if path:
            full_message += f" (at {path})"
        super().__init__(full_message)


@dataclass
class HarField:
    """A string value in a HAR document that is a redaction candidate.

    Attributes:
        location: Path of the value, e.g. "entries[0].request.headers[1]"
        kind: One of header, cookie, query, param, url, post_data, content, redirect_url
        owner: JSON object holding the value
        key: Key of the value inside ``owner``
        name: Field name for named kinds (header/cookie/query/param)
        mime_type: Mime type for body kinds
        textual: False for bodies that must not be scanned (binary, base64)
    """

    location: str
    kind: str
    owner: dict[str, Any] = field(repr=False)
    key: str = "value"
    name: str | None = None
    mime_type: str | None = None
    textual: bool = True

    @property
    def value(self) -> str:
        value: str = self.owner[self.key]
        return value

    @value.setter
    def value(self, new_value: str) -> None:
        self.owner[self.key] = new_value


@dataclass
class HarInfo:
    """Summary of the names and inline keys found in a HAR document.

    All lists are sorted and deduplicated.
    """

    entry_count: int = 0
    headers: list[str] = field(default_factory=list)
    cookies: list[str] = field(default_factory=list)
    query_args: list[str] = field(default_factory=list)
    mime_types: list[str] = field(default_factory=list)
    inline_kv_pairs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the summary as a JSON-serializable dict."""
        return {
            "entryCount": self.entry_count,
            "headers": self.headers,
            "cookies": self.cookies,
            "queryArgs": self.query_args,
            "mimeTypes": self.mime_types,
            "inlineKvPairs": self.inline_kv_pairs,
        }


def validate_har_structure(har_data: Any, *, strict: bool = False) -> list[str]:
    """Validate HAR structure against the HAR 1.2 format.

    Args:
        har_data: Parsed HAR data
        strict: If True, also check each entry for recommended fields

    Returns:
        List of validation warnings (empty if valid)

    Raises:
        HarValidationError: If structure is fundamentally invalid (missing log or entries)

    Example:
        >>> validate_har_structure({"log": {"version": "1.2", "creator": {}, "entries": []}})
        []
    """
    warnings: list[str] = []

    if not isinstance(har_data, dict):
        raise HarValidationError("HAR root must be an object", "root")

    if "log" not in har_data:
        raise HarValidationError("Missing required 'log' key", "root")

    log = har_data["log"]
    if not isinstance(log, dict):
        raise HarValidationError("'log' must be an object", "log")

    if "entries" not in log:
        raise HarValidationError("Missing required 'entries' key", "log")

    entries = log["entries"]
    if not isinstance(entries, list):
        raise HarValidationError("'entries' must be an array", "log.entries")

    if "version" not in log:
        warnings.append("Missing log.version (recommended)")
    if "creator" not in log:
        warnings.append("Missing log.creator (recommended)")

    if strict:
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                warnings.append(f"Entry {i} is not an object")
                continue

            if "request" not in entry:
                warnings.append(f"Entry {i} missing 'request'")
            elif isinstance(entry["request"], dict):
                req = entry["request"]
                if "method" not in req:
                    warnings.append(f"Entry {i} request missing 'method'")
                if "url" not in req:
                    warnings.append(f"Entry {i} request missing 'url'")

            if "response" not in entry:
                warnings.append(f"Entry {i} missing 'response'")
            elif isinstance(entry["response"], dict):
                resp = entry["response"]
                if "status" not in resp:
                    warnings.append(f"Entry {i} response missing 'status'")

    return warnings


def parse_har(har_text: str) -> dict[str, Any]:
    """Parse HAR text and check its minimal shape.

    Args:
        har_text: HAR document as JSON text

    Returns:
        Parsed HAR data

    Raises:
        HarParseError: If the text is not valid JSON
        HarValidationError: If ``log.entries`` is missing or not an array
    """
    try:
        har_data = json.loads(har_text)
    except json.JSONDecodeError as e:
        raise HarParseError(f"Invalid JSON: {e.msg} at line {e.lineno}", e.lineno, e.colno) from e

    for warning in validate_har_structure(har_data):
        _LOGGER.debug("HAR validation: %s", warning)

    result: dict[str, Any] = har_data
    return result


def base_mime_type(mime_type: str) -> str:
    """Strip parameters from a mime type ("text/html; charset=utf-8" -> "text/html")."""
    return mime_type.split(";", 1)[0].strip().lower()


def is_textual_mime_type(mime_type: str, custom_patterns: str | None = None) -> bool:
    """Check if content of a mime type is text that may hold key=value pairs.

    An empty mime type is treated as text.
    """
    base = base_mime_type(mime_type)
    if not base:
        return True
    markers = load_scrub_patterns(custom_patterns).get("textual_mime_types", [])
    return any(base.startswith(m) if m.endswith("/") else (base == m or base.endswith(m)) for m in markers)


def _objects(parent: dict[str, Any], key: str, location: str) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield (index, item) for the object items of an optional array."""
    items = parent.get(key)
    if items is None:
        _LOGGER.debug("%s.%s missing, treating as empty", location, key)
        return
    if not isinstance(items, list):
        _LOGGER.debug("%s.%s is not an array, treating as empty", location, key)
        return
    for i, item in enumerate(items):
        if isinstance(item, dict):
            yield i, item
        else:
            _LOGGER.debug("%s.%s[%d] is not an object, skipping", location, key, i)


def _named_fields(parent: dict[str, Any], key: str, kind: str, location: str) -> Iterator[HarField]:
    for i, item in _objects(parent, key, location):
        if isinstance(item.get("name"), str) and isinstance(item.get("value"), str):
            yield HarField(f"{location}.{key}[{i}]", kind, item, "value", name=item["name"])


def _iter_request(req: dict[str, Any], location: str, custom_patterns: str | None) -> Iterator[HarField]:
    if isinstance(req.get("url"), str):
        yield HarField(f"{location}.url", "url", req, "url")

    yield from _named_fields(req, "headers", "header", location)
    yield from _named_fields(req, "cookies", "cookie", location)
    yield from _named_fields(req, "queryString", "query", location)

    post_data = req.get("postData")
    if isinstance(post_data, dict):
        post_location = f"{location}.postData"
        yield from _named_fields(post_data, "params", "param", post_location)
        if isinstance(post_data.get("text"), str):
            mime_type = post_data.get("mimeType") or ""
            yield HarField(
                f"{post_location}.text",
                "post_data",
                post_data,
                "text",
                mime_type=mime_type,
                textual=is_textual_mime_type(mime_type, custom_patterns),
            )


def _iter_response(resp: dict[str, Any], location: str, custom_patterns: str | None) -> Iterator[HarField]:
    yield from _named_fields(resp, "headers", "header", location)
    yield from _named_fields(resp, "cookies", "cookie", location)

    content = resp.get("content")
    if isinstance(content, dict) and isinstance(content.get("text"), str):
        mime_type = content.get("mimeType") or ""
        textual = content.get("encoding") != "base64" and is_textual_mime_type(mime_type, custom_patterns)
        yield HarField(
            f"{location}.content.text",
            "content",
            content,
            "text",
            mime_type=mime_type,
            textual=textual,
        )

    if isinstance(resp.get("redirectURL"), str):
        yield HarField(f"{location}.redirectURL", "redirect_url", resp, "redirectURL")


def iter_har_fields(har_data: dict[str, Any], custom_patterns: str | None = None) -> Iterator[HarField]:
    """Yield every redaction candidate in a HAR document, in document order.

    Missing or mistyped optional arrays are treated as empty, and entries,
    requests or responses that are not objects are skipped.

    Args:
        har_data: Parsed HAR data with a valid ``log.entries`` array
        custom_patterns: Optional path to custom patterns file

    Yields:
        HarField for each string value at a known HAR path
    """
    for i, entry in enumerate(har_data["log"]["entries"]):
        location = f"entries[{i}]"
        if not isinstance(entry, dict):
            _LOGGER.debug("%s is not an object, skipping", location)
            continue

        req = entry.get("request")
        if isinstance(req, dict):
            yield from _iter_request(req, f"{location}.request", custom_patterns)
        else:
            _LOGGER.debug("%s has no request object", location)

        resp = entry.get("response")
        if isinstance(resp, dict):
            yield from _iter_response(resp, f"{location}.response", custom_patterns)
        else:
            _LOGGER.debug("%s has no response object", location)


def summarize_har(har_data: dict[str, Any], custom_patterns: str | None = None) -> HarInfo:
    """Collect names, mime types and inline keys from a parsed HAR document.

    Args:
        har_data: Parsed HAR data
        custom_patterns: Optional path to custom patterns file

    Returns:
        HarInfo summary

    Raises:
        HarValidationError: If ``log.entries`` is missing or not an array
    """
    validate_har_structure(har_data)

    headers: set[str] = set()
    cookies: set[str] = set()
    query_args: set[str] = set()
    mime_types: set[str] = set()
    inline_keys: set[str] = set()

    names_by_kind = {"header": headers, "cookie": cookies, "query": query_args}

    for har_field in iter_har_fields(har_data, custom_patterns):
        if har_field.name is not None and har_field.kind in names_by_kind:
            names_by_kind[har_field.kind].add(har_field.name)
        if har_field.kind == "content" and har_field.mime_type:
            mime_types.add(base_mime_type(har_field.mime_type))
        if har_field.textual and not is_redaction_marker(har_field.value):
            inline_keys.update(extract_inline_kv_keys(har_field.value))

    return HarInfo(
        entry_count=len(har_data["log"]["entries"]),
        headers=sorted(headers),
        cookies=sorted(cookies),
        query_args=sorted(query_args),
        mime_types=sorted(mime_types),
        inline_kv_pairs=sorted(inline_keys),
    )


def get_har_info(har_text: str, custom_patterns: str | None = None) -> HarInfo:
    """Summarize a HAR document given as text.

    Args:
        har_text: HAR document as JSON text
        custom_patterns: Optional path to custom patterns file

    Returns:
        HarInfo whose ``inline_kv_pairs`` lists every inline key, sorted

    Raises:
        HarParseError: If the text is not valid JSON
        HarValidationError: If ``log.entries`` is missing or not an array

    Example:
        >>> info = get_har_info('{"log": {"entries": []}}')
        >>> info.inline_kv_pairs
        []
    """
    return summarize_har(parse_har(har_text), custom_patterns)
