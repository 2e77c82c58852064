"""Tests for HAR parsing, traversal and summaries."""

from __future__ import annotations

import json

import pytest

from har_redact.sanitization.walker import (
    HarParseError,
    HarValidationError,
    get_har_info,
    is_textual_mime_type,
    iter_har_fields,
    parse_har,
    summarize_har,
    validate_har_structure,
)

# fmt: off
INVALID_STRUCTURE_CASES = [
    ("[]",                              "root",          "root_not_object"),
    ('{"version": "1.2"}',              "root",          "missing_log"),
    ('{"log": []}',                     "log",           "log_not_object"),
    ('{"log": {}}',                     "log",           "missing_entries"),
    ('{"log": {"entries": "nope"}}',    "log.entries",   "entries_not_array"),
]
# fmt: on

# fmt: off
TEXTUAL_MIME_CASES = [
    ("text/html",                           True,   "html"),
    ("text/plain; charset=utf-8",           True,   "text_with_params"),
    ("application/json",                    True,   "json"),
    ("application/vnd.api+json",            True,   "json_suffix"),
    ("application/x-www-form-urlencoded",   True,   "form"),
    ("",                                    True,   "missing"),
    ("image/png",                           False,  "png"),
    ("application/octet-stream",            False,  "binary"),
    ("font/woff2",                          False,  "font"),
]
# fmt: on


class TestParseHar:
    """Tests for HAR text parsing."""

    def test_parses_valid_har(self) -> None:
        """Test a minimal HAR parses."""
        assert parse_har('{"log": {"entries": []}}') == {"log": {"entries": []}}

    def test_invalid_json(self) -> None:
        """Test invalid JSON raises HarParseError with position."""
        with pytest.raises(HarParseError, match="Invalid JSON") as exc_info:
            parse_har("{not valid json")
        assert exc_info.value.lineno == 1
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    @pytest.mark.parametrize(
        ("text", "path", "desc"),
        INVALID_STRUCTURE_CASES,
        ids=[c[2] for c in INVALID_STRUCTURE_CASES],
    )
    def test_invalid_structure(self, text: str, path: str, desc: str) -> None:
        """Test shape errors raise HarValidationError naming the bad node."""
        with pytest.raises(HarValidationError) as exc_info:
            parse_har(text)
        assert exc_info.value.path == path, desc

    def test_validation_error_is_parse_error(self) -> None:
        """Test callers can catch both errors as HarParseError."""
        with pytest.raises(HarParseError):
            parse_har('{"log": {}}')


class TestValidateHarStructure:
    """Tests for HAR structure warnings."""

    def test_recommended_fields_warn(self) -> None:
        """Test missing version and creator produce warnings."""
        warnings = validate_har_structure({"log": {"entries": []}})
        assert "Missing log.version (recommended)" in warnings
        assert "Missing log.creator (recommended)" in warnings

    def test_strict_checks_entries(self) -> None:
        """Test strict mode reports entry problems."""
        har = {"log": {"version": "1.2", "creator": {}, "entries": ["x", {"request": {}}]}}
        warnings = validate_har_structure(har, strict=True)
        assert "Entry 0 is not an object" in warnings
        assert "Entry 1 request missing 'method'" in warnings
        assert "Entry 1 missing 'response'" in warnings


class TestIterHarFields:
    """Tests for the HAR walker."""

    def test_walks_all_known_paths(self, har_entry, har_document) -> None:
        """Test every supported location is yielded in document order."""
        entry = har_entry(
            url="http://example.com/?a=1",
            headers=[{"name": "Accept", "value": "*/*"}],
            cookies=[{"name": "sid", "value": "abc"}],
            query=[{"name": "a", "value": "1"}],
            response_headers=[{"name": "Server", "value": "x"}],
            response_cookies=[{"name": "sid", "value": "def"}],
            content="ok",
            post_data={"mimeType": "text/plain", "text": "body", "params": [{"name": "p", "value": "v"}]},
        )
        entry["response"]["redirectURL"] = ""
        kinds = [f.kind for f in iter_har_fields(har_document(entry))]
        assert kinds == [
            "url",
            "header",
            "cookie",
            "query",
            "param",
            "post_data",
            "header",
            "cookie",
            "content",
            "redirect_url",
        ]

    def test_locations(self, har_entry, har_document) -> None:
        """Test fields carry a readable location."""
        entry = har_entry(headers=[{"name": "A", "value": "1"}, {"name": "B", "value": "2"}])
        fields = [f for f in iter_har_fields(har_document(entry, entry)) if f.kind == "header"]
        assert [f.location for f in fields] == [
            "entries[0].request.headers[0]",
            "entries[0].request.headers[1]",
            "entries[1].request.headers[0]",
            "entries[1].request.headers[1]",
        ]
        assert fields[1].name == "B"
        assert fields[1].value == "2"

    def test_setter_writes_through(self, har_entry, har_document) -> None:
        """Test assigning a field value updates the document."""
        har = har_document(har_entry(headers=[{"name": "A", "value": "1"}]))
        header = next(f for f in iter_har_fields(har) if f.kind == "header")
        header.value = "changed"
        assert har["log"]["entries"][0]["request"]["headers"][0]["value"] == "changed"

    def test_missing_collections_treated_as_empty(self) -> None:
        """Test entries without optional arrays are walked without errors."""
        har = {"log": {"entries": [{"request": {"url": "http://a/"}, "response": {}}]}}
        fields = list(iter_har_fields(har))
        assert [f.kind for f in fields] == ["url"]

    def test_malformed_items_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test non-object entries and items are skipped and logged at debug level."""
        har = {
            "log": {
                "entries": [
                    "not an entry",
                    {
                        "request": {"headers": "not a list", "cookies": [None, {"name": "c", "value": "v"}]},
                        "response": None,
                    },
                ]
            }
        }
        with caplog.at_level("DEBUG", logger="har_redact.sanitization.walker"):
            fields = list(iter_har_fields(har))
        assert [(f.kind, f.name) for f in fields] == [("cookie", "c")]
        assert "not an object" in caplog.text

    def test_non_string_values_skipped(self) -> None:
        """Test header values that are not strings are not candidates."""
        har = {"log": {"entries": [{"request": {"headers": [{"name": "X", "value": 5}]}}]}}
        assert list(iter_har_fields(har)) == []

    def test_base64_content_not_textual(self, har_entry, har_document) -> None:
        """Test base64 encoded content is not scanned."""
        entry = har_entry(content="YT1i", mime_type="text/plain")
        entry["response"]["content"]["encoding"] = "base64"
        content = next(f for f in iter_har_fields(har_document(entry)) if f.kind == "content")
        assert content.textual is False

    @pytest.mark.parametrize(
        ("mime_type", "expected", "desc"),
        TEXTUAL_MIME_CASES,
        ids=[c[2] for c in TEXTUAL_MIME_CASES],
    )
    def test_textual_mime_types(self, mime_type: str, expected: bool, desc: str) -> None:
        """Test which mime types are scanned for inline pairs."""
        assert is_textual_mime_type(mime_type) is expected, desc


class TestGetHarInfo:
    """Tests for HAR summaries."""

    def test_inline_pairs_from_header(self, har_entry, har_document) -> None:
        """Test inline keys in a header value are reported."""
        entry = har_entry(
            headers=[{"name": "X-Custom-Auth", "value": "client_secret=mysupersecret&client_id=app123"}],
        )
        info = get_har_info(json.dumps(har_document(entry)))
        assert "client_secret" in info.inline_kv_pairs
        assert "client_id" in info.inline_kv_pairs

    def test_union_across_document(self, har_entry, har_document) -> None:
        """Test keys are merged over all walked values, sorted and unique."""
        first = har_entry(url="http://a/?state=1&code=2", content='{"next": "/x?page=3"}')
        second = har_entry(
            cookies=[{"name": "sid", "value": "lang=en"}],
            post_data={"mimeType": "application/x-www-form-urlencoded", "text": "code=9&user=me"},
        )
        info = get_har_info(json.dumps(har_document(first, second)))
        assert info.inline_kv_pairs == ["code", "lang", "page", "state", "user"]

    def test_names_and_mime_types(self, har_entry, har_document) -> None:
        """Test header, cookie, query and mime type summaries."""
        entry = har_entry(
            headers=[{"name": "Accept", "value": "*/*"}, {"name": "Accept", "value": "text/html"}],
            cookies=[{"name": "sid", "value": "1"}],
            query=[{"name": "q", "value": "x"}],
            response_headers=[{"name": "Server", "value": "nginx"}],
            content="body",
            mime_type="text/html; charset=utf-8",
        )
        info = get_har_info(json.dumps(har_document(entry)))
        assert info.entry_count == 1
        assert info.headers == ["Accept", "Server"]
        assert info.cookies == ["sid"]
        assert info.query_args == ["q"]
        assert info.mime_types == ["text/html"]

    def test_binary_content_not_scanned(self, har_entry, har_document) -> None:
        """Test non-textual bodies contribute no inline keys."""
        entry = har_entry(content="a=b", mime_type="image/png")
        assert get_har_info(json.dumps(har_document(entry))).inline_kv_pairs == []

    def test_does_not_mutate(self, har_entry, har_document) -> None:
        """Test summarizing leaves the document untouched."""
        har = har_document(har_entry(url="http://a/?token=x"))
        before = json.dumps(har)
        summarize_har(har)
        assert json.dumps(har) == before

    def test_to_dict(self) -> None:
        """Test the JSON summary uses HAR-style keys."""
        info = get_har_info('{"log": {"entries": []}}')
        assert info.to_dict() == {
            "entryCount": 0,
            "headers": [],
            "cookies": [],
            "queryArgs": [],
            "mimeTypes": [],
            "inlineKvPairs": [],
        }

    def test_invalid_text(self) -> None:
        """Test invalid input raises HarParseError."""
        with pytest.raises(HarParseError):
            get_har_info("not json")
