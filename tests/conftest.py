"""Pytest configuration and fixtures for har-redact tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from har_redact.patterns import clear_pattern_cache


@pytest.fixture(autouse=True)
def _fresh_pattern_cache():
    """Make sure custom pattern tables never leak between tests."""
    clear_pattern_cache()
    yield
    clear_pattern_cache()


@pytest.fixture
def har_entry():
    """Create a HAR entry for testing."""

    def _create_entry(
        url: str = "http://example.com/",
        headers: list[dict] | None = None,
        cookies: list[dict] | None = None,
        query: list[dict] | None = None,
        response_headers: list[dict] | None = None,
        response_cookies: list[dict] | None = None,
        content: str | None = None,
        mime_type: str = "application/json",
        post_data: dict | None = None,
    ) -> dict:
        entry = {
            "request": {
                "method": "GET",
                "url": url,
                "headers": headers or [],
                "cookies": cookies or [],
                "queryString": query or [],
            },
            "response": {
                "status": 200,
                "statusText": "OK",
                "headers": response_headers or [],
                "cookies": response_cookies or [],
                "content": {"mimeType": mime_type},
            },
        }
        if content is not None:
            entry["response"]["content"]["text"] = content
        if post_data is not None:
            entry["request"]["postData"] = post_data
        return entry

    return _create_entry


@pytest.fixture
def har_document():
    """Wrap entries in a HAR log."""

    def _create_har(*entries: dict) -> dict:
        return {
            "log": {
                "version": "1.2",
                "creator": {"name": "test", "version": "1.0"},
                "entries": list(entries),
            }
        }

    return _create_har


@pytest.fixture
def temp_har_file(tmp_path: Path, har_document):
    """Write HAR entries to a file under tmp_path."""

    def _create_file(*entries: dict, name: str = "test.har") -> Path:
        har_file = tmp_path / name
        har_file.write_text(json.dumps(har_document(*entries)))
        return har_file

    return _create_file
