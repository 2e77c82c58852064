"""Pattern table loading for redaction.

This module loads the default scrub words and mime type tables from the
bundled ``scrub.json`` and merges user supplied tables into them.
"""

from __future__ import annotations

import json
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Any

_LOGGER = logging.getLogger(__name__)

# Maximum number of cache entries to prevent unbounded growth
_MAX_CACHE_SIZE = 20

# Lists in scrub.json that a custom table may extend
_MERGEABLE_LISTS = ("scrub_words", "mime_types", "textual_mime_types")

# LRU cache for loaded tables (OrderedDict for LRU behavior)
_pattern_cache: OrderedDict[str, Any] = OrderedDict()


def _cache_get(key: str) -> Any | None:
    """Get value from cache, moving it to end (most recently used)."""
    if key in _pattern_cache:
        _pattern_cache.move_to_end(key)
        return _pattern_cache[key]
    return None


def _cache_set(key: str, value: Any) -> None:
    """Set value in cache with LRU eviction."""
    if key in _pattern_cache:
        _pattern_cache.move_to_end(key)
    _pattern_cache[key] = value
    while len(_pattern_cache) > _MAX_CACHE_SIZE:
        evicted_key = next(iter(_pattern_cache))
        _pattern_cache.pop(evicted_key)
        _LOGGER.debug("Pattern cache evicted: %s", evicted_key)


class PatternLoadError(Exception):
    """Raised when pattern files cannot be loaded."""


def _get_builtin_path(filename: str) -> Path:
    """Get path to a built-in pattern file.

    Args:
        filename: Name of the pattern file (e.g., "scrub.json")

    Returns:
        Path to the built-in pattern file
    """
    return Path(__file__).parent / filename


def _normalize_path(path: Path | str | None) -> str | None:
    """Normalize a path to a string for cache key consistency."""
    if path is None:
        return None
    return str(Path(path).resolve())


def load_json_file(path: Path | str) -> dict[str, Any]:
    """Load a JSON file with error handling.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        PatternLoadError: If file cannot be read or parsed, or is not an object
    """
    path_str = str(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise PatternLoadError(f"Pattern file not found: {path_str}") from e
    except PermissionError as e:
        raise PatternLoadError(f"Permission denied reading pattern file: {path_str}") from e
    except json.JSONDecodeError as e:
        raise PatternLoadError(f"Invalid JSON in pattern file {path_str}: {e}") from e

    if not isinstance(data, dict):
        raise PatternLoadError(f"Pattern file {path_str} must contain a JSON object")
    return data


def load_scrub_patterns(custom_path: Path | str | None = None) -> dict[str, Any]:
    """Load the scrub word and mime type tables.

    Args:
        custom_path: Optional path to a custom table whose lists extend the defaults

    Returns:
        Dict with 'version', 'scrub_words', 'mime_types' and 'textual_mime_types' keys

    Raises:
        PatternLoadError: If a table cannot be loaded or a list has the wrong type
    """
    normalized = _normalize_path(custom_path)
    cache_key = f"scrub:{normalized}"
    cached = _cache_get(cache_key)
    if cached is not None:
        result: dict[str, Any] = cached
        return result

    builtin = load_json_file(_get_builtin_path("scrub.json"))

    if custom_path:
        custom = load_json_file(custom_path)
        for list_name in _MERGEABLE_LISTS:
            if list_name not in custom:
                continue
            values = custom[list_name]
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise PatternLoadError(f"'{list_name}' in {custom_path} must be a list of strings")
            builtin[list_name].extend(values)

    _cache_set(cache_key, builtin)
    return builtin


def clear_pattern_cache() -> None:
    """Clear the pattern cache.

    Useful for testing or when pattern files have been modified.
    """
    _pattern_cache.clear()
