"""Pattern table loading for redaction.

This module provides:
- Loading of the default scrub word and mime type tables from JSON
- Merging of custom user tables into the defaults
"""

from __future__ import annotations

from har_redact.patterns.loader import (
    PatternLoadError,
    clear_pattern_cache,
    load_json_file,
    load_scrub_patterns,
)

__all__ = [
    "load_scrub_patterns",
    "load_json_file",
    "clear_pattern_cache",
    "PatternLoadError",
]
