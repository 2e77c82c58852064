"""HAR validation utilities for leak detection.

This module provides validation for HAR files to detect secrets that are
still present before a capture is shared. Useful for CI/pre-commit hooks.

Exports:
    - validate_har: Validate a HAR file for unredacted secrets
    - find_unredacted: Validate parsed HAR data
    - Finding: Dataclass for validation findings
"""

from __future__ import annotations

from har_redact.validation.leaks import (
    Finding,
    check_field,
    find_unredacted,
    truncate,
    validate_har,
)

__all__ = [
    "Finding",
    "check_field",
    "find_unredacted",
    "truncate",
    "validate_har",
]
