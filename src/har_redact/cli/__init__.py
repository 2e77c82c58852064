"""CLI for har-redact.

This module provides a Typer-based CLI for HAR redaction, inspection,
and leak validation.

Requires the 'cli' optional dependency: pip install har-redact[cli]
"""

from __future__ import annotations
