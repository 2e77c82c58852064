"""Info command for har-redact CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer


def info(
    har_file: Annotated[
        Path,
        typer.Argument(help="HAR file to inspect (.har or .har.gz)"),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the summary as JSON"),
    ] = False,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
) -> None:
    """Show the names a HAR file carries.

    Lists header, cookie and query parameter names, response mime types,
    and the inline key=value keys that sanitize always redacts.

    Args:
        har_file: HAR file to inspect
        as_json: Print the summary as JSON
        patterns: Custom patterns JSON file to merge with defaults

    Example:
        har-redact info device.har
        har-redact info device.har --json
    """
    from har_redact.patterns import PatternLoadError
    from har_redact.sanitization import HarParseError, get_har_info, read_har_file

    if not har_file.exists():
        typer.echo(f"Error: File not found: {har_file}", err=True)
        raise typer.Exit(1)

    try:
        summary = get_har_info(read_har_file(har_file), str(patterns) if patterns else None)
    except HarParseError as e:
        typer.echo(f"Error: Invalid HAR file: {e}", err=True)
        raise typer.Exit(1) from None
    except PatternLoadError as e:
        typer.echo(f"Error: Failed to load patterns: {e}", err=True)
        raise typer.Exit(1) from None

    if as_json:
        typer.echo(json.dumps(summary.to_dict(), indent=2))
        return

    typer.echo(f"{har_file}: {summary.entry_count} entries")
    sections = [
        ("Headers", summary.headers),
        ("Cookies", summary.cookies),
        ("Query args", summary.query_args),
        ("Mime types", summary.mime_types),
        ("Inline keys", summary.inline_kv_pairs),
    ]
    for title, names in sections:
        typer.echo(f"\n{title} ({len(names)}):")
        for name in names:
            typer.echo(f"  {name}")
