"""Sanitize command for har-redact CLI."""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import Annotated

import typer

from har_redact.patterns import PatternLoadError


def sanitize(
    input_file: Annotated[
        Path,
        typer.Argument(help="HAR file to sanitize (.har or .har.gz)"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output filename (default: input.sanitized.har)"),
    ] = None,
    words: Annotated[
        list[str] | None,
        typer.Option("--word", "-w", help="Name to redact (repeatable, replaces the default list)"),
    ] = None,
    mime_types: Annotated[
        list[str] | None,
        typer.Option("--mime-type", "-m", help="Mime type whose content is redacted (repeatable)"),
    ] = None,
    all_headers: Annotated[
        bool,
        typer.Option("--all-headers", help="Redact every header value"),
    ] = False,
    all_cookies: Annotated[
        bool,
        typer.Option("--all-cookies", help="Redact every cookie value"),
    ] = False,
    all_query_args: Annotated[
        bool,
        typer.Option("--all-query-args", help="Redact every query parameter value"),
    ] = False,
    all_mime_types: Annotated[
        bool,
        typer.Option("--all-mime-types", help="Redact all response content"),
    ] = False,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
    max_size: Annotated[
        int | None,
        typer.Option("--max-size", help="Max file size in MB (default: 100, 0=unlimited)"),
    ] = 100,
    compress: Annotated[
        bool,
        typer.Option("--compress", "-c", help="Also create compressed .har.gz file"),
    ] = False,
    compression_level: Annotated[
        int,
        typer.Option("--compression-level", help="Gzip compression level 1-9 (default: 9)"),
    ] = 9,
) -> None:
    """Redact secrets from a HAR file.

    Replaces the values of sensitive headers, cookies and query parameters,
    and of every inline key=value pair found in the file, with
    "[<name> redacted]" markers. Names and structure are preserved.

    Args:
        input_file: HAR file to sanitize
        output: Output filename (default: input.sanitized.har)
        words: Names to redact instead of the default list
        mime_types: Mime types whose content is redacted (default: JavaScript)
        all_headers: Redact every header value
        all_cookies: Redact every cookie value
        all_query_args: Redact every query parameter value
        all_mime_types: Redact all response content
        patterns: Custom patterns JSON file to merge with defaults
        max_size: Maximum file size in MB (default: 100, 0=unlimited)
        compress: Also create compressed .har.gz file
        compression_level: Gzip compression level 1-9 (default: 9)

    Example:
        har-redact sanitize device.har
        har-redact sanitize device.har -w client_secret -w client_id
        har-redact sanitize device.har --all-cookies --output clean.har
        har-redact sanitize device.har --max-size 0  # No size limit
    """
    from har_redact.sanitization import (
        HarParseError,
        HarSizeError,
        HarValidationError,
        SanitizeConfig,
        sanitize_har_file,
    )

    if not input_file.exists():
        typer.echo(f"Error: File not found: {input_file}", err=True)
        raise typer.Exit(1)

    if not 1 <= compression_level <= 9:
        typer.echo(f"Error: compression-level must be 1-9, got {compression_level}", err=True)
        raise typer.Exit(1)

    if max_size is not None and max_size < 0:
        typer.echo(f"Error: max-size must be >= 0, got {max_size}", err=True)
        raise typer.Exit(1)

    # 0 = unlimited
    max_size_bytes: int | None = None
    if max_size is not None and max_size > 0:
        max_size_bytes = max_size * 1024 * 1024

    config = SanitizeConfig(
        scrub_words=tuple(words or ()),
        scrub_mime_types=tuple(mime_types) if mime_types else None,
        all_headers=all_headers,
        all_cookies=all_cookies,
        all_query_args=all_query_args,
        all_mime_types=all_mime_types,
    )

    typer.echo(f"Sanitizing {input_file}...")
    if config.scrub_words:
        typer.echo(f"  Using {len(config.scrub_words)} provided scrub words")
    else:
        typer.echo("  Using default scrub list")

    try:
        result_path = sanitize_har_file(
            input_file,
            output,
            config=config,
            custom_patterns=str(patterns) if patterns else None,
            max_size=max_size_bytes,
        )
        typer.echo(f"  Sanitized: {result_path}")

        if compress:
            compressed_path = Path(result_path).with_suffix(".har.gz")
            with (
                open(result_path, "rb") as f_in,
                gzip.open(compressed_path, "wb", compresslevel=compression_level) as f_out,
            ):
                f_out.write(f_in.read())
            gz_size = compressed_path.stat().st_size / 1024 / 1024
            typer.echo(f"  Compressed: {compressed_path} ({gz_size:.1f} MB)")
    except HarSizeError as e:
        size_mb = e.size / 1024 / 1024
        limit_mb = e.max_size / 1024 / 1024
        typer.echo(f"Error: File too large ({size_mb:.1f} MB > {limit_mb:.1f} MB limit)", err=True)
        typer.echo("  Use --max-size to increase limit or --max-size 0 to disable", err=True)
        raise typer.Exit(1) from None
    except HarValidationError as e:
        typer.echo(f"Error: Invalid HAR file: {e}", err=True)
        raise typer.Exit(1) from None
    except HarParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except PatternLoadError as e:
        typer.echo(f"Error: Failed to load patterns: {e}", err=True)
        raise typer.Exit(1) from None
    except PermissionError as e:
        typer.echo(f"Error: Permission denied: {e.filename}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: I/O error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo()
    typer.echo("WARNING: Automated redaction is best-effort.")
    typer.echo("Before sharing, search the .har file for:")
    typer.echo("  - Passwords and API keys you used during the capture")
    typer.echo("  - Bearer tokens or session IDs in response bodies")
    typer.echo()
