"""Validate command for har-redact CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


def validate(
    har_file: Annotated[
        Path | None,
        typer.Argument(help="HAR file to validate"),
    ] = None,
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory to scan for HAR files"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", "-s", help="Treat warnings as errors"),
    ] = False,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Scan directory recursively"),
    ] = False,
    words: Annotated[
        list[str] | None,
        typer.Option("--word", "-w", help="Name that must be redacted (repeatable, replaces the default list)"),
    ] = None,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
) -> None:
    """Validate HAR files for unredacted secrets.

    Reports every value that sanitize would still redact, so a file
    produced by sanitize with the same options comes out clean.

    Args:
        har_file: Single HAR file to validate
        directory: Directory containing HAR files to scan
        strict: Treat warnings as errors (exit code 1)
        recursive: Scan directory recursively for HAR files
        words: Names that must be redacted instead of the default list
        patterns: Custom patterns JSON file to merge with defaults

    Example:
        har-redact validate device.sanitized.har
        har-redact validate --dir ./captures --recursive
        har-redact validate device.har --strict
    """
    from har_redact.patterns import PatternLoadError
    from har_redact.sanitization import HarParseError, SanitizeConfig
    from har_redact.validation import validate_har

    har_files: list[Path] = []
    custom_patterns = str(patterns) if patterns else None
    config = SanitizeConfig(scrub_words=tuple(words or ()))

    if directory:
        if not directory.exists():
            typer.echo(f"Error: Directory not found: {directory}", err=True)
            raise typer.Exit(1)

        if recursive:
            har_files.extend(directory.rglob("*.har"))
            har_files.extend(directory.rglob("*.har.gz"))
        else:
            har_files.extend(directory.glob("*.har"))
            har_files.extend(directory.glob("*.har.gz"))
    elif har_file:
        if not har_file.exists():
            typer.echo(f"Error: File not found: {har_file}", err=True)
            raise typer.Exit(1)
        har_files.append(har_file)
    else:
        typer.echo("Error: Provide either a HAR file or --dir option", err=True)
        raise typer.Exit(1)

    if not har_files:
        typer.echo("No HAR files found")
        raise typer.Exit(0)

    total_errors = 0
    total_warnings = 0

    for file_path in sorted(har_files):
        try:
            findings = validate_har(file_path, config, custom_patterns=custom_patterns)
        except HarParseError as e:
            typer.echo(f"\n[ERROR] {file_path}: {e}")
            total_errors += 1
            continue
        except PatternLoadError as e:
            typer.echo(f"Error: Failed to load patterns: {e}", err=True)
            raise typer.Exit(1) from None

        if findings:
            typer.echo(f"\n{file_path}:")
            for finding in findings:
                icon = "[ERROR]" if finding.severity == "error" else "[WARN]"
                typer.echo(f"  {icon} [{finding.location}]")
                typer.echo(f"     {finding.field}: {finding.value}")
                typer.echo(f"     Reason: {finding.reason}")

                if finding.severity == "error":
                    total_errors += 1
                else:
                    total_warnings += 1
        else:
            typer.echo(f"[OK] {file_path}: Clean")

    typer.echo(f"\nSummary: {total_errors} errors, {total_warnings} warnings")

    if total_errors > 0:
        raise typer.Exit(1)
    if strict and total_warnings > 0:
        raise typer.Exit(1)
