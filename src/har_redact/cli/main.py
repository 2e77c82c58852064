"""Main CLI entry point for har-redact.

Provides commands for:
- sanitize: Redact secrets from HAR files
- info: Show header, cookie, query and inline key names in a HAR file
- validate: Check HAR files for unredacted secrets
"""

from __future__ import annotations

try:
    import typer
except ImportError as e:
    raise ImportError("CLI dependencies not installed. Install with: pip install har-redact[cli]") from e

from har_redact.cli.info import info
from har_redact.cli.sanitize import sanitize
from har_redact.cli.validate import validate

app = typer.Typer(
    name="har-redact",
    help="Redact secrets from HAR files.",
    no_args_is_help=True,
)

app.command()(sanitize)
app.command()(info)
app.command()(validate)


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version flag was provided
    """
    if value:
        from har_redact import __version__

        typer.echo(f"har-redact {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    r"""Redact secrets from HAR files.

    \b
    Examples:
        har-redact sanitize myfile.har
        har-redact sanitize myfile.har -w client_secret -w client_id
        har-redact info myfile.har
        har-redact validate myfile.sanitized.har
    """


if __name__ == "__main__":
    app()
