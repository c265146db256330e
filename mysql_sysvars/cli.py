"""Command-line interface for the system variables parser."""

from __future__ import annotations

from typing import Optional

import typer

from .config import load_config
from .logging import get_logger
from .parser import TruncatedDocumentError
from .runtime import build_runtime
from .source import SourceError

logger = get_logger(__name__)

app = typer.Typer(
    add_completion=False,
    help=(
        "Parse the server-system-variables.html page and generate table definitions "
        "for the defined configuration settings."
    ),
)


@app.command()
def parse_command(
    file_to_parse: Optional[str] = typer.Argument(
        None,
        help="HTML file to parse, '-' for stdin (default: server-system-variables.html)",
    ),
    table_name: Optional[str] = typer.Argument(
        None,
        help="Name of the generated table (default: sysvars)",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Make output verbose"),
    details: bool = typer.Option(
        False,
        "--details",
        help="Also dump the values collected from the per-variable detail tables",
    ),
) -> None:
    try:
        config = load_config(
            input_path=file_to_parse,
            table_name=table_name,
            verbose=verbose or None,
            include_details=details or None,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    runtime = build_runtime(config)
    try:
        runtime.process()
    except (SourceError, TruncatedDocumentError) as exc:
        logger.error("process_failed", path=config.input_path, error=str(exc))
        typer.echo(f"Failed to consume tokens: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
