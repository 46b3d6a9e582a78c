"""Command line entry point."""

from __future__ import annotations

import logging
import os
import traceback
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from . import __version__
from .codegen import generate
from .errors import GeneratorError

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "OPENAPI_RENDER_LOG"
BACKTRACE_ENV = "OPENAPI_RENDER_BACKTRACE"

app = typer.Typer(
    name="openapi-render",
    help="Portable OpenAPI templates: render a template tree against an OpenAPI spec.",
    add_completion=False,
)


def _is_truthy_env_var(env_var: str) -> bool:
    value = os.environ.get(env_var)
    if value is None:
        return False
    return value.strip().lower() in {"true", "1", "yes", "on"}


def log_level_from_env() -> int:
    """Log level named by OPENAPI_RENDER_LOG, WARNING when unset or unknown."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    return level if isinstance(level, int) else logging.WARNING


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level_from_env(),
        format="[%(levelname)s] %(message)s",
    )


def report_error(error: GeneratorError) -> None:
    """Print the error and each chained cause to stderr."""
    typer.echo(f"error: {error}", err=True)
    for cause in error.causes():
        typer.echo(f"caused by: {cause}", err=True)
    if _is_truthy_env_var(BACKTRACE_ENV):
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        typer.echo(f"backtrace:\n{trace}", err=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"openapi-render {__version__}")
        raise typer.Exit()


@app.command()
def render(
    spec: Annotated[
        Path,
        typer.Option(
            "--spec",
            "-s",
            help="Path to the OpenAPI specification.",
            metavar="PATH",
        ),
    ],
    template: Annotated[
        Path,
        typer.Option(
            "--template",
            "-t",
            help="Directory containing the templates.",
            metavar="DIR",
        ),
    ],
    target: Annotated[
        Path,
        typer.Argument(
            help="Directory to write template output to (default: cwd).",
            metavar="TARGET",
        ),
    ] = Path("."),
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render every file and directory under TEMPLATE into TARGET."""
    configure_logging()
    logger.debug(f"Starting openapi-render {__version__}")

    try:
        generate(spec, template, target)
    except GeneratorError as e:
        report_error(e)
        raise typer.Exit(code=1) from e


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
