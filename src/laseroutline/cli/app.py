"""CLI application entry point for laseroutline.

This module provides the main CLI interface using Typer.
"""

import json
import time
from pathlib import Path
from typing import Annotated

import typer

from laseroutline import __version__
from laseroutline.cli.output import (
    console,
    print_error,
    print_header,
    print_request_info,
    print_step,
    print_success,
    print_warnings,
)
from laseroutline.config import LoggingConfig, OutlineSettings
from laseroutline.core import BackendLifecycleService, OutlineComposer, flatten
from laseroutline.domain import AffineTransform
from laseroutline.exceptions import (
    BackendInitError,
    LaserOutlineError,
    ParseDegenerateError,
    RequestError,
)
from laseroutline.io import load_request, polygons_to_path, write_layered_svg
from laseroutline.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="laseroutline",
    help="Build laser-cut outlines (with optional keyring loop) around SVG artwork paths.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Laseroutline[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Laser-cut outline builder."""


@app.command()
def build(
    request_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON build request",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output SVG path (default: request path with .svg suffix)",
        ),
    ] = None,
    offset: Annotated[
        float | None,
        typer.Option(
            "--offset",
            help="Override the request's outline offset in mm",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the build result as JSON instead of a summary",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build a cut outline and engrave layer from a JSON request.

    Example:
        laseroutline build keychain.json -o keychain.svg

    The SVG has a CUT group (hairline stroke) and an ENGRAVE group (filled
    artwork). If the geometry degenerates, a placeholder rectangle is written
    and the reason is reported.
    """
    settings = OutlineSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet or as_json,
    )
    chatty = not (quiet or as_json)

    if chatty:
        print_header(__version__)
        print_step("Loading request")

    try:
        request = load_request(request_file)
    except RequestError as e:
        print_error(f"Could not load request: {e.reason}", details=e.source)
        raise typer.Exit(code=1)

    if offset is not None:
        request = request.model_copy(update={"offset_mm": offset})

    if chatty:
        print_request_info(
            request_path=str(request_file),
            path_count=len(request.paths),
            offset_mm=request.offset_mm,
            ring=request.attachment.position.value if request.attachment else None,
        )
        print_step("Building outline")

    start_time = time.time()
    lifecycle = BackendLifecycleService(cache_capacity=settings.cache.capacity)
    composer = OutlineComposer(lifecycle, settings)
    try:
        result = composer.build(request)
    except BackendInitError as e:
        print_error("Geometry backend unavailable; nothing was exported", details=e.reason)
        raise typer.Exit(code=1)
    except LaserOutlineError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    duration = time.time() - start_time

    output_path = output if output is not None else request_file.with_suffix(".svg")
    write_layered_svg(result, output_path, settings.output.cut_stroke_mm)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if chatty:
        print_warnings(result.warnings)
        print_success(
            output_path=str(output_path),
            result=result,
            total_time_s=duration,
            file_size=_format_file_size(output_path),
        )


@app.command("flatten")
def flatten_command(
    path_data: Annotated[
        str,
        typer.Argument(
            help="SVG path data, e.g. 'M0 0 C 10 0 10 10 0 10 Z'",
            show_default=False,
        ),
    ],
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Curve flattening tolerance in mm (0.01-5)",
            min=0.01,
            max=5.0,
        ),
    ] = 0.15,
    scale: Annotated[
        float,
        typer.Option(
            "--scale",
            "-s",
            help="Uniform scale applied before flattening",
        ),
    ] = 1.0,
) -> None:
    """Flatten path data into straight-line rings and print them as M/L/Z."""
    transform = None if scale == 1.0 else AffineTransform.scaling(scale, scale)
    try:
        polygons = flatten(path_data, tolerance, transform)
        if polygons.is_empty:
            raise ParseDegenerateError("no subpath encloses any area")
    except LaserOutlineError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    typer.echo(polygons_to_path(polygons))


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
