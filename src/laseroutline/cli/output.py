"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, warning and summary messages.
"""

from rich.console import Console
from rich.text import Text

from laseroutline.domain import BuildResult, BuildWarning, WarningLevel

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info

_LEVEL_STYLES = {
    WarningLevel.INFO: "blue",
    WarningLevel.WARN: "yellow",
    WarningLevel.ERROR: "red",
}


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Laseroutline[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_request_info(
    request_path: str,
    path_count: int,
    offset_mm: float | None,
    ring: str | None,
) -> None:
    """Print a one-glance summary of the build request.

    Args:
        request_path: Path to the request file
        path_count: Number of artwork paths
        offset_mm: Requested offset, None for the default
        ring: Ring position, None when no ring is attached
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(request_path)
    console.print(line)
    offset_str = "default offset" if offset_mm is None else f"{offset_mm:g}mm offset"
    ring_str = "no ring" if ring is None else f"ring {ring}"
    console.print(f"  {path_count} paths {SYM_DOT} {offset_str} {SYM_DOT} {ring_str}")


def print_warnings(warnings: tuple[BuildWarning, ...] | list[BuildWarning]) -> None:
    """Print build warnings, one per line, colored by severity."""
    for warning in warnings:
        style = _LEVEL_STYLES.get(warning.level, "yellow")
        console.print(f"  [{style}]{SYM_WARN} {warning.id}[/{style}] {warning.message}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str | None,
    result: BuildResult,
    total_time_s: float,
    file_size: str | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path of the written SVG, None when nothing was written
        result: Build result to summarize
        total_time_s: Total build time in seconds
        file_size: Human-readable file size string
    """
    time_str = _format_time(total_time_s)

    if result.is_fallback:
        console.print(f"\n[bold yellow]{SYM_WARN} Placeholder[/bold yellow] in {time_str}")
        console.print(f"  {result.reason}")
    else:
        console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        if file_size:
            line.append(f" ({file_size})")
        console.print(line)

    console.print(
        f"  {result.bbox.width:.1f} × {result.bbox.height:.1f} mm {SYM_DOT} "
        f"document {result.document_width:.1f} × {result.document_height:.1f} mm"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
