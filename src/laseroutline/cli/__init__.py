"""Command-line interface for laseroutline.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- build: JSON request to layered CUT/ENGRAVE SVG
- flatten: Path data to straight-line rings
- Quiet and JSON output modes
- Detailed error reporting
"""

from laseroutline.cli.app import cli, main

__all__ = ["cli", "main"]
