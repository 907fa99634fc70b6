"""Utility functions for laseroutline.

This module provides utility functions including:

- Logging setup and configuration
- Per-build stage timing and statistics
"""

from laseroutline.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
]
