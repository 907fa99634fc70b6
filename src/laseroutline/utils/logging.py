"""Logging utilities for Laseroutline."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from laseroutline.domain import BuildWarning

# Marks handlers installed by configure_logging so a second call replaces them
_HANDLER_TAG = "_laseroutline_handler"


@dataclass
class BuildStats:
    """Statistics from one outline build."""

    stage_timings: dict[str, float] = field(default_factory=dict)
    stage_points: dict[str, int] = field(default_factory=dict)
    status: str | None = None
    fallback_reason: str | None = None
    warnings: list[str] = field(default_factory=list)
    islands_removed: int = 0
    cache: dict[str, Any] = field(default_factory=dict)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_TAG, True)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("laseroutline")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BuildLogger:
    """Logger for tracking the stages and outcome of one build."""

    def __init__(self, logger: Any) -> None:
        self._logger = logger
        self._stats = BuildStats(start_time=time.time())

    def log_stage(
        self,
        stage: str,
        duration_ms: float,
        polygons: int,
        points: int,
    ) -> None:
        """Log completion of a pipeline stage."""
        self._logger.debug(
            "Stage complete",
            stage=stage,
            polygons=polygons,
            points=points,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.stage_timings[stage] = duration_ms
        self._stats.stage_points[stage] = points

    def log_islands_removed(self, count: int, min_area_mm2: float) -> None:
        """Log removal of outline islands too small to cut."""
        if count:
            self._logger.debug("Small islands removed", count=count, min_area_mm2=min_area_mm2)
        self._stats.islands_removed += count

    def log_warning(self, warning: BuildWarning) -> None:
        """Log a user-facing build warning."""
        self._logger.info(
            "Build warning",
            warning=warning.id,
            level=warning.level.value,
            detail=warning.message,
        )
        self._stats.warnings.append(warning.id)

    def log_fallback(self, reason: str, error_type: str | None = None) -> None:
        """Log that the placeholder rectangle replaced the real outline."""
        self._logger.warning("Build fell back to placeholder", reason=reason, error_type=error_type)
        self._stats.fallback_reason = reason

    def log_build_complete(
        self,
        status: str,
        generation: int,
        cache_stats: dict[str, Any] | None = None,
    ) -> None:
        """Log the end of a build and freeze its statistics."""
        self._stats.end_time = time.time()
        self._stats.status = status
        self._stats.cache = dict(cache_stats or {})
        self._logger.debug(
            "Build complete",
            status=status,
            generation=generation,
            duration_ms=round(self._stats.duration_seconds * 1000, 2),
            cache=self._stats.cache,
        )

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
