"""Build outcome types returned by the outline composer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from laseroutline.domain.bounds import BoundingBox


class BuildStatus(Enum):
    """Terminal state of a build."""

    SUCCESS = "success"
    FALLBACK = "fallback"


class WarningLevel(str, Enum):
    """Severity of a build warning."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class BuildWarning:
    """A user-facing note about the build parameters or output.

    Attributes:
        id: Stable identifier (e.g. "ring-wall-thin")
        level: Severity
        message: Human-readable explanation
    """

    id: str
    level: WarningLevel
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "level": self.level.value, "message": self.message}


@dataclass(frozen=True)
class BuildResult:
    """Serialized cut and engrave geometry for one build request.

    Attributes:
        status: SUCCESS, or FALLBACK when the placeholder rectangle was emitted
        cut_path: Path data for the outline (plus attachment); stroked layer
        engrave_path: Path data for the silhouette; filled layer
        bbox: Bounding box of the cut geometry in output coordinates
        document_width: bbox width plus the margin on both sides
        document_height: bbox height plus the margin on both sides
        warnings: Notes about clamped parameters or output complexity
        reason: Why the fallback was taken, None on success
        generation: Caller-supplied counter, echoed back unchanged
    """

    status: BuildStatus
    cut_path: str
    engrave_path: str
    bbox: BoundingBox
    document_width: float
    document_height: float
    warnings: tuple[BuildWarning, ...] = field(default_factory=tuple)
    reason: str | None = None
    generation: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.status is BuildStatus.FALLBACK

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "status": self.status.value,
            "cut_path": self.cut_path,
            "engrave_path": self.engrave_path,
            "bbox": self.bbox.to_dict(),
            "document_width": self.document_width,
            "document_height": self.document_height,
            "warnings": [w.to_dict() for w in self.warnings],
            "reason": self.reason,
            "generation": self.generation,
        }
