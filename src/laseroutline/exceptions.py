"""Exception hierarchy for Laseroutline."""


class LaserOutlineError(Exception):
    """Base exception for all Laseroutline errors."""

    pass


class GeometryError(LaserOutlineError):
    """Errors in geometric calculations."""

    pass


class ParseDegenerateError(GeometryError):
    """Path data could not be turned into usable geometry."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Degenerate path data: {reason}")


class BooleanOpFailedError(GeometryError):
    """The polygon backend produced nothing usable for a boolean operation."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Boolean {operation} failed: {reason}")


class OffsetFailedError(GeometryError):
    """The polygon backend produced nothing usable for an offset."""

    def __init__(self, delta_mm: float, reason: str) -> None:
        self.delta_mm = delta_mm
        self.reason = reason
        super().__init__(f"Offset by {delta_mm}mm failed: {reason}")


class InvalidBoundsError(GeometryError):
    """Bounding box is missing, non-finite or has no positive area."""

    def __init__(self, stage: str, details: str) -> None:
        self.stage = stage
        self.details = details
        super().__init__(f"Invalid bounds after {stage}: {details}")


class BackendError(LaserOutlineError):
    """Errors related to the polygon backend lifecycle."""

    pass


class BackendInitError(BackendError):
    """The polygon backend could not be initialized."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Polygon backend failed to initialize: {reason}")


class BackendNotReadyError(BackendError):
    """The polygon backend was used before ensure_ready() completed."""

    def __init__(self) -> None:
        super().__init__("Polygon backend is not ready; call ensure_ready() first")


class RequestError(LaserOutlineError):
    """Error reading or validating a build request."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid build request '{source}': {reason}")
