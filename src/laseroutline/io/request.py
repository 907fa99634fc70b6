"""Loading build requests from JSON files."""

from pathlib import Path

from pydantic import ValidationError

from laseroutline.config import BuildRequest
from laseroutline.exceptions import RequestError


def load_request(path: Path) -> BuildRequest:
    """Read and validate a JSON build request.

    Args:
        path: Path to the request file

    Returns:
        Parsed BuildRequest (values are clamped later, at build time)

    Raises:
        RequestError: If the file is missing, not JSON, or fails validation
    """
    if not path.exists():
        raise RequestError(str(path), "file not found")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RequestError(str(path), str(e)) from e
    try:
        return BuildRequest.model_validate_json(text)
    except ValidationError as e:
        raise RequestError(str(path), f"{e.error_count()} validation error(s): {e}") from e
