"""JSON file loading."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union


class JsonFileError(Exception):
    """Raised when a JSON file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str, cause: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(f"{path}: {reason}")


def read_json(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON file whose top-level value is an object.

    Args:
        path: File to read

    Returns:
        Parsed object

    Raises:
        JsonFileError: File missing or unreadable, invalid JSON, or the
            top-level value is not an object
    """
    path = Path(path)

    try:
        # utf-8-sig tolerates the BOM some editors write
        content = path.read_text(encoding='utf-8-sig')
    except (OSError, UnicodeDecodeError) as e:
        raise JsonFileError(path, f"cannot read file ({e})", e) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise JsonFileError(path, f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}", e) from e

    if not isinstance(data, dict):
        raise JsonFileError(path, f"expected a JSON object, got {type(data).__name__}")

    return data
