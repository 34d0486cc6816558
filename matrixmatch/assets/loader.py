"""Reading transform sets from JSON files.

A transform file holds a JSON array of records, each with the sixteen
row-major fields m00..m33:

    [{"m00": 1.0, "m01": 0.0, ..., "m33": 1.0}, ...]

An object wrapping that array under "matrices" is accepted as well.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.errors import LoadError, ParseError
from ..core.transform import Transform

logger = logging.getLogger(__name__)


class MatrixRecord(BaseModel):
    """One serialized 4x4 matrix, row-major."""

    m00: float
    m01: float
    m02: float
    m03: float
    m10: float
    m11: float
    m12: float
    m13: float
    m20: float
    m21: float
    m22: float
    m23: float
    m30: float
    m31: float
    m32: float
    m33: float

    def to_transform(self) -> Transform:
        return Transform.from_record(self.model_dump())

    @classmethod
    def from_transform(cls, transform: Transform) -> MatrixRecord:
        return cls.model_validate(transform.to_record())


_RECORD_LIST = TypeAdapter(list[MatrixRecord])


def parse_transforms(text: str | None, source: str | Path | None = None) -> list[Transform]:
    """Parse a transform payload.

    Args:
        text: JSON text of the payload
        source: Where the text came from, used in error messages

    Returns:
        Transforms in file order

    Raises:
        ParseError: If the payload is blank, not JSON, not a list of
            complete records, or contains no records
    """
    logger.debug(f"Raw JSON data: {text}")

    if text is None or not text.strip():
        raise ParseError("JSON is empty or null", source)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", source) from e

    if isinstance(data, dict):
        data = data.get("matrices")

    if not isinstance(data, list):
        raise ParseError("Expected a list of matrix records", source)

    try:
        records = _RECORD_LIST.validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ParseError(
            f"Malformed matrix record at {location}: {first['msg']} "
            f"({e.error_count()} error(s))",
            source,
        ) from e

    if not records:
        raise ParseError("Failed to parse JSON into matrix records: no records found", source)

    return [record.to_transform() for record in records]


def load_transforms(path: str | Path) -> list[Transform]:
    """Load a transform set from a JSON file.

    Args:
        path: Path to the transform file

    Returns:
        Transforms in file order

    Raises:
        LoadError: If the file does not exist or cannot be read
        ParseError: If the file contents are empty or malformed
    """
    path = Path(path)
    logger.info(f"Loading file from: {path}")

    if not path.is_file():
        raise LoadError("File not found", path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read file: {e}", path) from e

    transforms = parse_transforms(text, source=path)
    logger.debug(f"Loaded {len(transforms)} transforms from {path}")
    return transforms


def save_transforms(transforms: Sequence[Transform], path: str | Path) -> Path:
    """Write a transform set in the format load_transforms reads."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [MatrixRecord.from_transform(t).model_dump() for t in transforms]
    with open(path, "w") as f:
        json.dump(records, f, indent=2)
    return path
