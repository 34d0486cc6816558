"""Writing matched offsets to JSON.

The output file is a single object:

    {"offsets": [{"x": 0.0, "y": 0.0, "z": 0.0}, ...]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, Field, ValidationError

from ..core.errors import ExportError, ParseError
from ..core.matcher import Vector3

logger = logging.getLogger(__name__)


class OffsetRecord(BaseModel):
    """A serialized offset vector."""

    x: float
    y: float
    z: float

    def to_vector(self) -> Vector3:
        return (self.x, self.y, self.z)


class OffsetList(BaseModel):
    """Top-level object of an offsets file."""

    offsets: list[OffsetRecord] = Field(default_factory=list)

    @classmethod
    def from_vectors(cls, offsets: Sequence[Sequence[float]]) -> OffsetList:
        return cls(offsets=[OffsetRecord(x=o[0], y=o[1], z=o[2]) for o in offsets])

    def to_vectors(self) -> list[Vector3]:
        return [record.to_vector() for record in self.offsets]


def export_offsets(offsets: Sequence[Sequence[float]], path: str | Path) -> Path:
    """Save offsets to a JSON file.

    Args:
        offsets: Offset vectors to write, in order
        path: Destination file

    Returns:
        Path the offsets were written to

    Raises:
        ExportError: If the destination cannot be written
    """
    path = Path(path)
    payload = OffsetList.from_vectors(offsets).model_dump()

    # Write to a temp file first so a failed write leaves no partial output
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, "w") as f:
            json.dump(payload, f)
        temp_path.replace(path)
    except OSError as e:
        if temp_path.is_file():
            temp_path.unlink()
        raise ExportError(f"Could not write offsets: {e}", path) from e

    logger.info(f"Offsets exported to {path}")
    return path


def load_offsets(path: str | Path) -> list[Vector3]:
    """Read offsets back from a file written by export_offsets.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not a valid offsets object
    """
    path = Path(path)
    with open(path) as f:
        text = f.read()

    try:
        return OffsetList.model_validate_json(text).to_vectors()
    except ValidationError as e:
        raise ParseError(f"Invalid offsets file: {e.error_count()} error(s)", path) from e
