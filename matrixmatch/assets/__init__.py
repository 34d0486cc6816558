"""Reading transform sets and writing offsets."""

from .exporter import OffsetList, OffsetRecord, export_offsets, load_offsets
from .loader import MatrixRecord, load_transforms, parse_transforms, save_transforms

__all__ = [
    "OffsetList",
    "OffsetRecord",
    "export_offsets",
    "load_offsets",
    "MatrixRecord",
    "load_transforms",
    "parse_transforms",
    "save_transforms",
]
