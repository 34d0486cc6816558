"""Visualization of match results."""

from .markers import build_marker_mesh, export_markers
from .preview import build_preview_figure, show_preview

__all__ = [
    "build_marker_mesh",
    "export_markers",
    "build_preview_figure",
    "show_preview",
]
