"""Cube markers for match results, built with trimesh.

Each unique offset and each unmatched model position becomes a small cube,
colored per group, so the result can be inspected in any mesh viewer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import trimesh

from ..core.config import MarkerParams
from ..core.matcher import MatchResult

logger = logging.getLogger(__name__)


def _cube(center: Sequence[float], size: float, color: Sequence[int]) -> trimesh.Trimesh:
    box = trimesh.creation.box(extents=[size, size, size])
    box.apply_translation(center)
    box.visual.face_colors = color
    return box


def build_marker_mesh(
    result: MatchResult,
    params: MarkerParams | None = None,
) -> trimesh.Trimesh:
    """Build one mesh holding a cube per offset and per unmatched point.

    Offset cubes come first, in result order, followed by the unmatched
    points, so face ``12 * i`` belongs to the i-th marker.

    Args:
        result: Match result to visualize
        params: Marker size and colors

    Returns:
        Combined mesh (empty if the result has no entries)
    """
    params = params or MarkerParams()

    cubes = [
        _cube(offset, params.size, params.offset_color)
        for offset in result.matching_offsets
    ]
    cubes.extend(
        _cube(point, params.size, params.point_color)
        for point in result.non_matching_points
    )

    if not cubes:
        return trimesh.Trimesh()
    if len(cubes) == 1:
        return cubes[0]
    return trimesh.util.concatenate(cubes)


def export_markers(
    result: MatchResult,
    path: str | Path,
    params: MarkerParams | None = None,
) -> Path | None:
    """Write the marker mesh to a file (format chosen by extension).

    Returns:
        Path written, or None if there was nothing to write
    """
    mesh = build_marker_mesh(result, params)
    if len(mesh.faces) == 0:
        logger.warning("No markers to export")
        return None

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    mesh.export(str(path))
    logger.info(f"Markers exported to {path}")
    return path
