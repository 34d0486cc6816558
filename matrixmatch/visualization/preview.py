"""Matplotlib preview of match results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from ..core.matcher import MatchResult

if TYPE_CHECKING:
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)


def build_preview_figure(result: MatchResult, title: str = "Match Result") -> Figure:
    """Build a 3D scatter of offsets (blue) and unmatched points (white).

    Raises:
        ImportError: If matplotlib is not installed
    """
    import matplotlib.pyplot as plt

    fig = plt.figure(figsize=(10, 8))
    ax = fig.add_subplot(111, projection='3d')

    offsets = result.offsets_array
    points = result.points_array

    ax.scatter(
        offsets[:, 0], offsets[:, 1], offsets[:, 2],
        marker='s', s=40, c='blue', label=f'Offsets ({len(offsets)})'
    )
    ax.scatter(
        points[:, 0], points[:, 1], points[:, 2],
        marker='s', s=40, c='white', edgecolors='black',
        label=f'Unmatched ({len(points)})'
    )

    # Equal scaling around everything plotted
    everything = np.vstack([offsets, points])
    if len(everything) > 0:
        lo = everything.min(axis=0)
        hi = everything.max(axis=0)
        mid = (lo + hi) / 2
        half = max(float((hi - lo).max()) / 2, 1.0)
        ax.set_xlim(mid[0] - half, mid[0] + half)
        ax.set_ylim(mid[1] - half, mid[1] + half)
        ax.set_zlim(mid[2] - half, mid[2] + half)

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(title)
    ax.legend(loc='upper right')

    fig.tight_layout()
    return fig


def show_preview(result: MatchResult, title: str = "Match Result") -> bool:
    """Open an interactive preview window.

    Returns:
        True if the window was shown, False if matplotlib is unavailable
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        logger.warning("matplotlib not available - preview disabled")
        return False

    build_preview_figure(result, title=title)
    plt.show()
    return True
