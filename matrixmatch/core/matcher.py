"""Translation-offset matching between a model set and a space set.

For every model transform the space transforms are scanned in order. The
candidate offset is the difference of the two translation columns; the model
is shifted by that offset and compared element by element against the space
transform. The first space transform within tolerance wins, and its offset is
recorded once no matter how many model entries produce it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from .transform import Transform

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01

Vector3 = tuple[float, float, float]


def _as_vector(values: Sequence[float] | NDArray) -> Vector3:
    return (float(values[0]), float(values[1]), float(values[2]))


def _fmt(v: Vector3) -> str:
    return f"({v[0]:.3f}, {v[1]:.3f}, {v[2]:.3f})"


@dataclass(frozen=True)
class ModelMatch:
    """A model entry paired with the first space entry it matched."""

    model_index: int
    space_index: int
    offset: Vector3


@dataclass
class MatchResult:
    """Outcome of a single matching run.

    Attributes:
        matching_offsets: Unique offsets, in order of first discovery
        non_matching_points: Positions of model entries without a match
        matches: One entry per matched model transform
        non_matching_indices: Model indices of the unmatched entries
    """

    matching_offsets: list[Vector3] = field(default_factory=list)
    non_matching_points: list[Vector3] = field(default_factory=list)
    matches: list[ModelMatch] = field(default_factory=list)
    non_matching_indices: list[int] = field(default_factory=list)

    @property
    def num_matched(self) -> int:
        """Number of model entries that found a match."""
        return len(self.matches)

    @property
    def num_unmatched(self) -> int:
        """Number of model entries that found no match."""
        return len(self.non_matching_points)

    @property
    def num_model(self) -> int:
        """Number of model entries the run covered."""
        return self.num_matched + self.num_unmatched

    @property
    def offsets_array(self) -> NDArray[np.float32]:
        """Unique offsets as an Nx3 array."""
        return np.asarray(self.matching_offsets, dtype=np.float32).reshape(-1, 3)

    @property
    def points_array(self) -> NDArray[np.float32]:
        """Unmatched model positions as an Nx3 array."""
        return np.asarray(self.non_matching_points, dtype=np.float32).reshape(-1, 3)

    def offset_for(self, model_index: int) -> Vector3 | None:
        """Return the offset found for a model entry, or None if it is unmatched."""
        for match in self.matches:
            if match.model_index == model_index:
                return match.offset
        return None

    def stats(self) -> dict:
        """Return summary counts for display."""
        return {
            "num_model": self.num_model,
            "num_matched": self.num_matched,
            "num_unmatched": self.num_unmatched,
            "num_unique_offsets": len(self.matching_offsets),
        }

    def __repr__(self) -> str:
        return (
            f"MatchResult({self.num_matched} matched, {self.num_unmatched} unmatched, "
            f"{len(self.matching_offsets)} unique offsets)"
        )


class OffsetRegistry:
    """Insertion-ordered set of offsets.

    By default offsets are compared by exact component equality. With
    ``decimals`` set, offsets are bucketed by rounding each component to that
    many decimals, and the first offset seen in a bucket is the one kept.
    """

    def __init__(self, decimals: int | None = None):
        if decimals is not None and decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {decimals}")
        self.decimals = decimals
        self._seen: set[Vector3] = set()
        self._offsets: list[Vector3] = []

    def _key(self, offset: Vector3) -> Vector3:
        if self.decimals is None:
            return offset
        return tuple(round(c, self.decimals) for c in offset)  # type: ignore[return-value]

    def add(self, offset: Vector3) -> bool:
        """Record an offset.

        Returns:
            True if the offset was new, False if an equal one was already recorded
        """
        key = self._key(offset)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._offsets.append(offset)
        return True

    def __contains__(self, offset: object) -> bool:
        return self._key(offset) in self._seen  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[Vector3]:
        return iter(self._offsets)

    @property
    def offsets(self) -> list[Vector3]:
        """Recorded offsets in insertion order."""
        return list(self._offsets)


def matches(a: Transform, b: Transform, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Check whether two transforms are equal element by element.

    Args:
        a: First transform
        b: Second transform
        tolerance: Largest allowed absolute difference per element

    Returns:
        True if all sixteen differences are <= tolerance
    """
    return not bool(np.any(np.abs(a.matrix - b.matrix) > tolerance))


def find_matches(
    model: Sequence[Transform],
    space: Sequence[Transform],
    tolerance: float = DEFAULT_TOLERANCE,
    dedup_decimals: int | None = None,
) -> MatchResult:
    """Find the translation offsets that map model transforms onto space transforms.

    Each model entry is shifted by (space position - model position) for every
    space entry in turn; the first shifted model that matches the space entry
    within tolerance decides the entry's offset. Scanning stops there, so the
    pairing is first-match, not closest-match.

    Args:
        model: Transforms to place
        space: Transforms to place them onto
        tolerance: Per-element tolerance for the comparison
        dedup_decimals: Round offsets to this many decimals when deduplicating.
            None compares offsets exactly.

    Returns:
        MatchResult with unique offsets and the positions left unmatched

    Raises:
        ValueError: If tolerance is not a positive finite number
    """
    if not math.isfinite(tolerance) or tolerance <= 0:
        raise ValueError(f"tolerance must be a positive number, got {tolerance}")

    result = MatchResult()
    registry = OffsetRegistry(decimals=dedup_decimals)
    space_positions = [s.position for s in space]

    for model_idx, model_matrix in enumerate(model):
        model_position = model_matrix.position
        matched = False

        for space_idx, space_matrix in enumerate(space):
            offset = space_positions[space_idx] - model_position
            transformed = model_matrix.translated(offset)

            if matches(transformed, space_matrix, tolerance):
                vec = _as_vector(offset)
                if registry.add(vec):
                    logger.info(f"Match found! Offset: {_fmt(vec)}")
                result.matches.append(ModelMatch(model_idx, space_idx, vec))
                matched = True
                break

        if not matched:
            result.non_matching_points.append(_as_vector(model_position))
            result.non_matching_indices.append(model_idx)

    result.matching_offsets = registry.offsets
    logger.debug(
        f"Matched {result.num_matched}/{len(model)} model transforms "
        f"against {len(space)} space transforms "
        f"({len(result.matching_offsets)} unique offsets)"
    )
    return result
