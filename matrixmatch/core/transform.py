"""4x4 affine transforms stored as single-precision matrices.

Transforms are read from the model and space files as sixteen named fields
(m00..m33, row-major) and kept as immutable float32 numpy arrays, matching
the precision the files were authored in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.transform import Rotation

FIELD_NAMES: tuple[str, ...] = tuple(f"m{r}{c}" for r in range(4) for c in range(4))


def translation_matrix(offset: Sequence[float] | NDArray) -> NDArray[np.float32]:
    """Build a pure translation matrix (identity rotation, unit scale).

    Args:
        offset: XYZ translation

    Returns:
        4x4 float32 matrix with offset in the last column
    """
    t = np.eye(4, dtype=np.float32)
    t[:3, 3] = np.asarray(offset, dtype=np.float32)
    return t


@dataclass(frozen=True, eq=False)
class Transform:
    """An immutable 4x4 affine transform.

    Attributes:
        matrix: 4x4 float32 array, indexed [row, col]. Rotation, scale and
            shear live in the upper-left 3x3, translation in the last column.
    """

    matrix: NDArray[np.float32]

    def __post_init__(self) -> None:
        matrix = np.array(self.matrix, dtype=np.float32)
        if matrix.shape != (4, 4):
            raise ValueError(f"Transform must be a 4x4 matrix, got shape {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    def __getitem__(self, idx: tuple[int, int]) -> float:
        return float(self.matrix[idx])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    def __hash__(self) -> int:
        return hash(self.matrix.tobytes())

    @property
    def position(self) -> NDArray[np.float32]:
        """Translation column (m03, m13, m23)."""
        return self.matrix[:3, 3].copy()

    @property
    def linear(self) -> NDArray[np.float32]:
        """Upper-left 3x3 rotation/scale/shear block."""
        return self.matrix[:3, :3].copy()

    @property
    def determinant(self) -> float:
        """Determinant of the 3x3 block (negative for reflections)."""
        return float(np.linalg.det(self.matrix[:3, :3].astype(np.float64)))

    def translated(self, offset: Sequence[float] | NDArray) -> Transform:
        """Return translation_matrix(offset) @ self.

        With the conventional bottom row [0, 0, 0, 1] this only adds offset
        to the translation column.
        """
        return Transform(translation_matrix(offset) @ self.matrix)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def identity(cls) -> Transform:
        """Return the identity transform."""
        return cls(np.eye(4, dtype=np.float32))

    @classmethod
    def from_trs(
        cls,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
        scale: float | Sequence[float] = 1.0,
    ) -> Transform:
        """Build a transform from translation, rotation and scale.

        The transformation order is: Scale -> Rotate -> Translate
        This means the matrix is built as: T @ R @ S

        Args:
            position: XYZ translation
            rotation: XYZ Euler angles in degrees (applied in XYZ order)
            scale: Uniform factor or per-axis XYZ factors

        Returns:
            Transform for the combined matrix
        """
        s = np.eye(4, dtype=np.float64)
        s[[0, 1, 2], [0, 1, 2]] = np.broadcast_to(np.asarray(scale, dtype=np.float64), (3,))

        rot = Rotation.from_euler("xyz", rotation, degrees=True)
        r = np.eye(4, dtype=np.float64)
        r[:3, :3] = rot.as_matrix()

        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = position

        return cls(t @ r @ s)

    @classmethod
    def from_record(cls, record: Mapping[str, float]) -> Transform:
        """Create a transform from a mapping with keys m00..m33.

        Raises:
            KeyError: If any of the sixteen fields is missing
        """
        values = [record[name] for name in FIELD_NAMES]
        return cls(np.asarray(values, dtype=np.float32).reshape(4, 4))

    def to_record(self) -> dict[str, float]:
        """Return the sixteen named fields m00..m33."""
        return {name: float(v) for name, v in zip(FIELD_NAMES, self.matrix.ravel())}

    def __repr__(self) -> str:
        pos = self.position
        return f"Transform(pos=({pos[0]:.3f}, {pos[1]:.3f}, {pos[2]:.3f}), det={self.determinant:.3f})"
