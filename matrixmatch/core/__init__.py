"""Core modules for matrixmatch."""

from .config import MatcherConfig
from .errors import ExportError, LoadError, MatrixMatchError, ParseError
from .matcher import MatchResult, ModelMatch, OffsetRegistry, find_matches, matches
from .transform import Transform, translation_matrix

__all__ = [
    "MatcherConfig",
    "ExportError",
    "LoadError",
    "MatrixMatchError",
    "ParseError",
    "MatchResult",
    "ModelMatch",
    "OffsetRegistry",
    "find_matches",
    "matches",
    "Transform",
    "translation_matrix",
]
