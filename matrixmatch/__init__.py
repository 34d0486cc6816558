"""matrixmatch - Translation-offset matching of 4x4 transform sets.

Loads a model set and a space set of affine transforms, finds for each model
transform the translation that lands it on a space transform, and writes the
unique offsets to JSON.
"""

__version__ = "0.1.0"

from .core.config import MatcherConfig
from .core.matcher import MatchResult, find_matches, matches
from .core.transform import Transform
from .assets.loader import load_transforms
from .assets.exporter import export_offsets
from .pipeline import MatchPipeline, PipelineReport, run_pipeline

__all__ = [
    "MatcherConfig",
    "MatchResult",
    "find_matches",
    "matches",
    "Transform",
    "load_transforms",
    "export_offsets",
    "MatchPipeline",
    "PipelineReport",
    "run_pipeline",
]
