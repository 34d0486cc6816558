"""End-to-end matching run: load both sets, match, export.

Both transform sets are loaded before matching starts. If either load fails
the run stops there and reports itself unavailable; no partial matching is
attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .assets.exporter import export_offsets
from .assets.loader import load_transforms
from .core.config import MatcherConfig
from .core.errors import ExportError, LoadError
from .core.matcher import MatchResult, find_matches
from .core.transform import Transform

logger = logging.getLogger(__name__)

PipelineStatus = Literal["completed", "unavailable", "export_failed"]


@dataclass
class PipelineReport:
    """Outcome of a pipeline run.

    Attributes:
        status: completed, unavailable (a load failed) or export_failed
            (the offsets or the marker mesh could not be written)
        result: Match result, None when the run was unavailable
        output_path: Where the offsets were written
        marker_path: Where the marker mesh was written, if requested
        error: Message of the failure that ended or degraded the run
    """

    status: PipelineStatus
    result: MatchResult | None = None
    output_path: Path | None = None
    marker_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"


class MatchPipeline:
    """Runs the load -> match -> export sequence for one configuration."""

    def __init__(self, config: MatcherConfig | None = None):
        self.config = config or MatcherConfig.default()

    def load(self) -> tuple[list[Transform], list[Transform]]:
        """Load the model set, then the space set.

        Raises:
            LoadError: If either set cannot be loaded or parsed
        """
        assets = self.config.assets
        model = load_transforms(assets.model_path)
        space = load_transforms(assets.space_path)
        return model, space

    def match(self, model: list[Transform], space: list[Transform]) -> MatchResult:
        params = self.config.match
        return find_matches(
            model,
            space,
            tolerance=params.tolerance,
            dedup_decimals=params.dedup_decimals,
        )

    def run(self) -> PipelineReport:
        """Run the full pipeline.

        Returns:
            PipelineReport describing what happened
        """
        try:
            model, space = self.load()
        except LoadError as e:
            logger.error(str(e))
            logger.error("Failed to load matrices, stopping execution.")
            return PipelineReport(status="unavailable", error=str(e))

        logger.info(f"Loaded {len(model)} model and {len(space)} space transforms")
        result = self.match(model, space)

        report = PipelineReport(status="completed", result=result)

        try:
            report.output_path = export_offsets(
                result.matching_offsets, self.config.assets.output_path
            )
        except ExportError as e:
            logger.error(str(e))
            report.status = "export_failed"
            report.error = str(e)

        marker_path = self.config.markers.export_path
        if marker_path is not None:
            from .visualization.markers import export_markers

            target = self.config.assets.resolve(marker_path)
            try:
                report.marker_path = export_markers(result, target, self.config.markers)
            except (OSError, ValueError) as e:
                logger.error(f"Could not write markers to {target}: {e}")
                report.status = "export_failed"
                report.error = report.error or f"Could not write markers: {e} (path: {target})"

        return report


def run_pipeline(config: MatcherConfig | None = None) -> PipelineReport:
    """Convenience function to run a pipeline for a configuration."""
    return MatchPipeline(config).run()
