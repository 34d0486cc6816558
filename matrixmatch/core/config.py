"""Configuration management for matrixmatch.

This module defines all configuration models using Pydantic for validation.
Configuration can be loaded from JSON files or constructed programmatically.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from .matcher import DEFAULT_TOLERANCE


class MatchParams(BaseModel):
    """Parameters for the offset search."""

    tolerance: float = Field(
        default=DEFAULT_TOLERANCE,
        gt=0,
        description="Largest allowed per-element difference between matched transforms"
    )
    dedup_decimals: int | None = Field(
        default=None,
        ge=0,
        le=9,
        description="Round offsets to this many decimals when deduplicating. None = exact comparison."
    )


class AssetParams(BaseModel):
    """Where the transform files are read from and the offsets written to."""

    assets_dir: Path = Field(
        default=Path("StreamingAssets"),
        description="Directory that relative file names are resolved against"
    )
    model_file: str = Field(default="model.json", description="Model transforms file")
    space_file: str = Field(default="space.json", description="Space transforms file")
    output_file: str = Field(default="output.json", description="Offsets output file")

    def resolve(self, name: str | Path) -> Path:
        """Resolve a file name against the assets directory.

        Absolute paths are returned unchanged.
        """
        path = Path(name)
        if path.is_absolute():
            return path
        return self.assets_dir / path

    @property
    def model_path(self) -> Path:
        return self.resolve(self.model_file)

    @property
    def space_path(self) -> Path:
        return self.resolve(self.space_file)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.output_file)


class MarkerParams(BaseModel):
    """Appearance of the cube markers built for each result entry."""

    size: float = Field(default=0.2, gt=0, description="Edge length of each marker cube")
    offset_color: tuple[int, int, int, int] = Field(
        default=(0, 0, 255, 255),
        description="RGBA color for matching offsets"
    )
    point_color: tuple[int, int, int, int] = Field(
        default=(255, 255, 255, 255),
        description="RGBA color for unmatched model positions"
    )
    export_path: Path | None = Field(
        default=None,
        description="Write the marker mesh here after matching. None = skip."
    )


class MatcherConfig(BaseModel):
    """Main configuration container."""

    match: MatchParams = Field(default_factory=MatchParams)
    assets: AssetParams = Field(default_factory=AssetParams)
    markers: MarkerParams = Field(default_factory=MarkerParams)

    @classmethod
    def from_file(cls, path: Path | str) -> MatcherConfig:
        """Load configuration from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def default(cls) -> MatcherConfig:
        """Create a default configuration."""
        return cls()
