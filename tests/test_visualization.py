"""Tests for marker meshes and the matplotlib preview."""

import numpy as np
import pytest

from matrixmatch.core.config import MarkerParams
from matrixmatch.core.matcher import MatchResult
from matrixmatch.visualization.markers import build_marker_mesh, export_markers


@pytest.fixture
def result() -> MatchResult:
    return MatchResult(
        matching_offsets=[(1.0, 0.0, 0.0), (0.0, 5.0, 0.0)],
        non_matching_points=[(-2.0, -2.0, 3.0)],
    )


class TestMarkerMesh:
    """Test cube marker generation."""

    def test_one_cube_per_entry(self, result):
        """Test marker count matches offsets plus unmatched points."""
        mesh = build_marker_mesh(result)
        assert len(mesh.vertices) == 8 * 3
        assert len(mesh.faces) == 12 * 3

    def test_cube_placement_and_size(self, result):
        """Test cubes are centered on their entries with the configured size."""
        mesh = build_marker_mesh(result, MarkerParams(size=0.5))

        first = mesh.vertices[:8]
        np.testing.assert_allclose(first.mean(axis=0), [1.0, 0.0, 0.0], atol=1e-9)
        np.testing.assert_allclose(first.max(axis=0) - first.min(axis=0), [0.5, 0.5, 0.5])

        last = mesh.vertices[16:]
        np.testing.assert_allclose(last.mean(axis=0), [-2.0, -2.0, 3.0], atol=1e-9)

    def test_group_colors(self, result):
        """Test offsets and unmatched points get their own colors."""
        params = MarkerParams()
        colors = build_marker_mesh(result, params).visual.face_colors

        np.testing.assert_array_equal(colors[:24], np.tile(params.offset_color, (24, 1)))
        np.testing.assert_array_equal(colors[24:], np.tile(params.point_color, (12, 1)))

    def test_single_entry(self):
        """Test a result with one entry gives one cube."""
        mesh = build_marker_mesh(MatchResult(matching_offsets=[(0.0, 0.0, 0.0)]))
        assert len(mesh.faces) == 12

    def test_empty_result(self):
        """Test an empty result gives an empty mesh."""
        mesh = build_marker_mesh(MatchResult())
        assert len(mesh.faces) == 0

    def test_export(self, result, tmp_path):
        """Test writing markers to disk."""
        path = export_markers(result, tmp_path / "out" / "markers.ply")
        assert path is not None
        assert path.exists()

    def test_export_empty_skipped(self, tmp_path):
        """Test that nothing is written for an empty result."""
        assert export_markers(MatchResult(), tmp_path / "markers.ply") is None
        assert not (tmp_path / "markers.ply").exists()


class TestPreview:
    """Test the matplotlib preview figure."""

    def test_build_figure(self, result):
        """Test the figure holds both groups."""
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from matrixmatch.visualization.preview import build_preview_figure

        fig = build_preview_figure(result, title="test")
        try:
            ax = fig.axes[0]
            assert ax.get_title() == "test"
            labels = [t.get_text() for t in ax.get_legend().get_texts()]
            assert labels == ["Offsets (2)", "Unmatched (1)"]
        finally:
            plt.close(fig)
