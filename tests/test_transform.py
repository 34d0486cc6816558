"""Tests for Transform and translation_matrix."""

import numpy as np
import pytest

from matrixmatch.core.transform import FIELD_NAMES, Transform, translation_matrix


class TestTransformBasics:
    """Test basic Transform functionality."""

    def test_identity(self):
        """Test identity transform holds the identity matrix."""
        t = Transform.identity()
        np.testing.assert_array_equal(t.matrix, np.eye(4))
        assert t.matrix.dtype == np.float32

    def test_invalid_shape_raises(self):
        """Test that non-4x4 input raises."""
        with pytest.raises(ValueError):
            Transform(np.eye(3))

    def test_matrix_is_read_only(self):
        """Test that a Transform cannot be mutated through its matrix."""
        t = Transform.identity()
        with pytest.raises(ValueError):
            t.matrix[0, 3] = 5.0

    def test_source_array_is_copied(self):
        """Test that mutating the source array does not affect the Transform."""
        source = np.eye(4, dtype=np.float32)
        t = Transform(source)
        source[0, 3] = 7.0
        assert t[0, 3] == 0.0

    def test_position(self):
        """Test translation column extraction."""
        matrix = np.eye(4)
        matrix[:3, 3] = [1.0, 2.0, 3.0]
        t = Transform(matrix)
        np.testing.assert_array_equal(t.position, [1.0, 2.0, 3.0])

    def test_indexing(self):
        """Test [row, col] indexing."""
        matrix = np.arange(16, dtype=np.float32).reshape(4, 4)
        t = Transform(matrix)
        assert t[0, 3] == 3.0
        assert t[3, 0] == 12.0

    def test_equality_and_hash(self):
        """Test that equal matrices compare and hash equal."""
        a = Transform.from_trs(position=(1.0, 2.0, 3.0))
        b = Transform.from_trs(position=(1.0, 2.0, 3.0))
        c = Transform.from_trs(position=(1.0, 2.0, 4.0))
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_determinant(self):
        """Test determinant of the 3x3 block."""
        assert Transform.from_trs(scale=2.0).determinant == pytest.approx(8.0)
        assert Transform.from_trs(scale=(-1.0, 1.0, 1.0)).determinant == pytest.approx(-1.0)


class TestTranslation:
    """Test translation helpers."""

    def test_translation_matrix(self):
        """Test pure translation matrix layout."""
        t = translation_matrix([5.0, -1.0, 2.0])
        expected = np.eye(4)
        expected[:3, 3] = [5.0, -1.0, 2.0]
        np.testing.assert_array_equal(t, expected)
        assert t.dtype == np.float32

    def test_translated_only_changes_translation(self):
        """Test that translating leaves the 3x3 block untouched."""
        t = Transform.from_trs(position=(1.0, 2.0, 3.0), rotation=(10.0, 20.0, 30.0), scale=1.5)
        moved = t.translated([4.0, 5.0, 6.0])

        np.testing.assert_array_equal(moved.linear, t.linear)
        np.testing.assert_allclose(moved.position, [5.0, 7.0, 9.0], atol=1e-6)
        np.testing.assert_array_equal(moved.matrix[3], [0.0, 0.0, 0.0, 1.0])

    def test_translated_returns_new_transform(self):
        """Test that translating does not modify the original."""
        t = Transform.identity()
        t.translated([1.0, 1.0, 1.0])
        np.testing.assert_array_equal(t.position, [0.0, 0.0, 0.0])


class TestFromTRS:
    """Test construction from translation, rotation and scale."""

    def test_translation_only(self):
        """Test translation-only transform."""
        t = Transform.from_trs(position=(10.0, 20.0, 30.0))
        np.testing.assert_array_almost_equal(t.matrix[:3, 3], [10.0, 20.0, 30.0])
        np.testing.assert_array_almost_equal(t.linear, np.eye(3))

    def test_rotation_z(self):
        """Test Z-rotation transform."""
        t = Transform.from_trs(rotation=(0.0, 0.0, 90.0))

        # 90 degree Z rotation: x -> y, y -> -x
        point = np.array([1.0, 0.0, 0.0, 1.0])
        result = t.matrix @ point
        np.testing.assert_array_almost_equal(result[:3], [0.0, 1.0, 0.0])

    def test_scale_then_translate(self):
        """Test that scale is applied before translation."""
        t = Transform.from_trs(position=(10.0, 0.0, 0.0), scale=2.0)
        result = t.matrix @ np.array([1.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_almost_equal(result[:3], [12.0, 0.0, 0.0])


class TestRecords:
    """Test conversion to and from named fields."""

    def test_field_names_row_major(self):
        """Test field order is m00, m01, ... m33."""
        assert FIELD_NAMES[0] == "m00"
        assert FIELD_NAMES[3] == "m03"
        assert FIELD_NAMES[4] == "m10"
        assert FIELD_NAMES[-1] == "m33"
        assert len(FIELD_NAMES) == 16

    def test_from_record(self):
        """Test that m03/m13/m23 land in the translation column."""
        record = {name: 0.0 for name in FIELD_NAMES}
        record.update(m00=1.0, m11=1.0, m22=1.0, m33=1.0, m03=4.0, m13=5.0, m23=6.0)
        t = Transform.from_record(record)
        np.testing.assert_array_equal(t.position, [4.0, 5.0, 6.0])

    def test_from_record_missing_field(self):
        """Test that an incomplete record raises KeyError."""
        with pytest.raises(KeyError):
            Transform.from_record({"m00": 1.0})

    def test_record_roundtrip(self):
        """Test to_record followed by from_record."""
        original = Transform.from_trs(position=(1.5, -2.0, 3.25), rotation=(30.0, 45.0, 60.0))
        restored = Transform.from_record(original.to_record())
        assert restored == original
