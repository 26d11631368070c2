from __future__ import annotations

import math

import numpy as np
import pytest

from arcpath.geometry.transform import Matrix3x3
from arcpath.geometry.vector import Vector2d


def test_translation_rotation_and_composition_order() -> None:
    assert Matrix3x3.translation(2.0, -1.0).transform(Vector2d(1.0, 1.0)) == Vector2d(3.0, 0.0)
    assert Matrix3x3.rotation(math.pi / 2.0).transform(Vector2d(1.0, 0.0)) == Vector2d(0.0, 1.0)
    assert Matrix3x3.rotation(math.pi / 2.0, origin=Vector2d(1.0, 1.0)).transform(Vector2d(2.0, 1.0)) == Vector2d(1.0, 2.0)

    m = Matrix3x3.translation(1.0, 0.0) @ Matrix3x3.scaling(2.0)
    assert m.transform(Vector2d(1.0, 0.0)) == Vector2d(3.0, 0.0)


def test_similarity_detection_and_scale() -> None:
    assert Matrix3x3.identity().is_similarity()
    uniform = Matrix3x3.rotation(0.3) @ Matrix3x3.scaling(2.0)
    assert uniform.is_similarity()
    assert abs(uniform.scale_factor() - 2.0) < 1e-12
    assert not Matrix3x3.scaling(2.0, 1.0).is_similarity()

    mirror = Matrix3x3.scaling(-1.0, 1.0)
    assert mirror.is_similarity()
    assert mirror.determinant() < 0.0


def test_inverse_round_trips_points() -> None:
    m = Matrix3x3.rotation(0.7, origin=Vector2d(3.0, -2.0)) @ Matrix3x3.scaling(1.5)
    p = Vector2d(0.25, 4.0)
    assert m.inverse().transform(m.transform(p)) == p
    assert np.allclose((m @ m.inverse()).m, np.eye(3))


def test_matrix_shape_is_validated() -> None:
    with pytest.raises(ValueError):
        Matrix3x3(np.eye(2))
