from __future__ import annotations

import pytest

from arcpath.errors import GeometryError, InvalidBoundsError
from arcpath.geometry.bounds import BoundingBox
from arcpath.geometry.vector import Vector2d


def test_bounds_from_points_and_extent() -> None:
    b = BoundingBox.from_points(Vector2d(2.0, -1.0), Vector2d(0.0, 3.0))
    assert b.min.to_tuple() == (0.0, -1.0)
    assert b.max.to_tuple() == (2.0, 3.0)
    assert b.width == 2.0
    assert b.height == 4.0


def test_bounds_containment_is_strict() -> None:
    b = BoundingBox(Vector2d(0.0, 0.0), Vector2d(2.0, 2.0))
    assert b.contains_point(Vector2d(1.0, 1.0))
    assert not b.contains_point(Vector2d(0.0, 1.0))
    assert b.contains_bounds(BoundingBox(Vector2d(0.5, 0.5), Vector2d(1.5, 1.5)))
    assert not b.contains_bounds(BoundingBox(Vector2d(0.0, 0.5), Vector2d(1.5, 1.5)))


def test_bounds_overlap_extend_and_expand() -> None:
    a = BoundingBox(Vector2d(0.0, 0.0), Vector2d(1.0, 1.0))
    assert a.overlaps(BoundingBox(Vector2d(0.5, 0.5), Vector2d(2.0, 2.0)))
    assert not a.overlaps(BoundingBox(Vector2d(1.0, 0.0), Vector2d(2.0, 1.0)))

    grown = a.extend_with_point(Vector2d(3.0, -1.0))
    assert grown.min.to_tuple() == (0.0, -1.0)
    assert grown.max.to_tuple() == (3.0, 1.0)

    e = a.expand(0.5)
    assert e.min.to_tuple() == (-0.5, -0.5)
    assert e.max.to_tuple() == (1.5, 1.5)


def test_bounds_merge() -> None:
    merged = BoundingBox.merge(
        [
            BoundingBox(Vector2d(0.0, 0.0), Vector2d(1.0, 1.0)),
            BoundingBox(Vector2d(-2.0, 0.5), Vector2d(0.5, 4.0)),
        ]
    )
    assert merged is not None
    assert merged.min.to_tuple() == (-2.0, 0.0)
    assert merged.max.to_tuple() == (1.0, 4.0)
    assert BoundingBox.merge([]) is None


def test_inverted_bounds_raise() -> None:
    with pytest.raises(InvalidBoundsError) as exc:
        BoundingBox(Vector2d(1.0, 0.0), Vector2d(0.0, 1.0))
    assert exc.value.code == "invalid_bounds"
    assert exc.value.min.to_tuple() == (1.0, 0.0)
    assert isinstance(exc.value, GeometryError)
    assert isinstance(exc.value, ValueError)
