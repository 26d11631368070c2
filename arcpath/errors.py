from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple


class GeometryError(ValueError):
    code = "geometry_error"


class InvalidArcError(GeometryError):
    """No circle of the given radius passes through both endpoints in the given winding."""

    code = "invalid_arc"

    def __init__(self, message: str, start: Any = None, end: Any = None, radius: Optional[float] = None, clockwise: Optional[bool] = None) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.radius = radius
        self.clockwise = clockwise


class DiscontinuousPathError(GeometryError):
    code = "discontinuous_path"

    def __init__(self, index: int) -> None:
        super().__init__(f"Path is not continuous, disruption at index {index}")
        self.index = int(index)


class PathNotClosedError(GeometryError):
    code = "path_not_closed"


class InvalidBoundsError(GeometryError):
    code = "invalid_bounds"

    def __init__(self, min_pt: Any, max_pt: Any) -> None:
        super().__init__(f"Bounding box min {min_pt} exceeds max {max_pt}")
        self.min = min_pt
        self.max = max_pt


class UnsupportedTransformError(GeometryError):
    code = "unsupported_transform"


class SegmentDecodeError(GeometryError):
    code = "invalid_record"

    def __init__(self, message: str, record: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.record = record


class FitDepthExceededError(RuntimeError):
    """Biarc subdivision went past its depth limit for the given control points."""

    code = "fit_depth_exceeded"

    def __init__(self, curve: Tuple[Any, Any, Any, Any], depth: int) -> None:
        pts = ", ".join(f"({p.x!r}, {p.y!r})" for p in curve)
        super().__init__(f"Biarc fitting exceeded depth {depth} for curve [{pts}]")
        self.curve = tuple(curve)
        self.depth = int(depth)
