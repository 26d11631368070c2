from __future__ import annotations

from dataclasses import dataclass

from arcpath.geometry.tolerance import EPS_POS, MAX_ARC_RADIUS, MAX_FIT_DEPTH

# Baseline fitting tolerance for unit-scale drawings.
FIT_TOLERANCE = 0.01


@dataclass(frozen=True)
class FitPolicy:
    """How Bezier segments are turned into lines and arcs."""

    tolerance: float = FIT_TOLERANCE
    max_radius: float = MAX_ARC_RADIUS
    disable_arcs: bool = False
    max_depth: int = MAX_FIT_DEPTH

    def __post_init__(self) -> None:
        if not float(self.tolerance) > 0.0:
            raise ValueError("FitPolicy tolerance must be > 0")
        if not float(self.max_radius) > 0.0:
            raise ValueError("FitPolicy max_radius must be > 0")
        if int(self.max_depth) < 0:
            raise ValueError("FitPolicy max_depth must be >= 0")


def scaled_fit_policy(
    drawing_scale: float = 1.0,
    user_tolerance: float | None = None,
    *,
    max_radius: float = MAX_ARC_RADIUS,
    disable_arcs: bool = False,
) -> FitPolicy:
    """Tolerance proportional to the drawing size, never below an explicit user tolerance."""
    s = max(float(drawing_scale), EPS_POS)
    tol = FIT_TOLERANCE * s
    if user_tolerance is not None:
        tol = max(tol, float(user_tolerance))
    return FitPolicy(tolerance=tol, max_radius=float(max_radius), disable_arcs=bool(disable_arcs))
