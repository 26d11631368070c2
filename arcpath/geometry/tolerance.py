from __future__ import annotations

import math

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12

# Per-axis tolerance for point equality (Vector2d ==).
EPS_EQUAL = 1e-6

# Determinant cutoff below which two lines are treated as parallel.
EPS_PARALLEL = 1e-9

# Delta below which a line is treated as vertical when computing its t-value.
EPS_AXIS = 1e-8

# Per-axis size below which a simplified segment is dropped.
EPS_DEGENERATE = 1e-10

# Default flattening tolerance for Bezier length/projection queries.
DEFAULT_FLATNESS = 1e-3

# Maximum subdivision depth of the biarc fitter.
MAX_FIT_DEPTH = 50

# Curve parameters sampled when measuring biarc error.
ERROR_SAMPLE_T = (0.2, 0.4, 0.6, 0.8)

# Arcs with a larger radius are replaced by lines unless a policy says otherwise.
MAX_ARC_RADIUS = math.inf
