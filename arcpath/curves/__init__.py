from . import bezier
from .bezier import BezPoints
from .biarc import BiarcArc, BiarcLine, BiarcSeg, fit, from_bezier, from_monotone_bezier
from .fit_config import FitPolicy, scaled_fit_policy

__all__ = [
    "bezier",
    "BezPoints",
    "BiarcLine",
    "BiarcArc",
    "BiarcSeg",
    "fit",
    "from_bezier",
    "from_monotone_bezier",
    "FitPolicy",
    "scaled_fit_policy",
]
