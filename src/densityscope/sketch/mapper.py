"""
Input coordinate → de Jong coefficient mapping.
"""

from dataclasses import dataclass
from typing import Optional

from densityscope.sketch.base import SketchConfig, scale


@dataclass(frozen=True)
class Coefficients:
    """The four de Jong map coefficients."""
    a: float
    b: float
    c: float
    d: float


class ParameterMapper:
    """
    Converts a raw 2-D input coordinate into attractor coefficients.

    Each coefficient is an affine re-map of one input axis scaled by
    the configured sensitivity. Inputs outside the documented ranges
    extrapolate linearly.
    """

    def __init__(self, config: Optional[SketchConfig] = None):
        self.cfg = config or SketchConfig()

    def map(self, x: float, y: float) -> Coefficients:
        cfg = self.cfg
        k = cfg.sensitivity
        return Coefficients(
            a=scale(x, *cfg.x_range_a, *cfg.out_range_a) * k,
            b=scale(y, *cfg.y_range_b, *cfg.out_range_b) * k,
            c=scale(x, *cfg.x_range_c, *cfg.out_range_c) * k,
            d=scale(y, *cfg.y_range_d, *cfg.out_range_d) * k,
        )
