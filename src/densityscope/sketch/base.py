"""
Configuration and shared helpers for the attractor sketch.
"""

from dataclasses import dataclass
from typing import Tuple


def scale(value, in_lo: float, in_hi: float, out_lo: float, out_hi: float):
    """
    Linearly re-map ``value`` from [in_lo, in_hi] to [out_lo, out_hi].

    No clamping: values outside the input range extrapolate. Works on
    scalars and numpy arrays alike.
    """
    return out_lo + (out_hi - out_lo) * ((value - in_lo) / (in_hi - in_lo))


@dataclass
class SketchConfig:
    """Configuration for the de Jong density sketch."""

    size: int = 600  # canvas edge length N (grids are N x N)

    # Coordinate → coefficient mapping
    sensitivity: float = 0.03
    x_range_a: Tuple[float, float] = (0.0, 1200.0)
    y_range_b: Tuple[float, float] = (0.0, 1800.0)
    x_range_c: Tuple[float, float] = (0.0, 1800.0)
    y_range_d: Tuple[float, float] = (0.0, 1800.0)
    out_range_a: Tuple[float, float] = (-0.8, 0.9)
    out_range_b: Tuple[float, float] = (-0.8, 0.8)
    out_range_c: Tuple[float, float] = (-0.8, 0.6)
    out_range_d: Tuple[float, float] = (-0.8, 0.6)

    # Simulation
    iterations_per_unit: int = 10000
    jitter: float = 0.001  # half-width of the uniform per-step perturbation

    # Scheduling
    preview_samples: int = 1
    preview_brightness: int = 50
    refine_samples: int = 60
    refine_brightness: int = 0
    max_steps: int = 127  # refinement frames before the session stops

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.iterations_per_unit <= 0:
            raise ValueError(
                f"iterations_per_unit must be positive, got {self.iterations_per_unit}"
            )
        if self.jitter < 0:
            raise ValueError(f"jitter must be >= 0, got {self.jitter}")
        if self.preview_samples < 0 or self.refine_samples < 0:
            raise ValueError("sample counts must be >= 0")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        for name in ("x_range_a", "y_range_b", "x_range_c", "y_range_d"):
            lo, hi = getattr(self, name)
            if lo == hi:
                raise ValueError(f"{name} is degenerate: ({lo}, {hi})")

    @property
    def center(self) -> int:
        """Canvas center; integer division, so odd sizes round down."""
        return self.size // 2
