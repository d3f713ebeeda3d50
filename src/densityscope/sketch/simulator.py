"""
Peter de Jong attractor density simulation.

Iterates the map

    x' = (sin(a * y) - cos(b * x)) * N * 0.2 + N/2
    y' = (sin(c * x) - cos(d * y)) * N * 0.2 + N/2

and accumulates a per-cell visit histogram on an N x N grid. Each hit
cell also records the x-coordinate of the point that *preceded* the
landing point (its provenance), which later drives the cell's hue.

Points that land outside the canvas are dropped from the histogram;
the trajectory keeps following them.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

import numba
import numpy as np

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.mapper import Coefficients


@numba.njit(cache=True)  # type: ignore[misc]
def _dejong_kernel(
    density: np.ndarray,
    provenance: np.ndarray,
    x: float,
    y: float,
    a: float,
    b: float,
    c: float,
    d: float,
    jitter: np.ndarray,
):
    """Serial de Jong iteration; one step per jitter row.

    Returns (x, y, hits, peak) where peak is the largest count touched.
    """
    N = density.shape[0]
    half = float(N // 2)
    spread = N * 0.2
    hits = 0
    peak = 0
    for k in range(jitter.shape[0]):
        nx = (math.sin(a * y) - math.cos(b * x)) * spread + half + jitter[k, 0]
        ny = (math.sin(c * x) - math.cos(d * y)) * spread + half + jitter[k, 1]
        if 0.0 <= nx < N and 0.0 <= ny < N:
            i = int(nx)
            j = int(ny)
            density[i, j] += 1
            provenance[i, j] = x
            hits += 1
            if density[i, j] > peak:
                peak = density[i, j]
        x = nx
        y = ny
    return x, y, hits, peak


@dataclass
class DensityField:
    """Histogram, provenance and trajectory state for one session."""

    size: int
    density: np.ndarray = field(init=False)
    provenance: np.ndarray = field(init=False)
    max_density: int = field(init=False, default=0)
    log_max_density: float = field(init=False, default=0.0)
    x: float = field(init=False, default=0.0)
    y: float = field(init=False, default=0.0)

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        self.density = np.zeros((self.size, self.size), dtype=np.int64)
        self.provenance = np.zeros((self.size, self.size), dtype=np.float64)
        self.reset()

    def reset(self) -> None:
        """Zero both grids and the running maximum, recenter the trajectory."""
        self.density.fill(0)
        self.provenance.fill(0.0)
        self.max_density = 0
        self.log_max_density = 0.0
        self.x = float(self.size // 2)
        self.y = float(self.size // 2)

    def observe_peak(self, peak: int) -> None:
        """Raise the running maximum if ``peak`` exceeds it."""
        if peak > self.max_density:
            self.max_density = int(peak)
            self.log_max_density = math.log(self.max_density)


class AttractorSimulator:
    """
    Runs batches of de Jong iterations against a DensityField.

    Jitter is drawn from the injected generator so that output is
    reproducible for a fixed seed. ``config.jitter == 0`` gives the
    exact deterministic trajectory.
    """

    def __init__(
        self,
        config: Optional[SketchConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.cfg = config or SketchConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def _draw_jitter(self, n: int) -> np.ndarray:
        if self.cfg.jitter > 0:
            return self.rng.uniform(-self.cfg.jitter, self.cfg.jitter, size=(n, 2))
        return np.zeros((n, 2), dtype=np.float64)

    def run_batch(
        self,
        state: DensityField,
        coefficients: Coefficients,
        sample_units: int,
        iterations_per_unit: Optional[int] = None,
        clear: bool = False,
    ) -> int:
        """
        Advance the trajectory ``sample_units * iterations_per_unit`` steps.

        Args:
            state: Field to accumulate into (mutated in place).
            coefficients: Map coefficients from the ParameterMapper.
            sample_units: Number of iteration blocks to run.
            iterations_per_unit: Steps per block (default from config).
            clear: Reset grids, maximum and trajectory first.

        Returns:
            Number of steps whose point landed inside the canvas.
        """
        if iterations_per_unit is None:
            iterations_per_unit = self.cfg.iterations_per_unit
        if clear:
            state.reset()

        n = max(0, sample_units) * iterations_per_unit
        if n == 0:
            return 0

        x, y, hits, peak = _dejong_kernel(
            state.density,
            state.provenance,
            float(state.x),
            float(state.y),
            float(coefficients.a),
            float(coefficients.b),
            float(coefficients.c),
            float(coefficients.d),
            self._draw_jitter(n),
        )
        state.x = float(x)
        state.y = float(y)
        state.observe_peak(int(peak))
        return int(hits)
