"""
Logarithmic density normalization.
"""

import numpy as np

from densityscope.sketch.simulator import DensityField


class DensityNormalizer:
    """
    Maps visit counts onto [0, 1] by log(count) / log(max count).

    An empty field (max 0) or a field whose busiest cell was visited
    once (log max 0) has no usable scale; intensity is then 0 for
    every cell instead of a division by zero.
    """

    def __init__(self, state: DensityField):
        self.state = state

    @property
    def max_density(self) -> int:
        return self.state.max_density

    @property
    def log_max_density(self) -> float:
        return self.state.log_max_density

    @property
    def has_scale(self) -> bool:
        return self.state.max_density > 1 and self.state.log_max_density > 0.0

    def intensity(self, density: np.ndarray) -> np.ndarray:
        """
        Args:
            density: Positive visit counts (any shape).

        Returns:
            float64 array of the same shape, log-normalized.
        """
        density = np.asarray(density, dtype=np.float64)
        if not self.has_scale:
            return np.zeros_like(density)
        return np.log(np.maximum(density, 1.0)) / self.log_max_density
