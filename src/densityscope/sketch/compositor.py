"""
Density → color compositing.

Each visited cell gets an HSB color: hue from its provenance, and
saturation/brightness from its log-normalized density. The color is
soft-light blended over whatever the pixel already holds, so repeated
non-clearing renders progressively refine the image.

The pixel buffer is indexed ``[x, y]`` like the density grid (the
pygame surfarray layout).
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from densityscope.sketch.base import SketchConfig, scale
from densityscope.sketch.colorgrade import hsb255_to_rgb, soft_light
from densityscope.sketch.normalizer import DensityNormalizer
from densityscope.sketch.simulator import DensityField


@dataclass
class Canvas:
    """N x N RGB pixel buffer plus the mask of pixels painted so far."""

    size: int
    background: Tuple[int, int, int] = (0, 0, 0)
    pixels: np.ndarray = field(init=False)
    painted: np.ndarray = field(init=False)

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        self.pixels = np.empty((self.size, self.size, 3), dtype=np.uint8)
        self.painted = np.zeros((self.size, self.size), dtype=bool)
        self.reset()

    def reset(self) -> None:
        self.pixels[:] = self.background
        self.painted.fill(False)


class ImageCompositor:
    """Paints a DensityField onto a Canvas."""

    HUE_RANGE = (128.0, 255.0)
    SATURATION_RANGE = (128.0, 0.0)
    BRIGHTNESS_RANGE = (0.0, 255.0)

    def __init__(self, config: Optional[SketchConfig] = None):
        self.cfg = config or SketchConfig()

    def cell_colors(
        self,
        state: DensityField,
        mask: np.ndarray,
        extra_brightness: int,
    ) -> np.ndarray:
        """HSB-derived RGB colors for the cells selected by ``mask``."""
        n = state.size
        intensity = DensityNormalizer(state).intensity(state.density[mask])

        hue = scale(state.provenance[mask], 0.0, float(n), *self.HUE_RANGE)
        sat = scale(intensity, 0.0, 1.0, *self.SATURATION_RANGE)
        bright = scale(intensity, 0.0, 1.0, *self.BRIGHTNESS_RANGE) + extra_brightness
        return hsb255_to_rgb(hue, sat, bright)

    def render(
        self,
        state: DensityField,
        canvas: Canvas,
        extra_brightness: int = 0,
        clear: bool = False,
    ) -> np.ndarray:
        """
        Composite the field into the canvas.

        Args:
            state: Density/provenance source.
            canvas: Target buffer (mutated in place).
            extra_brightness: Added to every painted cell's brightness.
            clear: Reset the canvas to background first.

        Returns:
            The canvas pixel buffer.
        """
        if clear:
            canvas.reset()

        mask = state.density > 0
        if not np.any(mask):
            return canvas.pixels

        new = self.cell_colors(state, mask, extra_brightness)
        old = canvas.pixels[mask]
        seen = canvas.painted[mask]

        # Unpainted pixels are transparent: the new color lands as-is.
        blended = soft_light(new, old)
        canvas.pixels[mask] = np.where(seen[:, np.newaxis], blended, new)
        canvas.painted[mask] = True
        return canvas.pixels
