"""Tests for density → pixel compositing."""

import numpy as np
import pytest

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.colorgrade import soft_light
from densityscope.sketch.compositor import Canvas, ImageCompositor
from densityscope.sketch.simulator import AttractorSimulator, DensityField

SIZE = 16


def _field(counts: dict, provenance: float = 8.0) -> DensityField:
    field = DensityField(SIZE)
    for (i, j), n in counts.items():
        field.density[i, j] = n
        field.provenance[i, j] = provenance
    field.observe_peak(int(field.density.max()))
    return field


@pytest.fixture
def compositor():
    return ImageCompositor(SketchConfig(size=SIZE))


class TestCanvas:
    def test_initial_background(self):
        canvas = Canvas(SIZE)
        assert canvas.pixels.shape == (SIZE, SIZE, 3)
        assert canvas.pixels.dtype == np.uint8
        assert not canvas.pixels.any()
        assert not canvas.painted.any()

    def test_custom_background(self):
        canvas = Canvas(4, background=(10, 20, 30))
        np.testing.assert_array_equal(canvas.pixels[2, 3], [10, 20, 30])

    def test_rejects_bad_size(self):
        with pytest.raises(ValueError):
            Canvas(-1)


class TestImageCompositor:
    def test_empty_field_gives_background(self, compositor):
        canvas = Canvas(SIZE)
        out = compositor.render(DensityField(SIZE), canvas, extra_brightness=50, clear=True)
        assert not out.any()
        assert not canvas.painted.any()

    def test_empty_field_leaves_pixels_unchanged(self, compositor):
        canvas = Canvas(SIZE)
        canvas.pixels[:] = np.random.default_rng(1).integers(0, 256, (SIZE, SIZE, 3))
        canvas.painted[:] = True
        before = canvas.pixels.copy()
        compositor.render(DensityField(SIZE), canvas)
        np.testing.assert_array_equal(canvas.pixels, before)

    def test_first_paint_takes_new_color(self, compositor):
        field = _field({(2, 3): 5, (7, 7): 1})
        canvas = Canvas(SIZE)
        compositor.render(field, canvas, extra_brightness=50)

        mask = field.density > 0
        expected = compositor.cell_colors(field, mask, 50)
        np.testing.assert_array_equal(canvas.pixels[mask], expected)
        np.testing.assert_array_equal(canvas.painted, mask)

    def test_second_paint_soft_light_blends(self, compositor):
        field = _field({(2, 3): 5, (7, 7): 2})
        canvas = Canvas(SIZE)
        compositor.render(field, canvas, extra_brightness=50)
        old = canvas.pixels.copy()

        compositor.render(field, canvas, extra_brightness=0)
        mask = field.density > 0
        new = compositor.cell_colors(field, mask, 0)
        np.testing.assert_array_equal(canvas.pixels[mask], soft_light(new, old[mask]))

    def test_zero_density_cells_untouched(self, compositor):
        field = _field({(1, 1): 3})
        canvas = Canvas(SIZE)
        canvas.pixels[5, 5] = (40, 50, 60)
        canvas.painted[5, 5] = True
        compositor.render(field, canvas)
        np.testing.assert_array_equal(canvas.pixels[5, 5], [40, 50, 60])
        np.testing.assert_array_equal(canvas.pixels[0, 0], [0, 0, 0])

    def test_clear_resets_before_paint(self, compositor):
        canvas = Canvas(SIZE)
        canvas.pixels[:] = 200
        canvas.painted[:] = True
        field = _field({(4, 4): 2})
        compositor.render(field, canvas, clear=True)
        assert canvas.painted.sum() == 1
        np.testing.assert_array_equal(canvas.pixels[0, 0], [0, 0, 0])

    def test_single_visit_max_does_not_fault(self, compositor):
        field = _field({(1, 2): 1, (3, 4): 1})
        canvas = Canvas(SIZE)
        out = compositor.render(field, canvas, extra_brightness=50)
        assert canvas.painted.sum() == 2
        # Unscaled cells get brightness from extra_brightness alone
        assert out[1, 2].max() > 0

    def test_provenance_drives_hue(self, compositor):
        # Max of 16 keeps these cells partly saturated
        field = _field({(1, 1): 4, (2, 2): 4, (5, 5): 16})
        field.provenance[1, 1] = 0.0
        field.provenance[2, 2] = SIZE / 2
        mask = field.density > 0
        colors = compositor.cell_colors(field, mask, 0)
        assert not np.array_equal(colors[0], colors[1])

    def test_extra_brightness_brightens(self, compositor):
        field = _field({(1, 1): 2, (2, 2): 8})
        mask = field.density > 0
        dim = compositor.cell_colors(field, mask, 0).astype(int)
        bright = compositor.cell_colors(field, mask, 50).astype(int)
        assert np.all(bright.max(axis=1) >= dim.max(axis=1))
        assert bright.sum() > dim.sum()

    def test_simulated_render(self, small_config, classic_coefficients):
        field = DensityField(small_config.size)
        AttractorSimulator(small_config, seed=2).run_batch(field, classic_coefficients, 2, clear=True)
        canvas = Canvas(small_config.size)
        out = ImageCompositor(small_config).render(field, canvas, 50, clear=True)
        assert out.shape == (small_config.size, small_config.size, 3)
        np.testing.assert_array_equal(canvas.painted, field.density > 0)
