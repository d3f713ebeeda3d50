"""Tests for log-density normalization."""

import math

import numpy as np
import pytest

from densityscope.sketch.normalizer import DensityNormalizer
from densityscope.sketch.simulator import DensityField


def _field_with(counts: dict, size: int = 8) -> DensityField:
    field = DensityField(size)
    for (i, j), n in counts.items():
        field.density[i, j] = n
    field.observe_peak(int(field.density.max()))
    return field


class TestDensityNormalizer:
    def test_exposes_running_maximum(self):
        norm = DensityNormalizer(_field_with({(0, 0): 20, (1, 1): 4}))
        assert norm.max_density == 20
        assert norm.log_max_density == pytest.approx(math.log(20))

    def test_intensity_range(self):
        norm = DensityNormalizer(_field_with({(0, 0): 20}))
        result = norm.intensity(np.array([1, 20]))
        np.testing.assert_allclose(result, [0.0, 1.0])

    def test_intensity_is_log_ratio(self):
        norm = DensityNormalizer(_field_with({(0, 0): 100}))
        assert norm.intensity(np.array([10]))[0] == pytest.approx(0.5)

    def test_empty_field_is_guarded(self):
        norm = DensityNormalizer(DensityField(8))
        assert norm.max_density == 0
        assert not norm.has_scale
        result = norm.intensity(np.array([1, 2, 3]))
        assert np.all(result == 0.0)
        assert np.all(np.isfinite(result))

    def test_single_visit_maximum_is_guarded(self):
        norm = DensityNormalizer(_field_with({(0, 0): 1, (3, 3): 1}))
        assert norm.log_max_density == 0.0
        result = norm.intensity(np.array([1, 1]))
        np.testing.assert_array_equal(result, [0.0, 0.0])

    def test_preserves_shape(self):
        norm = DensityNormalizer(_field_with({(0, 0): 9}))
        assert norm.intensity(np.ones((4, 5))).shape == (4, 5)
