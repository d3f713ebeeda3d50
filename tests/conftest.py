"""Pytest configuration and shared fixtures."""

import math
import os

import pytest

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.mapper import Coefficients

# Small canvas so simulation tests stay fast
TEST_SIZE = 64


@pytest.fixture
def small_config() -> SketchConfig:
    """Small canvas, short batches, default jitter."""
    return SketchConfig(size=TEST_SIZE, iterations_per_unit=500)


@pytest.fixture
def exact_config() -> SketchConfig:
    """Small canvas with jitter disabled (deterministic trajectory)."""
    return SketchConfig(size=TEST_SIZE, iterations_per_unit=500, jitter=0.0)


@pytest.fixture
def classic_coefficients() -> Coefficients:
    """Well-known chaotic de Jong parameters; the orbit stays on-canvas."""
    return Coefficients(a=1.4, b=-2.3, c=2.4, d=-2.1)


def reference_trajectory(coefficients: Coefficients, size: int, steps: int):
    """
    Pure-Python jitter-free de Jong orbit from the canvas center.

    Returns:
        List of (newx, newy, oldx) per step.
    """
    half = float(size // 2)
    spread = size * 0.2
    x, y = half, half
    out = []
    for _ in range(steps):
        nx = (math.sin(coefficients.a * y) - math.cos(coefficients.b * x)) * spread + half
        ny = (math.sin(coefficients.c * x) - math.cos(coefficients.d * y)) * spread + half
        out.append((nx, ny, x))
        x, y = nx, ny
    return out


@pytest.fixture
def reference():
    return reference_trajectory


@pytest.fixture
def track_text() -> str:
    return "\n".join([
        "# recorded elbow positions",
        "100 200",
        "$",
        "",
        "600.5, 900",
        "1200 1800  # far corner",
    ])


@pytest.fixture
def fake_ffmpeg(tmp_path, monkeypatch):
    """Install an ``ffmpeg`` shell script at the front of PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def install(body: str):
        script = bin_dir / "ffmpeg"
        script.write_text("#!/bin/sh\n" + body)
        script.chmod(0o755)
        monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
        return script

    return install
