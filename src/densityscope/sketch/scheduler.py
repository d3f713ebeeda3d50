"""
Frame scheduling for the density sketch.

Two modes:
  - reparametrize: new coefficients, full reset, one short sample
    burst and a bright preview frame.
  - tick: non-clearing refinement batch plus a composited frame,
    for up to ``max_steps`` frames after which the session stops.
"""

import enum
from typing import Optional

import numpy as np

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.compositor import Canvas, ImageCompositor
from densityscope.sketch.mapper import Coefficients, ParameterMapper
from densityscope.sketch.simulator import AttractorSimulator, DensityField


class SchedulerState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class RenderScheduler:
    """
    Drives the simulator and compositor from external events.

    Owns the field, canvas and coefficients of a single session. Calls
    must be serialized by the caller.
    """

    def __init__(
        self,
        config: Optional[SketchConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.cfg = config or SketchConfig()
        self.mapper = ParameterMapper(self.cfg)
        self.simulator = AttractorSimulator(self.cfg, rng=rng, seed=seed)
        self.compositor = ImageCompositor(self.cfg)

        self.field = DensityField(self.cfg.size)
        self.canvas = Canvas(self.cfg.size)
        self.coefficients: Optional[Coefficients] = None

        self.state = SchedulerState.IDLE
        self.step_counter = 0

    @property
    def frame(self) -> np.ndarray:
        """Current pixel buffer, indexed [x, y]."""
        return self.canvas.pixels

    def reparametrize(self, x: float, y: float) -> np.ndarray:
        """Start a fresh attractor from input coordinate (x, y)."""
        cfg = self.cfg
        self.coefficients = self.mapper.map(x, y)
        self.simulator.run_batch(
            self.field, self.coefficients, cfg.preview_samples, clear=True
        )
        self.compositor.render(
            self.field, self.canvas, cfg.preview_brightness, clear=True
        )
        self.step_counter = 0
        self.state = SchedulerState.RUNNING
        return self.frame

    def tick(self) -> Optional[np.ndarray]:
        """
        Run one refinement step.

        Returns:
            The updated frame, or None when nothing was rendered
            (idle, stopped, or the step that hit the frame limit).
        """
        if self.state is not SchedulerState.RUNNING:
            return None

        self.step_counter += 1
        if self.step_counter > self.cfg.max_steps:
            self.state = SchedulerState.STOPPED
            return None

        cfg = self.cfg
        self.simulator.run_batch(self.field, self.coefficients, cfg.refine_samples)
        self.compositor.render(self.field, self.canvas, cfg.refine_brightness)
        return self.frame

    def resume_session(self) -> None:
        """Keep refining the current attractor with a fresh frame limit."""
        if self.state is SchedulerState.IDLE:
            return
        self.step_counter = 0
        self.state = SchedulerState.RUNNING

    def clear_canvas(self) -> None:
        """Drop the current attractor and blank the canvas."""
        self.field.reset()
        self.canvas.reset()
        self.coefficients = None
        self.step_counter = 0
        self.state = SchedulerState.IDLE
