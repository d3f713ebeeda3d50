"""
Replay a coordinate stream through a RenderScheduler.
"""

from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.scheduler import RenderScheduler, SchedulerState


class SketchSession:
    """
    Feeds coordinates to the scheduler the way a live sample stream would.

    Each incoming point reparametrizes the attractor and is followed by
    up to ``ticks_per_point`` refinement frames. ``finish`` then keeps
    refining the last attractor with a fresh frame limit.
    """

    def __init__(
        self,
        config: Optional[SketchConfig] = None,
        seed: Optional[int] = None,
        scheduler: Optional[RenderScheduler] = None,
    ):
        self.scheduler = scheduler or RenderScheduler(config, seed=seed)
        self.cfg = self.scheduler.cfg

    def _refine(self, ticks: int) -> Iterator[Tuple[str, np.ndarray]]:
        for _ in range(ticks):
            frame = self.scheduler.tick()
            if frame is None:
                return
            yield "tick", frame

    def play(
        self,
        points: Iterable[Tuple[float, float]],
        ticks_per_point: int = 0,
    ) -> Iterator[Tuple[str, np.ndarray]]:
        """
        Yields:
            ("reparametrize" | "tick", frame) for every rendered frame.
            Frames alias the live pixel buffer; copy them to keep them.
        """
        for x, y in points:
            yield "reparametrize", self.scheduler.reparametrize(x, y)
            yield from self._refine(ticks_per_point)

    def finish(self, ticks: Optional[int] = None) -> Iterator[Tuple[str, np.ndarray]]:
        """Resume refinement of the current attractor for up to ``ticks`` frames."""
        if self.scheduler.state is SchedulerState.IDLE:
            return
        self.scheduler.resume_session()
        yield from self._refine(self.cfg.max_steps if ticks is None else ticks)
