"""De Jong attractor density renderer for live coordinate streams."""

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.scheduler import RenderScheduler, SchedulerState
from densityscope.sketch.session import SketchSession

__version__ = "0.1.0"
__all__ = [
    "SketchConfig",
    "RenderScheduler",
    "SchedulerState",
    "SketchSession",
]
