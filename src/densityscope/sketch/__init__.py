"""
Attractor density sketch: mapping, simulation, normalization,
compositing and scheduling.
"""

from densityscope.sketch.base import SketchConfig
from densityscope.sketch.compositor import Canvas, ImageCompositor
from densityscope.sketch.mapper import Coefficients, ParameterMapper
from densityscope.sketch.normalizer import DensityNormalizer
from densityscope.sketch.scheduler import RenderScheduler, SchedulerState
from densityscope.sketch.simulator import AttractorSimulator, DensityField
