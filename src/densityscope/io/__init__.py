"""Input tracks, still-frame export and video encoding."""

from densityscope.io.exporter import FrameExporter
from densityscope.io.track import load_track
