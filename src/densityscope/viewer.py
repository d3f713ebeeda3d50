"""
Live pygame viewer for the density sketch.

Controls:
  - mouse click  → reparametrize from the pointer position
  - r            → resume refinement of the current attractor
  - c            → clear the canvas
  - s            → save the current frame (``<base>-NNN.jpg``)
  - Esc / close  → quit

A recorded track can be replayed as the input stream: one point is
fed every ``ticks_per_point`` display frames.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from densityscope.io.exporter import FrameExporter
from densityscope.io.track import load_track
from densityscope.sketch.base import SketchConfig, scale
from densityscope.sketch.scheduler import RenderScheduler


def window_to_input(
    pos: Tuple[int, int],
    size: int,
    config: SketchConfig,
) -> Tuple[float, float]:
    """Scale a window pixel position onto the documented input ranges."""
    x_lo, x_hi = config.x_range_a
    y_lo, y_hi = config.y_range_b
    return (
        scale(pos[0], 0.0, float(size), x_lo, x_hi),
        scale(pos[1], 0.0, float(size), y_lo, y_hi),
    )


class SketchViewer:
    """Couples a RenderScheduler to a pygame window and input stream."""

    def __init__(
        self,
        config: Optional[SketchConfig] = None,
        seed: Optional[int] = None,
        points: Optional[List[Tuple[float, float]]] = None,
        ticks_per_point: int = 6,
        exporter: Optional[FrameExporter] = None,
    ):
        self.cfg = config or SketchConfig()
        self.scheduler = RenderScheduler(self.cfg, seed=seed)
        self.points = list(points or [])
        self.ticks_per_point = max(1, ticks_per_point)
        self.exporter = exporter or FrameExporter(Path.cwd(), "sketch")
        self.running = True
        self._frame_index = 0

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN:
            x, y = window_to_input(event.pos, self.cfg.size, self.cfg)
            self.scheduler.reparametrize(x, y)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_r:
                self.scheduler.resume_session()
            elif event.key == pygame.K_c:
                self.scheduler.clear_canvas()
            elif event.key == pygame.K_s:
                path = self.exporter.save(self.scheduler.frame)
                print(f"Saved {path}", flush=True)

    def step(self) -> None:
        """Advance one display frame: feed the track, then refine."""
        if self.points and self._frame_index % self.ticks_per_point == 0:
            x, y = self.points.pop(0)
            self.scheduler.reparametrize(x, y)
            if not self.points:
                print("Track finished, refining last attractor", flush=True)
        else:
            self.scheduler.tick()
        self._frame_index += 1

    def run(self, fps: int = 60) -> None:
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.cfg.size, self.cfg.size))
            pygame.display.set_caption("densityscope")
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.step()
                pygame.surfarray.blit_array(screen, self.scheduler.frame)
                pygame.display.flip()
                clock.tick(fps)
        finally:
            pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="densityscope-view",
        description="Interactive de Jong attractor density sketch",
    )
    parser.add_argument("--track", type=Path, default=None, help="Replay a coordinate track")
    parser.add_argument("--size", type=int, default=600, help="Canvas edge length (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Jitter random seed")
    parser.add_argument("--fps", type=int, default=60, help="Display frame rate (default: 60)")
    parser.add_argument(
        "--ticks", type=int, default=6,
        help="Display frames between track points (default: 6)",
    )
    parser.add_argument("--save-dir", type=Path, default=Path("."), help="Where 's' saves frames")
    args = parser.parse_args(argv)

    try:
        config = SketchConfig(size=args.size)
        points = load_track(args.track) if args.track else []
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    viewer = SketchViewer(
        config,
        seed=args.seed,
        points=points,
        ticks_per_point=args.ticks,
        exporter=FrameExporter(args.save_dir, "sketch"),
    )
    viewer.run(fps=args.fps)


if __name__ == "__main__":
    main()
