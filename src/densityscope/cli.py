"""
CLI entry point for the attractor density renderer.

Usage:
    densityscope <track_file> [options]
    python -m densityscope <track_file> [options]
"""

import argparse
import sys
import time
from pathlib import Path

from PIL import Image

from densityscope.io.encoder import encode_video, ffmpeg_available
from densityscope.io.exporter import FrameExporter, to_image_array
from densityscope.io.track import load_track
from densityscope.sketch.base import SketchConfig
from densityscope.sketch.session import SketchSession

PROFILES = {
    "low": {"size": 300, "fps": 30, "quality": "fast"},
    "medium": {"size": 600, "fps": 30, "quality": "medium"},
    "high": {"size": 1000, "fps": 60, "quality": "high"},
}


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def expected_frames(n_points: int, ticks: int, final_ticks: int, max_steps: int) -> int:
    """Number of frames a session will yield for the given schedule."""
    if n_points == 0:
        return 0
    per_point = 1 + min(ticks, max_steps)
    return n_points * per_point + min(final_ticks, max_steps)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="densityscope",
        description="Render a coordinate track as a de Jong attractor density image",
    )

    parser.add_argument(
        "track",
        type=Path,
        help="Coordinate track (text 'x y' per line, or JSON)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Final still image path (default: <track>_density.png)",
    )

    # Canvas & Profile
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=["low", "medium", "high"],
        help="Target profile (low: 300px, medium: 600px, high: 1000px)",
    )
    parser.add_argument("--size", type=int, default=None, help="Canvas edge length (overrides profile)")
    parser.add_argument("--seed", type=int, default=None, help="Jitter random seed")
    parser.add_argument(
        "--jitter", type=float, default=0.001,
        help="Per-step jitter half-width; 0 for a deterministic trajectory (default: 0.001)",
    )

    # Schedule
    parser.add_argument(
        "--ticks", type=int, default=6,
        help="Refinement frames after each input point (default: 6)",
    )
    parser.add_argument(
        "--final-ticks", type=int, default=127,
        help="Refinement frames on the last attractor after the track ends (default: 127)",
    )

    # Output
    parser.add_argument("--frames-dir", type=Path, default=None, help="Also save every frame here")
    parser.add_argument("--frame-name", type=str, default="frame", help="Base name for saved frames")
    parser.add_argument(
        "--frame-format", type=str, default="jpg",
        choices=["jpg", "png"],
        help="Image format for saved frames (default: jpg)",
    )
    parser.add_argument("--video", type=Path, default=None, help="Also encode all frames to this MP4")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Video frames per second (overrides profile)")
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.ticks < 0 or args.final_ticks < 0:
        print("Error: --ticks and --final-ticks must be >= 0", file=sys.stderr)
        sys.exit(1)

    if not args.track.exists():
        print(f"Error: Track file not found: {args.track}", file=sys.stderr)
        sys.exit(1)

    p_cfg = PROFILES[args.profile]
    size = args.size if args.size is not None else p_cfg["size"]
    fps = args.fps if args.fps is not None else p_cfg["fps"]
    quality = args.quality or p_cfg["quality"]

    if fps <= 0:
        print(f"Error: --fps must be > 0, got {fps}", file=sys.stderr)
        sys.exit(1)

    if args.video is not None:
        if not ffmpeg_available():
            print("Error: ffmpeg not found on PATH (required for --video)", file=sys.stderr)
            sys.exit(1)
        if size % 2:
            print(f"Error: --video needs an even canvas size, got {size}", file=sys.stderr)
            sys.exit(1)

    try:
        config = SketchConfig(size=size, jitter=args.jitter)
        points = load_track(args.track)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not points:
        print(f"Error: Track has no points: {args.track}", file=sys.stderr)
        sys.exit(1)

    output = args.output
    if output is None:
        output = args.track.with_name(f"{args.track.stem}_density.png")

    total_frames = expected_frames(len(points), args.ticks, args.final_ticks, config.max_steps)
    print(f"Rendering {len(points)} points at {size}x{size}")
    print(f"  Ticks per point: {args.ticks}, final ticks: {args.final_ticks}")
    print(f"  Frames: {total_frames}")

    session = SketchSession(config, seed=args.seed)
    exporter = None
    if args.frames_dir is not None:
        exporter = FrameExporter(args.frames_dir, args.frame_name, args.frame_format)

    def frames(report: bool = True):
        count = 0
        events = [session.play(points, args.ticks), session.finish(args.final_ticks)]
        for stream in events:
            for _, pixels in stream:
                if exporter is not None:
                    exporter.save(pixels)
                count += 1
                if report:
                    _progress_bar(count, total_frames)
                yield to_image_array(pixels)

    t0 = time.time()
    if args.video is not None:
        try:
            encode_video(
                frame_iterator=frames(report=False),
                output_path=args.video,
                width=size,
                height=size,
                fps=fps,
                quality=quality,
                total_frames=total_frames,
                progress_callback=_progress_bar,
            )
        except RuntimeError as e:
            print(f"\nError: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        for _ in frames():
            pass

    output.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(to_image_array(session.scheduler.frame)).save(output)

    elapsed = time.time() - t0
    f = session.scheduler.field
    print(f"\nDone! max density {f.max_density}")
    print(f"  Render took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {output}")
    if exporter is not None:
        print(f"  Frames: {args.frames_dir} ({exporter.sequence} files)")
    if args.video is not None:
        print(f"  Video: {args.video}")


if __name__ == "__main__":
    main()
