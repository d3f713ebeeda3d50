"""
FFmpeg video encoder.

Pipes raw RGB frames to ffmpeg via stdin. No intermediate files:
frames go straight from numpy arrays to the encoder.
"""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Iterator


# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def ffmpeg_available() -> bool:
    return shutil.which("ffmpeg") is not None


def encode_video(
    frame_iterator: Iterator,
    output_path: Path,
    width: int,
    height: int,
    fps: int = 30,
    quality: str = "medium",
    total_frames: int | None = None,
    progress_callback: callable = None,
) -> Path:
    """
    Encode frames to a silent MP4.

    Args:
        frame_iterator: Yields (H, W, 3) uint8 row-major numpy arrays.
        output_path: Output MP4 path.
        width: Frame width.
        height: Frame height.
        fps: Frames per second.
        quality: "high", "medium", or "fast".
        total_frames: Total frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.
    """
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["medium"])

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = [
        "ffmpeg", "-y",
        # Raw video input from pipe
        "-f", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", "pipe:0",
        # Video encoding
        "-c:v", "libx264",
        "-preset", preset,
        "-crf", crf,
        "-pix_fmt", pix_fmt,
        "-an",
        str(output_path),
    ]

    # stderr must not be a pipe: nothing drains it while frames are written
    with tempfile.TemporaryFile() as errlog:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=errlog,
        )

        frame_count = 0
        try:
            for frame in frame_iterator:
                proc.stdin.write(frame.tobytes())
                frame_count += 1

                if progress_callback and total_frames:
                    progress_callback(frame_count, total_frames)

        except BrokenPipeError:
            pass
        finally:
            if proc.stdin:
                proc.stdin.close()

        proc.wait()

        if proc.returncode != 0:
            errlog.seek(0)
            stderr = errlog.read().decode("utf-8", errors="replace")
            error_lines = [
                line for line in stderr.split("\n")
                if "error" in line.lower() or "invalid" in line.lower()
            ]
            error_msg = "\n".join(error_lines[-5:]) if error_lines else stderr[-500:]
            raise RuntimeError(
                f"ffmpeg exited with code {proc.returncode}: {error_msg}"
            )

    return output_path
