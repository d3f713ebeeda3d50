"""
Numbered still-frame export.

Writes rendered pixel buffers as ``<base>-NNN.<ext>`` images, the
sequence number zero-padded to three digits.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

SUPPORTED_EXTENSIONS = ("jpg", "jpeg", "png", "bmp", "tif", "tiff")


class FrameExporter:
    """
    Saves frames to a directory with an auto-incrementing sequence.

    Pixel buffers are expected in the sketch's ``[x, y]`` layout and
    are transposed to row-major before encoding.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        base_name: str = "frame",
        extension: str = "jpg",
        quality: int = 95,
    ):
        """
        Initialize the exporter.

        Args:
            directory: Output directory (created on first save).
            base_name: Filename prefix.
            extension: Image format extension, without the dot.
            quality: JPEG quality (ignored by lossless formats).
        """
        extension = extension.lower().lstrip(".")
        if extension not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported image extension '{extension}', "
                f"expected one of {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        if not base_name:
            raise ValueError("base_name must not be empty")

        self.directory = Path(directory)
        self.base_name = base_name
        self.extension = extension
        self.quality = quality
        self.sequence = 0

    def frame_name(self, index: int) -> str:
        """Filename for sequence number ``index``."""
        return f"{self.base_name}-{index:03d}.{self.extension}"

    def save(self, pixels: np.ndarray) -> Path:
        """
        Write one frame and advance the sequence.

        Args:
            pixels: (N, N, 3) uint8 buffer indexed [x, y].

        Returns:
            Path to the written file.
        """
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected (W, H, 3) pixel buffer, got {pixels.shape}")

        self.directory.mkdir(parents=True, exist_ok=True)
        output_path = self.directory / self.frame_name(self.sequence)

        image = Image.fromarray(to_image_array(pixels))
        if self.extension in ("jpg", "jpeg"):
            image.save(output_path, quality=self.quality)
        else:
            image.save(output_path)

        self.sequence += 1
        return output_path


def to_image_array(pixels: np.ndarray) -> np.ndarray:
    """Transpose an [x, y] buffer to a contiguous row-major uint8 image."""
    return np.ascontiguousarray(np.transpose(pixels, (1, 0, 2)), dtype=np.uint8)
