import os

import numpy as np
from PIL import Image

from .errors import FrameWriteError


def frame_path(output_dir: str, index: int) -> str:
    return os.path.join(output_dir, f"{index:04d}.ppm")


def write_ppm(frame: np.ndarray, path: str) -> None:
    """Write a (height, width, 3) uint8 frame as a binary P6 pixmap.

    Pillow emits ``P6\\n<width> <height>\\n255\\n`` followed by the raw RGB
    rows, top row first.
    """
    if frame.dtype != np.uint8 or frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"expected a (height, width, 3) uint8 frame, got {frame.dtype} {frame.shape}")
    image = Image.fromarray(np.ascontiguousarray(frame))
    try:
        image.save(path, format="PPM")
    except OSError as e:
        raise FrameWriteError(path, e) from e
