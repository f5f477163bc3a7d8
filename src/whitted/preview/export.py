"""Image export utilities for rendered frames.

Frames are already legalized to 8 bits per channel, so export is a
reshape (and channel swap for BGR buffers) followed by a Pillow save.

Supported formats:
    - PNG (8-bit RGB via Pillow); other extensions Pillow knows also work

Example:
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.preview.export import save_png
    >>>
    >>> frame = render(scene, 1280, 720)
    >>> save_png(frame, 1280, 720, "rendered.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import ChannelOrder, frame_to_image


def save_png(
    frame: npt.NDArray[np.uint8],
    width: int,
    height: int,
    filepath: str,
    *,
    channel_order: ChannelOrder = "rgb",
) -> None:
    """Save a flat frame buffer as a PNG file.

    Args:
        frame: Flat uint8 buffer of length width * height * 3.
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).
        channel_order: Byte order of the buffer's pixel triples.

    Raises:
        ValueError: If the buffer size or channel order doesn't match.
    """
    save_png_from_image(frame_to_image(frame, width, height, channel_order), filepath)


def save_png_from_image(image: npt.NDArray[np.uint8], filepath: str) -> None:
    """Save an RGB image array as a PNG file.

    Args:
        image: Array of shape (H, W, 3) with dtype uint8, RGB order.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the image is not an (H, W, 3) array.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(filepath)
