"""Matplotlib-based display of rendered frames.

Frames come out of the renderer as flat uint8 buffers. This module turns
them back into (height, width, 3) RGB images and shows them in a Matplotlib
figure.

Example:
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.preview.display import show_frame
    >>>
    >>> frame = render(scene, 320, 180)
    >>> show_frame(frame, 320, 180)
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

# Byte order of pixel triples in a frame buffer
ChannelOrder = Literal["rgb", "bgr"]


def frame_to_image(
    frame: npt.NDArray[np.uint8],
    width: int,
    height: int,
    channel_order: ChannelOrder = "rgb",
) -> npt.NDArray[np.uint8]:
    """Reshape a flat frame buffer into an RGB image.

    Args:
        frame: Flat uint8 buffer of length width * height * 3, row-major
            from the top-left pixel.
        width: Image width in pixels.
        height: Image height in pixels.
        channel_order: Byte order of the buffer's pixel triples.

    Returns:
        Array of shape (height, width, 3) in RGB order.

    Raises:
        ValueError: If the buffer size or channel order doesn't match.
    """
    expected = width * height * 3
    if frame.size != expected:
        raise ValueError(f"Frame has {frame.size} bytes, expected {expected} for {width}x{height}")

    image = np.asarray(frame, dtype=np.uint8).reshape(height, width, 3)

    if channel_order == "bgr":
        image = image[:, :, ::-1]
    elif channel_order != "rgb":
        raise ValueError(f"Unknown channel order: {channel_order}")

    return np.ascontiguousarray(image)


def show_frame(
    frame: npt.NDArray[np.uint8],
    width: int,
    height: int,
    *,
    channel_order: ChannelOrder = "rgb",
    title: str | None = None,
    figsize: tuple[float, float] | None = None,
    block: bool = True,
) -> None:
    """Display a rendered frame as a Matplotlib figure.

    Args:
        frame: Flat uint8 frame buffer from the renderer.
        width: Image width in pixels.
        height: Image height in pixels.
        channel_order: Byte order of the buffer's pixel triples.
        title: Custom title (default shows the resolution).
        figsize: Figure size in inches (default keeps the aspect ratio).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    image = frame_to_image(frame, width, height, channel_order)

    if figsize is None:
        figsize = (8.0, 8.0 * height / width)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {width}x{height}")

    plt.tight_layout()
    plt.show(block=block)
