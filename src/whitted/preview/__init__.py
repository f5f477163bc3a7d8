"""Preview module for output and visualization.

This module handles rendered frame output and the animated preview:

Components:
    display: Frame reshaping and Matplotlib-based display
    export: PNG export via Pillow
    interactive: Taichi GGUI window with an orbiting camera

Example:
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.preview import save_png, show_frame
    >>>
    >>> frame = render(scene, 640, 360)
    >>> show_frame(frame, 640, 360)
    >>> save_png(frame, 640, 360, "output.png")

For the animated GGUI preview:
    >>> from src.whitted.preview import AnimatedPreview
    >>> AnimatedPreview(1280, 720, scene).run()
"""

from src.whitted.preview.display import ChannelOrder, frame_to_image, show_frame
from src.whitted.preview.export import save_png, save_png_from_image
from src.whitted.preview.interactive import AnimatedPreview

__all__ = [
    # Animated preview
    "AnimatedPreview",
    # Display functions
    "frame_to_image",
    "show_frame",
    "ChannelOrder",
    # Export functions
    "save_png",
    "save_png_from_image",
]
