"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    pinhole: Look-at pinhole camera with a fixed, scaled view basis

Camera responsibilities:
    - Derive forward/right/up once from an eye point and a target
    - Hold the active camera in GPU-side fields during a render pass
    - Turn recentered screen offsets into unit primary ray directions
"""

from .pinhole import (
    BASIS_SCALE,
    Camera,
    get_camera_basis,
    get_camera_info,
    get_camera_position,
    get_ray,
    setup_camera,
)

__all__ = [
    "Camera",
    "BASIS_SCALE",
    "setup_camera",
    "get_ray",
    "get_camera_position",
    "get_camera_basis",
    "get_camera_info",
]
