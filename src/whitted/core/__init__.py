"""Core rendering module.

This module contains the building blocks of the Whitted ray tracer:

Components:
    ray: Ray data structure and vector utilities
    integrator: Direct lighting, shadows and mirror reflection
    renderer: Per-pixel primary rays and the 8-bit frame buffer

All compute-intensive operations use Taichi kernels for GPU acceleration.
"""

from .ray import (
    Ray,
    cross,
    dot,
    length,
    make_ray,
    normalize,
    normalize_or_zero,
    ray_at,
    reflect,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.whitted.core.integrator or src.whitted.core.renderer.
#
# For rendering frames, use:
#   from src.whitted.core.renderer import Renderer, render

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "normalize",
    "normalize_or_zero",
    "dot",
    "cross",
    "reflect",
]
