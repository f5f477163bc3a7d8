"""Surfaces module for the procedural material model.

This module implements the position-dependent surfaces used for shading:

Components:
    surface: Surface description, pattern enum, GPU registry and evaluators
    presets: The fixed surfaces used by the sample scenes

Each surface provides, for any world position:
    - diffuse color (RGB)
    - specular color (RGB)
    - mirror reflectivity (scalar)
and a position-independent roughness (the Phong-style specular exponent).

Surface evaluation is implemented as Taichi functions indexed by surface ID.
"""

from .presets import (
    CHECKERBOARD,
    FLOOR_CHECKER,
    PRESETS,
    RIPPLE,
    SHINY,
    X_WALL,
    Z_WALL,
)
from .surface import (
    MAX_SURFACES,
    RIPPLE_THRESHOLD,
    Surface,
    SurfacePattern,
    add_surface,
    clear_surfaces,
    get_surface_count,
    get_surface_roughness,
    surface_diffuse,
    surface_is_primary,
    surface_reflectivity,
    surface_specular_color,
)

__all__ = [
    # Surface model
    "Surface",
    "SurfacePattern",
    "RIPPLE_THRESHOLD",
    "MAX_SURFACES",
    "add_surface",
    "clear_surfaces",
    "get_surface_count",
    "surface_is_primary",
    "surface_diffuse",
    "surface_specular_color",
    "surface_reflectivity",
    "get_surface_roughness",
    # Presets
    "X_WALL",
    "Z_WALL",
    "CHECKERBOARD",
    "FLOOR_CHECKER",
    "RIPPLE",
    "SHINY",
    "PRESETS",
]
