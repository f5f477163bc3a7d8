"""Geometry module for shape primitives.

This module provides the two analytic primitives of the tracer:

Components:
    sphere: Sphere primitive with near-root ray-sphere intersection
    plane: One-sided infinite plane

Intersection is brute force over a handful of objects, so there is no
acceleration structure. Every intersection routine is a Taichi function
returning a distance, with NO_HIT (0.0) meaning the ray missed:

    distance = intersect_shape(ray_origin, ray_direction, shape)
"""

from .plane import Plane, intersect_plane, make_plane, plane_normal
from .sphere import NO_HIT, Sphere, intersect_sphere, make_sphere, sphere_normal

__all__ = [
    "NO_HIT",
    "Sphere",
    "intersect_sphere",
    "make_sphere",
    "sphere_normal",
    "Plane",
    "intersect_plane",
    "make_plane",
    "plane_normal",
]
