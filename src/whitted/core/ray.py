"""Ray data structure and vector utilities for the Whitted ray tracer.

This module provides the Ray dataclass and the small set of vector helpers
the tracer needs. All functions are Taichi functions and can only be called
from inside Taichi kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Vectors shorter than this normalize to zero instead of NaN
ZERO_LENGTH_EPSILON = 1e-12


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Expected to be unit
            length; intersection distances assume it but nothing enforces it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product of two vectors."""
    return tm.cross(a, b)


@ti.func
def normalize_or_zero(v: vec3) -> vec3:
    """Normalize a vector, mapping zero-length input to the zero vector.

    taichi.math.normalize divides by the length unconditionally and produces
    NaN for a zero vector. Degenerate inputs occur in practice (a camera
    looking straight down has a zero right vector, a light placed exactly on
    a surface point has a zero direction), so they resolve to zero here.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the direction of v, or (0, 0, 0) if v has no length.
    """
    len_sq = tm.dot(v, v)
    result = vec3(0.0, 0.0, 0.0)
    if len_sq > ZERO_LENGTH_EPSILON:
        result = v / ti.sqrt(len_sq)
    return result


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Zero-length vectors return the zero vector (see normalize_or_zero).
    """
    return normalize_or_zero(v)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes incident - 2 * (normal . incident) * normal. The normal should
    be unit length for a mirror reflection.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * tm.dot(normal, incident) * normal
