"""Sphere primitive with ray-sphere intersection.

This module provides a Sphere dataclass and the intersection and normal
queries the tracer needs. Intersection uses the projection form of the
quadratic: project the center onto the ray, then step back by the half chord.

Only the near root is considered. A ray whose origin is past the center
(eo . d < 0) never hits, and a distance of zero is treated as a miss so
secondary rays cannot re-hit their own origin.

A negative radius is a valid degenerate sphere. The radius only enters the
intersection squared and the normal does not depend on it, so such a sphere
is intersected exactly like its positive counterpart.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import normalize_or_zero

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Returned by intersection routines when the ray misses
NO_HIT = 0.0


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Negative values are allowed.
    """

    center: vec3
    radius: ti.f32


@ti.func
def intersect_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> ti.f32:
    """Find the distance to the near intersection of a ray with a sphere.

    With eo = center - origin and v = eo . direction:
        discriminant = radius^2 - (eo . eo - v^2)
        distance = v - sqrt(discriminant)

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test.

    Returns:
        The positive distance along the ray to the hit point, or NO_HIT (0.0)
        if the sphere is behind the ray, missed, or the distance is not
        positive.
    """
    eo = sphere.center - ray_origin
    v = tm.dot(eo, ray_direction)

    distance = NO_HIT
    if v >= 0.0:
        discriminant = sphere.radius * sphere.radius - (tm.dot(eo, eo) - v * v)
        if discriminant >= 0.0:
            distance = v - ti.sqrt(discriminant)

    # Origin inside the sphere gives a negative near root
    if distance <= 0.0:
        distance = NO_HIT

    return distance


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Compute the surface normal of a sphere at a point.

    Args:
        sphere: The sphere.
        point: A point on the sphere surface.

    Returns:
        normalize(point - center). Unit length for any boundary point,
        independent of the sign of the radius.
    """
    return normalize_or_zero(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
