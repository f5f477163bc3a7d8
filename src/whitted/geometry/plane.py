"""One-sided infinite plane primitive.

A plane is stored in implicit form: all points P with normal . P + offset = 0.
The normal also marks the visible side; rays travelling along the normal
(or parallel to the plane) never hit it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.plane import Plane, intersect_plane
    >>> # Floor at y=0, visible from above
    >>> floor = Plane(normal=ti.math.vec3(0, 1, 0), offset=0.0)
    >>> # Use intersect_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from .sphere import NO_HIT

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Plane:
    """An infinite one-sided plane.

    Attributes:
        normal: The plane normal, facing the visible side (vec3).
        offset: The plane constant d in normal . P + d = 0.
    """

    normal: vec3
    offset: ti.f32


@ti.func
def intersect_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane) -> ti.f32:
    """Find the distance along a ray to a one-sided plane.

    With denom = normal . direction, the ray only hits when it travels
    against the normal (denom < 0). The distance is then
        (normal . origin + offset) / -denom

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        plane: The plane to test.

    Returns:
        The positive distance to the plane, or NO_HIT (0.0) when the ray is
        parallel, departing, or the plane lies behind the origin.
    """
    denom = tm.dot(plane.normal, ray_direction)

    distance = NO_HIT
    if denom < 0.0:
        distance = (tm.dot(plane.normal, ray_origin) + plane.offset) / -denom

    if distance <= 0.0:
        distance = NO_HIT

    return distance


@ti.func
def plane_normal(plane: Plane, point: vec3) -> vec3:
    """Return the plane normal (the same for every point)."""
    return plane.normal


@ti.func
def make_plane(normal: vec3, offset: ti.f32) -> Plane:
    """Create a plane from its normal and offset."""
    return Plane(normal=normal, offset=offset)
