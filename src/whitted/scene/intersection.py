"""Scene-level storage and nearest-hit intersection.

This module stores the active scene's primitives and lights in Taichi fields
and provides the brute-force intersector used by the tracer:

- nearest_intersection(): the closest hit along a ray, with the object hit
- shadow_distance(): only the distance of the closest hit, for occlusion

Objects are tested in scene order (all spheres, then all planes). A later
object replaces the current best only when it is strictly closer, so the
first of two equally distant objects wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import (
    ...     add_sphere, add_plane, clear_scene, nearest_intersection
    ... )
    >>> clear_scene()
    >>> add_sphere((0, 1, 0), 1.0, surface_id=0)
    >>> add_plane((0, 1, 0), 0.0, surface_id=1)
    >>> # Use nearest_intersection within a Taichi kernel
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.whitted.geometry.plane import Plane, intersect_plane, plane_normal
from src.whitted.geometry.sphere import NO_HIT, Sphere, intersect_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


class ObjectKind(IntEnum):
    """Enumeration of scene object kinds stored in an Intersection."""

    SPHERE = 0
    PLANE = 1


@ti.dataclass
class Intersection:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: 1 if the ray hit an object, 0 otherwise.
        distance: Distance along the ray to the hit point (> 0).
            Only valid if hit == 1.
        origin: Origin of the intersected ray.
        direction: Direction of the intersected ray.
        object_kind: ObjectKind of the object hit. Only valid if hit == 1.
        object_index: Index of the object in its kind's storage arrays.
            Only valid if hit == 1.
    """

    hit: ti.i32
    distance: ti.f32
    origin: vec3
    direction: vec3
    object_kind: ti.i32
    object_index: ti.i32


# Maximum number of primitives and lights supported in the scene
MAX_SPHERES = 256
MAX_PLANES = 256
MAX_LIGHTS = 64

# Sphere storage: Structure of Arrays layout for GPU efficiency
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_surface_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Plane storage
plane_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PLANES)
plane_offsets = ti.field(dtype=ti.f32, shape=MAX_PLANES)
plane_surface_ids = ti.field(dtype=ti.i32, shape=MAX_PLANES)
num_planes = ti.field(dtype=ti.i32, shape=())

# Point light storage
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives and lights from the scene.

    Resets the counts to zero. The actual field data is not cleared but will
    be overwritten when new primitives are added.
    """
    num_spheres[None] = 0
    num_planes[None] = 0
    num_lights[None] = 0


def add_sphere(center: tuple[float, float, float], radius: float, surface_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere. Negative radii are kept as given.
        surface_id: The surface ID to shade this sphere with.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = vec3(center[0], center[1], center[2])
    sphere_radii[idx] = radius
    sphere_surface_ids[idx] = surface_id
    num_spheres[None] = idx + 1
    return idx


def add_plane(normal: tuple[float, float, float], offset: float, surface_id: int = 0) -> int:
    """Add a one-sided plane to the scene.

    The normal is stored as given. Shading assumes it is unit length; a
    non-unit normal scales the plane offset and the lighting terms.

    Args:
        normal: The plane normal, facing the visible side.
        offset: The plane constant d in normal . P + d = 0.
        surface_id: The surface ID to shade this plane with.

    Returns:
        The index of the added plane.

    Raises:
        RuntimeError: If the maximum number of planes is exceeded.
    """
    idx = num_planes[None]
    if idx >= MAX_PLANES:
        raise RuntimeError(f"Maximum number of planes ({MAX_PLANES}) exceeded")
    plane_normals[idx] = vec3(normal[0], normal[1], normal[2])
    plane_offsets[idx] = offset
    plane_surface_ids[idx] = surface_id
    num_planes[None] = idx + 1
    return idx


def add_light(position: tuple[float, float, float], color: tuple[float, float, float]) -> int:
    """Add a point light to the scene.

    Args:
        position: The light position.
        color: The light color (RGB). Lights do not fall off with distance.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = vec3(position[0], position[1], position[2])
    light_colors[idx] = vec3(color[0], color[1], color[2])
    num_lights[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_plane_count() -> int:
    """Get the number of planes in the scene."""
    return int(num_planes[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def _make_miss_record(ray_origin: vec3, ray_direction: vec3) -> Intersection:
    """Create an Intersection indicating no hit."""
    return Intersection(
        hit=0,
        distance=NO_HIT,
        origin=ray_origin,
        direction=ray_direction,
        object_kind=-1,
        object_index=-1,
    )


@ti.func
def nearest_intersection(ray_origin: vec3, ray_direction: vec3) -> Intersection:
    """Find the closest object hit by a ray.

    Tests every sphere, then every plane, keeping the smallest positive
    distance.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        An Intersection for the closest hit, or a miss record (hit == 0).
    """
    # Track the closest hit so far
    did_hit = 0
    closest = NO_HIT
    hit_kind = -1
    hit_index = -1

    for i in range(num_spheres[None]):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        distance = intersect_sphere(ray_origin, ray_direction, sphere)
        if distance != NO_HIT and (did_hit == 0 or distance < closest):
            did_hit = 1
            closest = distance
            hit_kind = int(ObjectKind.SPHERE)
            hit_index = i

    for i in range(num_planes[None]):
        plane = Plane(normal=plane_normals[i], offset=plane_offsets[i])
        distance = intersect_plane(ray_origin, ray_direction, plane)
        if distance != NO_HIT and (did_hit == 0 or distance < closest):
            did_hit = 1
            closest = distance
            hit_kind = int(ObjectKind.PLANE)
            hit_index = i

    result = _make_miss_record(ray_origin, ray_direction)
    if did_hit == 1:
        result = Intersection(
            hit=1,
            distance=closest,
            origin=ray_origin,
            direction=ray_direction,
            object_kind=hit_kind,
            object_index=hit_index,
        )
    return result


@ti.func
def shadow_distance(ray_origin: vec3, ray_direction: vec3) -> ti.f32:
    """Distance to the closest object along a ray, for occlusion tests.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        The distance of the closest hit, or 0.0 if nothing is hit. A genuine
        hit is never at distance 0, so the two cannot be confused.
    """
    return nearest_intersection(ray_origin, ray_direction).distance


@ti.func
def object_normal(object_kind: ti.i32, object_index: ti.i32, point: vec3) -> vec3:
    """Surface normal of a stored object at a point."""
    normal = vec3(0.0, 0.0, 0.0)
    if object_kind == int(ObjectKind.SPHERE):
        sphere = Sphere(center=sphere_centers[object_index], radius=sphere_radii[object_index])
        normal = sphere_normal(sphere, point)
    else:
        plane = Plane(normal=plane_normals[object_index], offset=plane_offsets[object_index])
        normal = plane_normal(plane, point)
    return normal


@ti.func
def object_surface(object_kind: ti.i32, object_index: ti.i32) -> ti.i32:
    """Surface ID of a stored object."""
    surface_id = 0
    if object_kind == int(ObjectKind.SPHERE):
        surface_id = sphere_surface_ids[object_index]
    else:
        surface_id = plane_surface_ids[object_index]
    return surface_id


@ti.func
def get_light(light_index: ti.i32):
    """Get a light's position and color.

    Returns:
        A tuple (position, color).
    """
    return light_positions[light_index], light_colors[light_index]
