"""Whitted-style shading integrator.

This module computes the color seen along a ray:

1. Find the nearest intersection; a miss is black.
2. At the hit point, sum direct light from every point light (diffuse plus
   Phong-like specular), skipping lights blocked by another object.
3. Add the color seen in the mirror direction, weighted by the surface
   reflectivity, recursing up to MAX_DEPTH.
4. At MAX_DEPTH, add a flat grey instead of tracing further.

Colors are never clamped here; several lights may push a channel above 1.0
and the renderer saturates it when writing the pixel.

Taichi functions cannot recurse, so trace_color() runs the mirror recursion
as a loop. Each bounce's local color is scaled by the product of the
reflectivities along the path so far, which sums exactly the same terms as
    color(d) = local(d) + reflectivity(d) * color(d + 1)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.integrator import trace
    >>> from src.whitted.scene.manager import load_scene
    >>> from src.whitted.scene.samples import create_default_scene
    >>>
    >>> load_scene(create_default_scene())
    >>> color = trace(origin=(3.0, 2.0, 4.0), direction=(-0.6, -0.2, -0.77))
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import normalize_or_zero, reflect
from src.whitted.scene.intersection import (
    get_light,
    nearest_intersection,
    num_lights,
    object_normal,
    object_surface,
    shadow_distance,
)
from src.whitted.surfaces.surface import (
    get_surface_roughness,
    surface_diffuse,
    surface_reflectivity,
    surface_specular_color,
)

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Shading Constants
# =============================================================================

# Maximum mirror recursion depth
MAX_DEPTH = 10

# Distance reflected rays start along the mirror direction, off the surface
REFLECTION_OFFSET = 0.001

# Added in place of the reflection once MAX_DEPTH is reached
FALLBACK_GREY = vec3(0.5, 0.5, 0.5)

# Color of rays that hit nothing
BACKGROUND_COLOR = vec3(0.0, 0.0, 0.0)


# =============================================================================
# Local Illumination
# =============================================================================


@ti.func
def in_shadow(point: vec3, light_position: vec3) -> ti.i32:
    """Check whether another object blocks the light from a point.

    The shadow ray starts exactly at the point. The point is shadowed when
    something is hit at a distance no greater than the light itself.

    Args:
        point: The surface point being shaded.
        light_position: The light position.

    Returns:
        1 if the light is blocked, 0 otherwise.
    """
    to_light = light_position - point
    light_dir = normalize_or_zero(to_light)
    occluder = shadow_distance(point, light_dir)

    blocked = 0
    if occluder != 0.0 and occluder <= tm.length(to_light):
        blocked = 1
    return blocked


@ti.func
def natural_color(surface_id: ti.i32, point: vec3, normal: vec3, reflect_dir: vec3) -> vec3:
    """Direct illumination of a surface point from all lights.

    For each unshadowed light with direction l and color c:
        diffuse  = diffuse(point) * c * (l . normal),       if l . normal > 0
        specular = specular(point) * c * s^roughness,       if s > 0
    where s = l . normalize(reflect_dir). Contributions are summed with no
    distance falloff.

    Args:
        surface_id: The surface ID of the hit object.
        point: The hit point.
        normal: The surface normal at the hit point.
        reflect_dir: The mirror reflection of the incoming direction.

    Returns:
        The unclamped direct-lighting color.
    """
    color = vec3(0.0, 0.0, 0.0)
    roughness = get_surface_roughness(surface_id)
    reflect_unit = normalize_or_zero(reflect_dir)

    for i in range(num_lights[None]):
        light_position, light_color = get_light(i)
        if in_shadow(point, light_position) == 0:
            light_dir = normalize_or_zero(light_position - point)

            illumination = tm.dot(light_dir, normal)
            if illumination > 0.0:
                color += surface_diffuse(surface_id, point) * light_color * illumination

            specular = tm.dot(light_dir, reflect_unit)
            if specular > 0.0:
                color += (
                    surface_specular_color(surface_id, point)
                    * light_color
                    * ti.pow(specular, roughness)
                )

    return color


# =============================================================================
# Tracing
# =============================================================================


@ti.func
def shade_hit(ray_origin: vec3, ray_direction: vec3, distance: ti.f32, object_kind: ti.i32, object_index: ti.i32):
    """Shade one intersection without following the reflection.

    Args:
        ray_origin: Origin of the intersected ray.
        ray_direction: Direction of the intersected ray.
        distance: Distance along the ray to the hit.
        object_kind: ObjectKind of the object hit.
        object_index: Index of the object hit.

    Returns:
        A tuple (point, reflect_dir, local_color, reflectivity).
    """
    point = ray_origin + distance * ray_direction
    normal = object_normal(object_kind, object_index, point)
    reflect_dir = reflect(ray_direction, normal)
    surface_id = object_surface(object_kind, object_index)

    local_color = natural_color(surface_id, point, normal, reflect_dir)
    reflectivity = surface_reflectivity(surface_id, point)
    return point, reflect_dir, local_color, reflectivity


@ti.func
def trace_color(ray_origin: vec3, ray_direction: vec3, depth: ti.i32) -> vec3:
    """Trace a ray through the scene and return the color it sees.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        depth: Recursion depth of this ray (0 for camera rays). At or past
            MAX_DEPTH the first hit gets the grey fallback instead of a
            reflection.

    Returns:
        The unclamped color (RGB).
    """
    color = vec3(0.0, 0.0, 0.0)
    weight = 1.0
    origin = ray_origin
    direction = ray_direction
    current_depth = depth

    # Active flag for path continuation (Taichi doesn't support break in ti.func loops)
    active = 1

    # A path from depth >= 0 needs at most MAX_DEPTH + 1 hits
    for _ in range(MAX_DEPTH + 1):
        if active == 1:
            isect = nearest_intersection(origin, direction)

            if isect.hit == 0:
                # Miss contributes background (black)
                color += weight * BACKGROUND_COLOR
                active = 0
            else:
                point, reflect_dir, local_color, reflectivity = shade_hit(
                    origin, direction, isect.distance, isect.object_kind, isect.object_index
                )
                color += weight * local_color

                if current_depth >= MAX_DEPTH:
                    color += weight * FALLBACK_GREY
                    active = 0
                else:
                    weight *= reflectivity
                    origin = point + REFLECTION_OFFSET * reflect_dir
                    direction = reflect_dir
                    current_depth += 1

    return color


# =============================================================================
# Python-callable Wrappers
# =============================================================================


# Result slot for the single-ray kernels below
_probe_color = ti.Vector.field(3, dtype=ti.f32, shape=())


@ti.kernel
def _trace_kernel(origin: vec3, direction: vec3, depth: ti.i32):
    # Single-iteration outer loop keeps the bounce loop serial
    for _ in range(1):
        _probe_color[None] = trace_color(origin, direction, depth)


@ti.kernel
def _natural_color_kernel(surface_id: ti.i32, point: vec3, normal: vec3, reflect_dir: vec3):
    for _ in range(1):
        _probe_color[None] = natural_color(surface_id, point, normal, reflect_dir)


def trace(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = 0,
) -> tuple[float, float, float]:
    """Trace a single ray against the loaded scene.

    This is a Python-callable function for testing and tools. For full
    frames use the renderer, which traces all pixels in parallel.

    Args:
        origin: Ray origin.
        direction: Ray direction (should be unit length).
        depth: Starting recursion depth.

    Returns:
        Tuple of (R, G, B) color values, unclamped.
    """
    _trace_kernel(vec3(*origin), vec3(*direction), depth)
    color = _probe_color[None]
    return (float(color[0]), float(color[1]), float(color[2]))


def compute_natural_color(
    surface_id: int,
    point: tuple[float, float, float],
    normal: tuple[float, float, float],
    reflect_dir: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Evaluate direct illumination at a point against the loaded scene.

    Args:
        surface_id: Registered surface ID to shade with.
        point: Surface point.
        normal: Surface normal at the point.
        reflect_dir: Mirror direction used for the specular term.

    Returns:
        Tuple of (R, G, B) color values, unclamped.
    """
    _natural_color_kernel(surface_id, vec3(*point), vec3(*normal), vec3(*reflect_dir))
    color = _probe_color[None]
    return (float(color[0]), float(color[1]), float(color[2]))
