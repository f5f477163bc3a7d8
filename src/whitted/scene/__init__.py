"""Scene module for scene description, storage and intersection.

This module handles scene representation and ray-scene queries:

Components:
    manager: Immutable Scene/Light/object description and GPU upload
    intersection: GPU-side storage, nearest-hit and shadow queries
    samples: Demonstration scenes and the orbiting animation camera

The scene module manages:
    - Object and light storage in Taichi fields (Structure-of-Arrays)
    - Surface ID assignment shared between objects
    - Wholesale replacement of the GPU-side scene between render passes
"""

from .intersection import (
    MAX_LIGHTS,
    MAX_PLANES,
    MAX_SPHERES,
    Intersection,
    ObjectKind,
    add_light,
    add_plane,
    add_sphere,
    clear_scene,
    get_light,
    get_light_count,
    get_plane_count,
    get_sphere_count,
    nearest_intersection,
    object_normal,
    object_surface,
    shadow_distance,
)
from .manager import (
    Light,
    PlaneObject,
    Scene,
    SceneObject,
    SphereObject,
    load_scene,
)
from .samples import (
    ORBIT_STEP,
    SAMPLE_SCENES,
    create_default_scene,
    create_wall_scene,
    orbit_camera,
)

__all__ = [
    # Intersection module
    "Intersection",
    "ObjectKind",
    "add_sphere",
    "add_plane",
    "add_light",
    "clear_scene",
    "get_sphere_count",
    "get_plane_count",
    "get_light_count",
    "get_light",
    "nearest_intersection",
    "shadow_distance",
    "object_normal",
    "object_surface",
    "MAX_SPHERES",
    "MAX_PLANES",
    "MAX_LIGHTS",
    # Manager module
    "Scene",
    "SceneObject",
    "SphereObject",
    "PlaneObject",
    "Light",
    "load_scene",
    # Sample scenes
    "create_default_scene",
    "create_wall_scene",
    "orbit_camera",
    "ORBIT_STEP",
    "SAMPLE_SCENES",
]
