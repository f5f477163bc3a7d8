"""Sample scenes.

This module provides the two demonstration scenes and the orbiting camera
used by the animated preview. Scenes are plain values passed to the renderer;
nothing here holds global state.

The default scene consists of:
- A floor plane (y = 0) with the ripple surface
- An inverted (negative radius) sphere with the historical checkerboard surface
- Three shiny spheres of different sizes
- Red, green, blue and grey point lights above the floor

The wall scene adds four tilted checkered planes around the default scene
and uses dimmer, tinted lights.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.scene.samples import create_default_scene, orbit_camera
    >>>
    >>> scene = create_default_scene()
    >>> frame = render(scene.with_camera(orbit_camera(0.5)), 320, 180)
"""

import math

from src.whitted.camera.pinhole import Camera
from src.whitted.scene.manager import Light, PlaneObject, Scene, SceneObject, SphereObject
from src.whitted.surfaces.presets import CHECKERBOARD, RIPPLE, SHINY, X_WALL, Z_WALL

# =============================================================================
# Sample Scene Constants
# =============================================================================

# Fixed viewpoint of the still scenes
DEFAULT_EYE = (3.0, 2.0, 4.0)
DEFAULT_TARGET = (-0.5, 0.5, 0.0)

# Orbit used by the animated preview
ORBIT_RADIUS = 5.0
ORBIT_HEIGHT = 3.0
ORBIT_TARGET = (0.0, 1.0, 0.0)
ORBIT_STEP = 0.025  # Radians per frame

# Distance of the tilted walls from the origin
WALL_OFFSET = 15.0

DEFAULT_LIGHTS = (
    Light(position=(-2.0, 2.5, 0.0), color=(1.0, 0.0, 0.0)),
    Light(position=(1.5, 2.5, 1.5), color=(0.0, 1.0, 0.0)),
    Light(position=(1.5, 2.5, -1.5), color=(0.0, 0.0, 1.0)),
    Light(position=(0.0, 3.5, 0.0), color=(0.5, 0.5, 0.5)),
)

WALL_LIGHTS = (
    Light(position=(-2.0, 2.5, 0.0), color=(0.8, 0.07, 0.07)),
    Light(position=(1.5, 2.5, 1.5), color=(0.07, 0.07, 0.49)),
    Light(position=(1.5, 2.5, -1.5), color=(0.07, 0.49, 0.071)),
    Light(position=(0.0, 3.5, 0.0), color=(0.5, 0.5, 0.5)),
)


def _floor_and_spheres() -> tuple[SceneObject, ...]:
    """Objects shared by both sample scenes."""
    return (
        PlaneObject(normal=(0.0, 1.0, 0.0), offset=0.0, surface=RIPPLE),
        SphereObject(center=(-3.0, 1.0, 0.0), radius=-1.0, surface=CHECKERBOARD),
        SphereObject(center=(0.0, 1.0, 0.0), radius=1.0, surface=SHINY),
        SphereObject(center=(-1.0, 0.5, 1.5), radius=0.5, surface=SHINY),
        SphereObject(center=(-8.0, 3.0, 1.75), radius=3.0, surface=SHINY),
    )


def create_default_scene() -> Scene:
    """Create the default sample scene.

    Returns:
        The scene, viewed from DEFAULT_EYE toward DEFAULT_TARGET.
    """
    return Scene(
        camera=Camera.look_at(DEFAULT_EYE, DEFAULT_TARGET),
        lights=DEFAULT_LIGHTS,
        objects=_floor_and_spheres(),
    )


def create_wall_scene() -> Scene:
    """Create the sample scene enclosed by four tilted checkered walls.

    The walls are one-sided planes leaning inward at 45 degrees, so from
    inside they read as a funnel around the floor.

    Returns:
        The scene, viewed from DEFAULT_EYE toward DEFAULT_TARGET.
    """
    walls = (
        PlaneObject(normal=(1.0, 1.0, 0.0), offset=WALL_OFFSET, surface=Z_WALL),
        PlaneObject(normal=(-1.0, 1.0, 0.0), offset=WALL_OFFSET, surface=Z_WALL),
        PlaneObject(normal=(0.0, 1.0, 1.0), offset=WALL_OFFSET, surface=X_WALL),
        PlaneObject(normal=(0.0, 1.0, -1.0), offset=WALL_OFFSET, surface=X_WALL),
    )
    return Scene(
        camera=Camera.look_at(DEFAULT_EYE, DEFAULT_TARGET),
        lights=WALL_LIGHTS,
        objects=walls + _floor_and_spheres(),
    )


def orbit_camera(theta: float) -> Camera:
    """Camera on the animation orbit at angle theta (radians).

    The eye circles the y axis at ORBIT_RADIUS and ORBIT_HEIGHT, always
    looking at ORBIT_TARGET.
    """
    eye = (math.sin(theta) * ORBIT_RADIUS, ORBIT_HEIGHT, math.cos(theta) * ORBIT_RADIUS)
    return Camera.look_at(eye, ORBIT_TARGET)


SAMPLE_SCENES = {
    "default": create_default_scene,
    "walls": create_wall_scene,
}
