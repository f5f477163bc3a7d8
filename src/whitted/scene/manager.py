"""Scene description and upload to GPU-side storage.

This module provides the immutable Python-side scene model and the code that
loads it into the Taichi fields read by the tracer. A Scene holds:

- a Camera
- an ordered sequence of point Lights
- an ordered sequence of scene objects (SphereObject or PlaneObject), each
  referencing a shared Surface

Surfaces are shared: objects using equal surfaces are uploaded once and point
at the same surface ID.

A Scene is never mutated. Animations call Scene.with_camera() to build the
next frame's scene, and load_scene() replaces the GPU-side state wholesale
before each render pass.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.camera.pinhole import Camera
    >>> from src.whitted.scene.manager import Light, PlaneObject, Scene, SphereObject
    >>> from src.whitted.surfaces import FLOOR_CHECKER, SHINY
    >>> scene = Scene(
    ...     camera=Camera.look_at((3.0, 2.0, 4.0), (-0.5, 0.5, 0.0)),
    ...     lights=(Light(position=(0.0, 3.5, 0.0), color=(0.5, 0.5, 0.5)),),
    ...     objects=(
    ...         PlaneObject(normal=(0.0, 1.0, 0.0), offset=0.0, surface=FLOOR_CHECKER),
    ...         SphereObject(center=(0.0, 1.0, 0.0), radius=1.0, surface=SHINY),
    ...     ),
    ... )
    >>> load_scene(scene)
"""

from dataclasses import dataclass, field, replace
from typing import Any, Union

from src.whitted.camera.pinhole import Camera, setup_camera
from src.whitted.scene.intersection import (
    add_light,
    add_plane,
    add_sphere,
    clear_scene,
)
from src.whitted.surfaces.surface import Surface, add_surface, clear_surfaces

Vector = tuple[float, float, float]


def _to_tuple(values: Any) -> Vector:
    return (float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: The light position in world space.
        color: The light color (RGB). There is no falloff with distance.
    """

    position: Vector
    color: Vector


@dataclass(frozen=True)
class SphereObject:
    """A sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius. Negative radii are valid and kept as given.
        surface: The surface used to shade the sphere.
    """

    center: Vector
    radius: float
    surface: Surface


@dataclass(frozen=True)
class PlaneObject:
    """A one-sided infinite plane in the scene.

    Attributes:
        normal: The plane normal, facing the visible side.
        offset: The plane constant d in normal . P + d = 0.
        surface: The surface used to shade the plane.
    """

    normal: Vector
    offset: float
    surface: Surface


SceneObject = Union[SphereObject, PlaneObject]


@dataclass(frozen=True)
class Scene:
    """An immutable scene: camera, lights and objects.

    Attributes:
        camera: The camera to render from.
        lights: Point lights, evaluated in order.
        objects: Scene objects, intersected in order.
    """

    camera: Camera
    lights: tuple[Light, ...] = field(default_factory=tuple)
    objects: tuple[SceneObject, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists but store tuples so the scene stays immutable
        object.__setattr__(self, "lights", tuple(self.lights))
        object.__setattr__(self, "objects", tuple(self.objects))

    def with_camera(self, camera: Camera) -> "Scene":
        """Return a copy of this scene viewed from a different camera."""
        return replace(self, camera=camera)

    @property
    def surfaces(self) -> list[Surface]:
        """The distinct surfaces used by the scene, in first-use order."""
        unique: list[Surface] = []
        for obj in self.objects:
            if obj.surface not in unique:
                unique.append(obj.surface)
        return unique

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Surfaces are written once in a "surfaces" list and referenced from
        objects by index.
        """
        surfaces = self.surfaces
        objects: list[dict[str, Any]] = []
        for obj in self.objects:
            if isinstance(obj, SphereObject):
                objects.append(
                    {
                        "type": "sphere",
                        "center": list(obj.center),
                        "radius": obj.radius,
                        "surface": surfaces.index(obj.surface),
                    }
                )
            elif isinstance(obj, PlaneObject):
                objects.append(
                    {
                        "type": "plane",
                        "normal": list(obj.normal),
                        "offset": obj.offset,
                        "surface": surfaces.index(obj.surface),
                    }
                )
            else:
                raise TypeError(f"Unsupported scene object: {type(obj).__name__}")

        return {
            "camera": self.camera.to_dict(),
            "lights": [
                {"position": list(light.position), "color": list(light.color)}
                for light in self.lights
            ],
            "surfaces": [surface.to_dict() for surface in surfaces],
            "objects": objects,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'camera', 'lights', 'surfaces' and 'objects'
                keys, as produced by to_dict().

        Raises:
            ValueError: If the data contains an unknown object type or
                surface pattern, or a surface index out of range.
        """
        surfaces = [Surface.from_dict(s) for s in data.get("surfaces", [])]

        def _surface(obj_config: dict[str, Any]) -> Surface:
            index = obj_config.get("surface", 0)
            if not 0 <= index < len(surfaces):
                raise ValueError(f"Invalid surface index: {index}")
            return surfaces[index]

        objects: list[SceneObject] = []
        for obj_config in data.get("objects", []):
            obj_type = obj_config.get("type", "").lower()
            if obj_type == "sphere":
                objects.append(
                    SphereObject(
                        center=_to_tuple(obj_config.get("center", [0, 0, 0])),
                        radius=float(obj_config.get("radius", 1.0)),
                        surface=_surface(obj_config),
                    )
                )
            elif obj_type == "plane":
                objects.append(
                    PlaneObject(
                        normal=_to_tuple(obj_config.get("normal", [0, 1, 0])),
                        offset=float(obj_config.get("offset", 0.0)),
                        surface=_surface(obj_config),
                    )
                )
            else:
                raise ValueError(f"Unknown scene object type: {obj_type}")

        lights = [
            Light(
                position=_to_tuple(light.get("position", [0, 0, 0])),
                color=_to_tuple(light.get("color", [1, 1, 1])),
            )
            for light in data.get("lights", [])
        ]

        return cls(
            camera=Camera.from_dict(data["camera"]),
            lights=tuple(lights),
            objects=tuple(objects),
        )


def load_scene(scene: Scene) -> dict[Surface, int]:
    """Upload a scene into the GPU-side fields.

    Clears the previous scene, registers each distinct surface once, then
    adds objects and lights in scene order and sets up the camera.

    Args:
        scene: The scene to render next.

    Returns:
        Mapping from each distinct surface to its registered surface ID.

    Raises:
        TypeError: If the scene contains an unsupported object type.
        RuntimeError: If a storage capacity is exceeded.
    """
    clear_scene()
    clear_surfaces()

    surface_ids: dict[Surface, int] = {}
    for surface in scene.surfaces:
        surface_ids[surface] = add_surface(surface)

    for obj in scene.objects:
        if isinstance(obj, SphereObject):
            add_sphere(obj.center, obj.radius, surface_ids[obj.surface])
        elif isinstance(obj, PlaneObject):
            add_plane(obj.normal, obj.offset, surface_ids[obj.surface])
        else:
            raise TypeError(f"Unsupported scene object: {type(obj).__name__}")

    for light in scene.lights:
        add_light(light.position, light.color)

    setup_camera(scene.camera)
    return surface_ids
