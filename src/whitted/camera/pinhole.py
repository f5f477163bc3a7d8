"""Look-at pinhole camera for primary ray generation.

The camera is a position plus three basis vectors derived once from an eye
point and a look-at target:

- forward: unit vector from the eye toward the target
- right: forward x (0, -1, 0), normalized and scaled by 1.5
- up: forward x right, normalized and scaled by 1.5

The 1.5 scale on right/up widens the field of view; together with the
per-axis recentering in the renderer it fixes the projection, so it is part
of the camera definition rather than a tunable.

Primary rays go through forward + sx * right + sy * up for recentered screen
coordinates (sx, sy).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.camera.pinhole import Camera, setup_camera, get_ray
    >>>
    >>> camera = Camera.look_at(eye=(3.0, 2.0, 4.0), target=(-0.5, 0.5, 0.0))
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.0, 0.0)  # Ray through image center
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
import taichi as ti

from src.whitted.core.ray import Ray, make_ray, normalize_or_zero, vec3

Vector = tuple[float, float, float]

# Scale applied to the right and up vectors
BASIS_SCALE = 1.5

# World "down" used to derive the camera's right vector
WORLD_DOWN = (0.0, -1.0, 0.0)


# =============================================================================
# Camera Data Structures
# =============================================================================


def _normalize(v: np.ndarray) -> np.ndarray:
    """Normalize a NumPy vector, returning zeros for zero-length input."""
    norm = np.linalg.norm(v)
    if norm <= 1e-12:
        return np.zeros(3, dtype=np.float32)
    return v / norm


@dataclass(frozen=True)
class Camera:
    """A pinhole camera as a position and a view basis.

    Cameras are immutable. Animations build a new camera per frame and swap
    it into a new Scene rather than mutating one mid-render.

    Attributes:
        position: Camera position in world space (x, y, z).
        forward: Unit view direction.
        up: Screen-up vector (length 1.5 for look-at cameras).
        right: Screen-right vector (length 1.5 for look-at cameras).
    """

    position: Vector
    forward: Vector
    up: Vector
    right: Vector

    @classmethod
    def look_at(cls, eye: Vector, target: Vector) -> "Camera":
        """Build a camera at eye looking toward target.

        A camera looking straight up or down has forward parallel to the
        world down vector; its right and up vectors then degenerate to zero
        and every pixel sees along forward.

        Args:
            eye: Camera position.
            target: Point the camera looks at.

        Returns:
            The camera with its derived basis.
        """
        eye_vec = np.array(eye, dtype=np.float32)
        target_vec = np.array(target, dtype=np.float32)
        down = np.array(WORLD_DOWN, dtype=np.float32)

        forward = _normalize(target_vec - eye_vec)
        right = BASIS_SCALE * _normalize(np.cross(forward, down))
        up = BASIS_SCALE * _normalize(np.cross(forward, right))

        return cls(
            position=_to_tuple(eye_vec),
            forward=_to_tuple(forward),
            up=_to_tuple(up),
            right=_to_tuple(right),
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the camera to a dictionary (for JSON serialization)."""
        return {
            "position": list(self.position),
            "forward": list(self.forward),
            "up": list(self.up),
            "right": list(self.right),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Camera":
        """Load a camera from a dictionary.

        Accepts either an explicit basis (position/forward/up/right) or a
        look-at pair (eye/target).
        """
        if "eye" in data:
            return cls.look_at(_to_tuple(data["eye"]), _to_tuple(data.get("target", (0, 0, 0))))
        return cls(
            position=_to_tuple(data["position"]),
            forward=_to_tuple(data["forward"]),
            up=_to_tuple(data["up"]),
            right=_to_tuple(data["right"]),
        )


def _to_tuple(values: Any) -> Vector:
    return (float(values[0]), float(values[1]), float(values[2]))


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_forward = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_up = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_right = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Upload a camera into the GPU-side camera state.

    This must be called before rendering, and must not be called while a
    render kernel is running.

    Args:
        camera: The camera to render from.
    """
    _camera_position[None] = list(camera.position)
    _camera_forward[None] = list(camera.forward)
    _camera_up[None] = list(camera.up)
    _camera_right[None] = list(camera.right)


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def get_ray(screen_x: ti.f32, screen_y: ti.f32) -> Ray:
    """Generate a primary ray through recentered screen coordinates.

    Args:
        screen_x: Horizontal offset along the camera's right vector.
        screen_y: Vertical offset along the camera's up vector.

    Returns:
        A Ray from the camera position with unit direction
        normalize(forward + screen_x * right + screen_y * up).
    """
    direction = normalize_or_zero(
        _camera_forward[None] + screen_x * _camera_right[None] + screen_y * _camera_up[None]
    )
    return make_ray(_camera_position[None], direction)


@ti.func
def get_camera_position() -> vec3:
    """Get the camera position in world space."""
    return _camera_position[None]


@ti.func
def get_camera_basis():
    """Get the camera's basis vectors.

    Returns:
        A tuple (forward, up, right) in world space.
    """
    return _camera_forward[None], _camera_up[None], _camera_right[None]


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with position, forward, up and right as read back from
        the GPU-side fields.
    """
    fields = {
        "position": _camera_position,
        "forward": _camera_forward,
        "up": _camera_up,
        "right": _camera_right,
    }
    info = {}
    for name, field in fields.items():
        vec = field[None]
        info[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
    return info
