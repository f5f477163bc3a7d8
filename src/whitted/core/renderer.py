"""Frame renderer: one primary ray per pixel into an 8-bit frame buffer.

For every pixel (x, y) of a width x height image, with y = 0 the top row:

1. Recenter the pixel into a screen offset:
       rx =  (x - width / 2) / (0.9 * width)
       ry = -(y - height / 2) / (1.6 * height)
2. Ask the camera for the primary ray through that offset.
3. Trace the ray and legalize the color: each channel becomes
   int(min(c, 1.0) * 255), truncated.

Pixels are independent, so the whole frame is one Taichi kernel whose
outer loop runs in parallel over ti.ndrange(width, height). The frame
buffer is preallocated to MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT so changing
the resolution between frames does not recompile the kernel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.renderer import Renderer
    >>> from src.whitted.scene.samples import create_default_scene
    >>>
    >>> renderer = Renderer(320, 180)
    >>> frame = renderer.render(create_default_scene())
    >>> frame.shape
    (172800,)
"""

import time
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.whitted.camera.pinhole import get_camera_position, get_ray
from src.whitted.core.integrator import trace_color
from src.whitted.scene.manager import load_scene

if TYPE_CHECKING:
    from src.whitted.scene.manager import Scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Frame Buffer
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Supported byte orders of the returned pixel triples
CHANNEL_ORDERS = ("rgb", "bgr")

# Screen recentering divisors (fraction of the image size)
HORIZONTAL_SPAN = 0.9
VERTICAL_SPAN = 1.6

# Legalized 8-bit colors, indexed [x, y] with y = 0 the top row
_frame_buffer = ti.Vector.field(3, dtype=ti.u8, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def _check_dimensions(width: int, height: int) -> None:
    if not 1 <= width <= MAX_IMAGE_WIDTH or not 1 <= height <= MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) outside supported range "
            f"(1x1 to {MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


def _check_channel_order(channel_order: str) -> None:
    if channel_order not in CHANNEL_ORDERS:
        raise ValueError(f"Unknown channel order: {channel_order!r} (expected one of {CHANNEL_ORDERS})")


# =============================================================================
# Pixel Mapping
# =============================================================================


@ti.func
def recenter_x(x: ti.f32, width: ti.i32) -> ti.f32:
    """Horizontal screen offset of pixel column x."""
    w = ti.cast(width, ti.f32)
    return (x - w / 2.0) / (HORIZONTAL_SPAN * w)


@ti.func
def recenter_y(y: ti.f32, height: ti.i32) -> ti.f32:
    """Vertical screen offset of pixel row y (rows grow downward)."""
    h = ti.cast(height, ti.f32)
    return -(y - h / 2.0) / (VERTICAL_SPAN * h)


@ti.func
def pixel_direction(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Unit direction of the primary ray through pixel (x, y)."""
    screen_x = recenter_x(ti.cast(x, ti.f32), width)
    screen_y = recenter_y(ti.cast(y, ti.f32), height)
    return get_ray(screen_x, screen_y).direction


@ti.func
def legalize(color: vec3) -> tm.ivec3:
    """Convert an unclamped color to 0..255 channel values.

    Channels above 1.0 saturate at 255; the rest are scaled and truncated.
    Shading never produces negative channels.
    """
    return ti.cast(ti.min(color, 1.0) * 255.0, ti.i32)


@ti.kernel
def _render_frame(width: ti.i32, height: ti.i32):
    """Trace one primary ray per pixel into the frame buffer."""
    for x, y in ti.ndrange(width, height):
        direction = pixel_direction(x, y, width, height)
        color = trace_color(get_camera_position(), direction, 0)
        _frame_buffer[x, y] = ti.cast(legalize(color), ti.u8)


@ti.kernel
def _pixel_direction_kernel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    return pixel_direction(x, y, width, height)


@ti.kernel
def _legalize_kernel(color: vec3) -> tm.ivec3:
    return legalize(color)


def compute_pixel_direction(x: int, y: int, width: int, height: int) -> tuple[float, float, float]:
    """Primary ray direction for a pixel under the active camera.

    Python-callable counterpart of pixel_direction() for testing.
    """
    d = _pixel_direction_kernel(x, y, width, height)
    return (float(d[0]), float(d[1]), float(d[2]))


def legalize_color(color: tuple[float, float, float]) -> tuple[int, int, int]:
    """Python-callable counterpart of legalize() for testing."""
    c = _legalize_kernel(vec3(*color))
    return (int(c[0]), int(c[1]), int(c[2]))


def _read_frame(width: int, height: int, channel_order: str) -> npt.NDArray[np.uint8]:
    """Copy the active region of the frame buffer as (height, width, 3)."""
    image = _frame_buffer.to_numpy()[:width, :height, :]

    # Transpose from (width, height, 3) to (height, width, 3), row 0 on top
    image = np.transpose(image, (1, 0, 2))

    if channel_order == "bgr":
        image = image[:, :, ::-1]

    return np.ascontiguousarray(image, dtype=np.uint8)


# =============================================================================
# Public Rendering API
# =============================================================================


def render(scene: "Scene", width: int, height: int, channel_order: str = "rgb") -> npt.NDArray[np.uint8]:
    """Render a scene to a flat byte buffer.

    Args:
        scene: The scene to render. It replaces any previously loaded scene.
        width: Image width in pixels (1..MAX_IMAGE_WIDTH).
        height: Image height in pixels (1..MAX_IMAGE_HEIGHT).
        channel_order: "rgb", or "bgr" for the byte order of Windows bitmaps.

    Returns:
        A uint8 array of length width * height * 3. Pixel (x, y) starts at
        index (y * width + x) * 3, with y = 0 the top row.

    Raises:
        ValueError: If the dimensions or channel order are invalid.
    """
    return render_image(scene, width, height, channel_order).reshape(-1)


def render_image(scene: "Scene", width: int, height: int, channel_order: str = "rgb") -> npt.NDArray[np.uint8]:
    """Render a scene to an image array of shape (height, width, 3).

    Same as render() but without flattening.
    """
    _check_dimensions(width, height)
    _check_channel_order(channel_order)

    load_scene(scene)
    _render_frame(width, height)
    return _read_frame(width, height, channel_order)


class Renderer:
    """Renders scenes at a fixed resolution and keeps simple frame stats.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        channel_order: Byte order of the returned pixel triples.
    """

    def __init__(self, width: int, height: int, channel_order: str = "rgb") -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels (max MAX_IMAGE_WIDTH).
            height: Image height in pixels (max MAX_IMAGE_HEIGHT).
            channel_order: "rgb" or "bgr".

        Raises:
            ValueError: If the dimensions or channel order are invalid.
        """
        _check_dimensions(width, height)
        _check_channel_order(channel_order)
        self._width = width
        self._height = height
        self._channel_order = channel_order
        self._frame_count = 0
        self._last_render_seconds = 0.0

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return self._height

    @property
    def channel_order(self) -> str:
        """Byte order of the returned pixel triples."""
        return self._channel_order

    @property
    def frame_count(self) -> int:
        """Number of frames rendered so far."""
        return self._frame_count

    @property
    def last_render_seconds(self) -> float:
        """Wall-clock time of the most recent frame, including readback."""
        return self._last_render_seconds

    def render_image(self, scene: "Scene") -> npt.NDArray[np.uint8]:
        """Render a scene to an array of shape (height, width, 3)."""
        start = time.perf_counter()
        image = render_image(scene, self._width, self._height, self._channel_order)
        self._last_render_seconds = time.perf_counter() - start
        self._frame_count += 1
        return image

    def render(self, scene: "Scene") -> npt.NDArray[np.uint8]:
        """Render a scene to a flat byte buffer (see render())."""
        return self.render_image(scene).reshape(-1)

    def save_image(self, scene: "Scene", filepath: str) -> None:
        """Render a scene and save it as an image file.

        The file is always written in RGB order regardless of channel_order.

        Args:
            scene: The scene to render.
            filepath: Destination path; the format follows the extension.
        """
        from src.whitted.preview.export import save_png_from_image

        image = self.render_image(scene)
        if self._channel_order == "bgr":
            image = image[:, :, ::-1]
        save_png_from_image(image, filepath)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self._width}, height={self._height}, "
            f"channel_order={self._channel_order!r}, frames={self._frame_count})"
        )
