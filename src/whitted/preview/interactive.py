"""Animated preview window using Taichi GGUI.

The preview re-renders the scene every frame while the camera orbits the
scene center. Each frame's render time is printed in milliseconds, and
pressing "s" saves the current frame to rendered.png.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from src.whitted.preview.interactive import AnimatedPreview
    >>> from src.whitted.scene.samples import create_default_scene
    >>>
    >>> preview = AnimatedPreview(1280, 720, create_default_scene())
    >>> preview.run()  # Renders until the window is closed
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.whitted.scene.samples import ORBIT_STEP, orbit_camera

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.whitted.core.renderer import Renderer
    from src.whitted.scene.manager import Scene

# File written when the save key is pressed
SNAPSHOT_PATH = "rendered.png"
SAVE_KEY = "s"


class AnimatedPreview:
    """Orbiting-camera preview window using Taichi GGUI.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        theta: Current orbit angle in radians.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        scene: Scene,
        *,
        title: str = "Whitted Ray Tracer",
        theta: float = 0.0,
        step: float = ORBIT_STEP,
        snapshot_path: str = SNAPSHOT_PATH,
    ) -> None:
        """Initialize the preview.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            scene: The scene to animate. Its camera is replaced every frame.
            title: Window title.
            theta: Starting orbit angle in radians.
            step: Orbit angle advance per frame in radians.
            snapshot_path: Where the save key writes the current frame.

        Note:
            The window is created but not shown until run() is called.
        """
        from src.whitted.core.renderer import Renderer

        self.width = width
        self.height = height
        self.theta = theta
        self._scene = scene
        self._step = step
        self._title = title
        self._snapshot_path = snapshot_path

        self._renderer: Renderer = Renderer(width, height)
        self._last_image: npt.NDArray[np.uint8] | None = None

        # Defer window creation until run() to support headless checks
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Shape is (width, height) for Taichi field, RGB values stored as vec3
        self.display_image: ti.MatrixField = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    def _initialize_window(self) -> None:
        if self._window is not None:
            return

        self._window = ti.ui.Window(name=self._title, res=(self.width, self.height), vsync=False)
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    @property
    def renderer(self) -> Renderer:
        """The renderer producing the frames."""
        return self._renderer

    def render_frame(self) -> npt.NDArray[np.uint8]:
        """Render the scene at the current orbit angle.

        Returns:
            The frame as an (height, width, 3) RGB array.
        """
        scene = self._scene.with_camera(orbit_camera(self.theta))
        self._last_image = self._renderer.render_image(scene)
        return self._last_image

    def advance(self) -> None:
        """Move the camera one step along the orbit."""
        self.theta += self._step

    def update_image(self, image: npt.NDArray[np.uint8]) -> None:
        """Copy an RGB frame into the display field.

        Args:
            image: Array of shape (height, width, 3) with dtype uint8.

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(f"Image shape {image.shape} doesn't match expected {expected_shape}")

        # NumPy images are (height, width) with row 0 on top; the canvas
        # field is (width, height) with y = 0 at the bottom
        image_transposed = np.ascontiguousarray(
            np.transpose(np.flipud(image), (1, 0, 2)).astype(np.float32) / 255.0
        )
        self.display_image.from_numpy(image_transposed)

    def save_snapshot(self) -> str | None:
        """Save the most recent frame to the snapshot path.

        Returns:
            The path written, or None if no frame has been rendered yet.
        """
        from src.whitted.preview.export import save_png_from_image

        if self._last_image is None:
            return None
        save_png_from_image(self._last_image, self._snapshot_path)
        return self._snapshot_path

    def _handle_events(self) -> None:
        for event in self.window.get_events(ti.ui.PRESS):
            if event.key == SAVE_KEY:
                path = self.save_snapshot()
                if path is not None:
                    print(f"Saved: {path}")

    def step_frame(self) -> float:
        """Render, display and advance one animation frame.

        Returns:
            The render time of the frame in milliseconds.
        """
        image = self.render_frame()
        self.update_image(image)
        self._handle_events()

        self.canvas.set_image(self.display_image)
        self.window.show()

        self.advance()
        return self._renderer.last_render_seconds * 1000.0

    def run(self, max_frames: int | None = None) -> int:
        """Run the animation until the window closes.

        Args:
            max_frames: Stop after this many frames (None runs until closed).

        Returns:
            The number of frames rendered.
        """
        self._initialize_window()

        frames = 0
        while self.window.running and (max_frames is None or frames < max_frames):
            elapsed_ms = self.step_frame()
            print(f"{elapsed_ms:.0f} ms")
            frames += 1
        return frames

    def close(self) -> None:
        """Close the preview window."""
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        if os.uname().sysname == "Darwin":
            # SSH sessions without X forwarding have no display
            return not (os.environ.get("SSH_CONNECTION") and not display)

        return bool(display or wayland)
