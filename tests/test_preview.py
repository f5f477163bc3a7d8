"""Tests for frame display, export and the animated preview.

Window-dependent behavior (GGUI) is not exercised; the preview is driven
through its rendering and snapshot methods only.
"""

import numpy as np
import pytest


def _gradient_frame(width, height):
    """Flat RGB buffer where pixel (x, y) is (x, y, 7)."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            image[y, x] = (x, y, 7)
    return image.reshape(-1)


class TestFrameToImage:
    """Tests for reshaping flat frame buffers."""

    def test_rgb_layout(self):
        """Test row-major layout from the top-left pixel."""
        from src.whitted.preview.display import frame_to_image

        image = frame_to_image(_gradient_frame(5, 3), 5, 3)
        assert image.shape == (3, 5, 3)
        assert tuple(image[2, 4]) == (4, 2, 7)

    def test_bgr_swapped(self):
        """Test BGR buffers are converted to RGB."""
        from src.whitted.preview.display import frame_to_image

        image = frame_to_image(_gradient_frame(5, 3), 5, 3, channel_order="bgr")
        assert tuple(image[2, 4]) == (7, 2, 4)

    def test_size_mismatch(self):
        """Test a buffer of the wrong size raises ValueError."""
        from src.whitted.preview.display import frame_to_image

        with pytest.raises(ValueError, match="expected"):
            frame_to_image(np.zeros(10, dtype=np.uint8), 2, 2)

    def test_unknown_channel_order(self):
        """Test an unknown channel order raises ValueError."""
        from src.whitted.preview.display import frame_to_image

        with pytest.raises(ValueError, match="Unknown channel order"):
            frame_to_image(np.zeros(12, dtype=np.uint8), 2, 2, channel_order="rbg")


class TestShowFrame:
    """Tests for the Matplotlib display."""

    def test_show_frame_non_blocking(self, monkeypatch):
        """Test show_frame draws the image without blocking."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from src.whitted.preview.display import show_frame

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))

        show_frame(_gradient_frame(5, 3), 5, 3, title="test", block=False)

        assert shown == [False]
        ax = plt.gcf().axes[0]
        assert ax.get_title() == "test"
        plt.close("all")


class TestExport:
    """Tests for PNG export."""

    def test_save_png(self, tmp_path):
        """Test the saved file decodes to the original pixels."""
        from PIL import Image

        from src.whitted.preview.export import save_png

        path = tmp_path / "frame.png"
        save_png(_gradient_frame(5, 3), 5, 3, str(path))

        with Image.open(path) as saved:
            assert saved.mode == "RGB"
            pixels = np.asarray(saved)
        assert pixels.shape == (3, 5, 3)
        assert tuple(pixels[2, 4]) == (4, 2, 7)

    def test_save_png_from_bgr(self, tmp_path):
        """Test BGR frames are written in RGB order."""
        from PIL import Image

        from src.whitted.preview.export import save_png

        path = tmp_path / "frame.png"
        save_png(_gradient_frame(5, 3), 5, 3, str(path), channel_order="bgr")

        with Image.open(path) as saved:
            pixels = np.asarray(saved)
        assert tuple(pixels[2, 4]) == (7, 2, 4)

    def test_save_png_from_image_rejects_bad_shape(self, tmp_path):
        """Test a non-RGB array raises ValueError."""
        from src.whitted.preview.export import save_png_from_image

        with pytest.raises(ValueError, match="Expected an"):
            save_png_from_image(np.zeros((3, 5), dtype=np.uint8), str(tmp_path / "x.png"))


class TestAnimatedPreview:
    """Tests for the orbiting preview without opening a window."""

    def test_render_and_advance(self):
        """Test frames render at the window size and theta advances."""
        from src.whitted.preview.interactive import AnimatedPreview
        from src.whitted.scene.samples import ORBIT_STEP, create_default_scene

        preview = AnimatedPreview(16, 9, create_default_scene())
        image = preview.render_frame()
        assert image.shape == (9, 16, 3)

        preview.advance()
        preview.advance()
        assert preview.theta == pytest.approx(2 * ORBIT_STEP)
        assert preview.renderer.frame_count == 1

    def test_update_image_shape_check(self):
        """Test update_image rejects frames of the wrong size."""
        from src.whitted.preview.interactive import AnimatedPreview
        from src.whitted.scene.samples import create_default_scene

        preview = AnimatedPreview(16, 9, create_default_scene())
        with pytest.raises(ValueError, match="doesn't match"):
            preview.update_image(np.zeros((16, 9, 3), dtype=np.uint8))

    def test_update_image_flips_rows(self):
        """Test the display field has y = 0 at the bottom."""
        from src.whitted.preview.interactive import AnimatedPreview
        from src.whitted.scene.samples import create_default_scene

        preview = AnimatedPreview(4, 2, create_default_scene())
        image = np.zeros((2, 4, 3), dtype=np.uint8)
        image[0, 1] = (255, 0, 0)  # top row, second column
        preview.update_image(image)

        assert preview.display_image[1, 1][0] == pytest.approx(1.0)
        assert preview.display_image[1, 0][0] == pytest.approx(0.0)

    def test_save_snapshot(self, tmp_path):
        """Test the snapshot is written only after a frame exists."""
        from src.whitted.preview.interactive import AnimatedPreview
        from src.whitted.scene.samples import create_default_scene

        path = tmp_path / "rendered.png"
        preview = AnimatedPreview(8, 6, create_default_scene(), snapshot_path=str(path))

        assert preview.save_snapshot() is None
        preview.render_frame()
        assert preview.save_snapshot() == str(path)
        assert path.exists()

    def test_display_check_returns_bool(self):
        """Test the headless check always returns a bool."""
        from src.whitted.preview.interactive import AnimatedPreview

        assert isinstance(AnimatedPreview.is_display_available(), bool)
