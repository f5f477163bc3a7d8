#!/usr/bin/env python3
"""Render a sample scene to an image file.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 1280)
    --height HEIGHT     Image height in pixels (default: 720)
    --scene NAME        Sample scene: default or walls (default: default)
    --theta THETA       View from the animation orbit at this angle (radians)
    --output OUTPUT     Output file path (default: rendered.png)
    --show              Also display the frame in a Matplotlib window
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --width 640 --height 360 --scene walls
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sample scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1280,
        help="Image width in pixels (default: 1280)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=720,
        help="Image height in pixels (default: 720)",
    )
    parser.add_argument(
        "--scene",
        choices=["default", "walls"],
        default="default",
        help="Sample scene to render (default: default)",
    )
    parser.add_argument(
        "--theta",
        type=float,
        default=None,
        help="Use the orbit camera at this angle in radians (default: fixed view)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="rendered.png",
        help="Output file path (default: rendered.png)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the rendered frame with Matplotlib",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    width: int = 1280,
    height: int = 720,
    scene_name: str = "default",
    theta: float | None = None,
    output_path: str = "rendered.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a sample scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        scene_name: Key into SAMPLE_SCENES.
        theta: Orbit angle for the camera, or None for the scene's own camera.
        output_path: Output file path (PNG).
        show: If True, display the frame after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.core.renderer import render
    from src.whitted.preview.display import show_frame
    from src.whitted.preview.export import save_png
    from src.whitted.scene.samples import SAMPLE_SCENES, orbit_camera

    scene = SAMPLE_SCENES[scene_name]()
    if theta is not None:
        scene = scene.with_camera(orbit_camera(theta))

    if not quiet:
        print(f"Rendering '{scene_name}' scene ({width}x{height})...")

    start_time = time.time()
    frame = render(scene, width, height)
    elapsed = time.time() - start_time

    output_file = Path(output_path)
    save_png(frame, width, height, str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {elapsed * 1000.0:.0f} ms")

    if show:
        show_frame(frame, width, height, title=f"{scene_name} ({width}x{height})")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            scene_name=args.scene,
            theta=args.theta,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
