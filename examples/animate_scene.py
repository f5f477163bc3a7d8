#!/usr/bin/env python3
"""Animated preview of a sample scene with an orbiting camera.

Usage:
    python -m examples.animate_scene [options]

Options:
    --width WIDTH       Window width in pixels (default: 1280)
    --height HEIGHT     Window height in pixels (default: 720)
    --scene NAME        Sample scene: default or walls (default: default)
    --frames N          Stop after N frames (default: run until closed)

Controls:
    - s: Save the current frame to rendered.png
    - Close the window to exit

Each frame's render time is printed in milliseconds.
"""

from __future__ import annotations

import argparse
import platform
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Animate a sample scene with an orbiting camera.")
    parser.add_argument("--width", type=int, default=1280, help="Window width in pixels (default: 1280)")
    parser.add_argument("--height", type=int, default=720, help="Window height in pixels (default: 720)")
    parser.add_argument(
        "--scene",
        choices=["default", "walls"],
        default="default",
        help="Sample scene to animate (default: default)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Stop after this many frames (default: run until closed)",
    )
    return parser.parse_args()


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    Returns:
        Name of the backend being used.
    """
    if platform.system() == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except Exception:
            pass

    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except Exception:
        pass

    ti.init(arch=ti.cpu)
    return "CPU"


def main() -> int:
    """Main entry point for the animated preview.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    # Initialize Taichi first (before importing modules that use ti.kernel)
    backend = initialize_taichi()
    print(f"Taichi backend: {backend}")

    from src.whitted.preview.interactive import AnimatedPreview
    from src.whitted.scene.samples import SAMPLE_SCENES

    if not AnimatedPreview.is_display_available():
        print("Error: No display available. Cannot run animated preview.", file=sys.stderr)
        return 1

    print(f"Creating preview window ({args.width}x{args.height})...")
    try:
        preview = AnimatedPreview(args.width, args.height, SAMPLE_SCENES[args.scene]())
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Press 's' to save rendered.png, close the window to exit")

    try:
        frames = preview.run(max_frames=args.frames)
        print(f"Rendered {frames} frames")
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
