"""Taichi implementation of a recursive Whitted-style ray tracer.

This package renders scenes of analytic surfaces lit by point lights, with:
- Nearest-hit intersection against spheres and one-sided planes
- Diffuse + Phong-like specular local illumination with hard shadows
- Mirror reflection to a fixed recursion depth
- Procedural surfaces (checkerboards, ripples, uniform shiny)

Subpackages:
    core: Ray utilities, the shading integrator and the pixel renderer
    geometry: Sphere and plane primitives
    surfaces: Procedural surface model and presets
    scene: Scene description, GPU-side storage and sample scenes
    camera: Look-at pinhole camera
    preview: Frame display, PNG export and the animated preview window
"""

__version__ = "0.1.0"
