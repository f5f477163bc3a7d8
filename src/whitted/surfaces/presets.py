"""Preset surfaces used by the sample scenes.

All patterned presets share the black/white look: white and 0.7 reflective
where the pattern holds, black and 0.1 reflective elsewhere, with a white
highlight of roughness 150.

    X_WALL          checker in the x-y plane
    Z_WALL          checker in the y-z plane
    CHECKERBOARD    historical floor checker, uniformly black (see surface.py)
    FLOOR_CHECKER   working floor checker in the x-z plane
    RIPPLE          wavy floor pattern
    SHINY           uniform white, half-grey highlight, 0.6 reflective
"""

from .surface import Surface, SurfacePattern

X_WALL = Surface(pattern=SurfacePattern.CHECKER_XY)

Z_WALL = Surface(pattern=SurfacePattern.CHECKER_YZ)

CHECKERBOARD = Surface(pattern=SurfacePattern.CHECKER_XZ_UNIT)

FLOOR_CHECKER = Surface(pattern=SurfacePattern.CHECKER_XZ)

RIPPLE = Surface(pattern=SurfacePattern.RIPPLE)

SHINY = Surface(
    pattern=SurfacePattern.UNIFORM,
    primary_diffuse=(1.0, 1.0, 1.0),
    secondary_diffuse=(1.0, 1.0, 1.0),
    specular=(0.5, 0.5, 0.5),
    primary_reflect=0.6,
    secondary_reflect=0.6,
    roughness=50.0,
)

PRESETS = {
    "x_wall": X_WALL,
    "z_wall": Z_WALL,
    "checkerboard": CHECKERBOARD,
    "floor_checker": FLOOR_CHECKER,
    "ripple": RIPPLE,
    "shiny": SHINY,
}
