"""Procedural surface model.

A surface maps a world position to a diffuse color, a specular color and a
reflectivity, and carries a scalar roughness (the specular exponent).
Rather than storing arbitrary functions, every surface is one of a fixed set
of patterns. A pattern is a predicate over the hit position that picks
between a primary and a secondary set of parameters:

    UNIFORM          always primary
    CHECKER_XY       odd floor(x) + floor(y)
    CHECKER_YZ       odd floor(y) + floor(z)
    CHECKER_XZ       odd floor(x) + floor(z)
    CHECKER_XZ_UNIT  (floor(z) + floor(x)) mod 1 != 0, which never holds
    RIPPLE           sin(z) + cos(x) < 0.15

The checker patterns are only meaningful on the plane spanned by their two
axes. CHECKER_XZ_UNIT reproduces the historical "CheckerBoard" surface whose
parity test used modulo 1, so it always evaluates to the secondary values.

Surfaces are registered into Taichi fields so kernels can evaluate them by
integer ID:

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.surfaces.surface import Surface, SurfacePattern, add_surface
    >>> checker = Surface(pattern=SurfacePattern.CHECKER_XZ)
    >>> surface_id = add_surface(checker)
    >>> # Use surface_diffuse(surface_id, point) within a Taichi kernel
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

Color = tuple[float, float, float]

# sin(z) + cos(x) below this selects the primary values of a ripple surface
RIPPLE_THRESHOLD = 0.15


class SurfacePattern(IntEnum):
    """Enumeration of the procedural patterns a surface can use.

    Used for pattern dispatch inside the Taichi surface evaluators.
    """

    UNIFORM = 0
    CHECKER_XY = 1
    CHECKER_YZ = 2
    CHECKER_XZ = 3
    CHECKER_XZ_UNIT = 4
    RIPPLE = 5


@dataclass(frozen=True)
class Surface:
    """An immutable procedural surface description.

    Defaults describe the black/white reflective checker used by the sample
    scenes: white and strongly reflective where the pattern holds, black and
    weakly reflective elsewhere, with a sharp white highlight.

    Attributes:
        pattern: The predicate choosing primary or secondary parameters.
        primary_diffuse: Diffuse color (RGB) where the pattern holds.
        secondary_diffuse: Diffuse color (RGB) elsewhere.
        specular: Specular color (RGB), independent of position.
        primary_reflect: Mirror reflectivity where the pattern holds.
        secondary_reflect: Mirror reflectivity elsewhere.
        roughness: Specular exponent; larger values give tighter highlights.
    """

    pattern: SurfacePattern = SurfacePattern.UNIFORM
    primary_diffuse: Color = (1.0, 1.0, 1.0)
    secondary_diffuse: Color = (0.0, 0.0, 0.0)
    specular: Color = (1.0, 1.0, 1.0)
    primary_reflect: float = 0.7
    secondary_reflect: float = 0.1
    roughness: float = 150.0

    # =========================================================================
    # Python-side evaluation (mirrors the Taichi evaluators below)
    # =========================================================================

    def is_primary(self, point: tuple[float, float, float]) -> bool:
        """Evaluate the pattern predicate at a world position."""
        x, y, z = point
        if self.pattern == SurfacePattern.CHECKER_XY:
            return (math.floor(y) + math.floor(x)) % 2 != 0
        if self.pattern == SurfacePattern.CHECKER_YZ:
            return (math.floor(y) + math.floor(z)) % 2 != 0
        if self.pattern == SurfacePattern.CHECKER_XZ:
            return (math.floor(x) + math.floor(z)) % 2 != 0
        if self.pattern == SurfacePattern.CHECKER_XZ_UNIT:
            return (math.floor(z) + math.floor(x)) % 1 != 0
        if self.pattern == SurfacePattern.RIPPLE:
            return math.sin(z) + math.cos(x) < RIPPLE_THRESHOLD
        return True

    def diffuse(self, point: tuple[float, float, float]) -> Color:
        """Diffuse color at a world position."""
        return self.primary_diffuse if self.is_primary(point) else self.secondary_diffuse

    def specular_color(self, point: tuple[float, float, float]) -> Color:
        """Specular color at a world position."""
        return self.specular

    def reflectivity(self, point: tuple[float, float, float]) -> float:
        """Mirror reflectivity at a world position."""
        return self.primary_reflect if self.is_primary(point) else self.secondary_reflect

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the surface to a dictionary (for JSON serialization)."""
        return {
            "pattern": self.pattern.name.lower(),
            "primary_diffuse": list(self.primary_diffuse),
            "secondary_diffuse": list(self.secondary_diffuse),
            "specular": list(self.specular),
            "primary_reflect": self.primary_reflect,
            "secondary_reflect": self.secondary_reflect,
            "roughness": self.roughness,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Surface":
        """Load a surface from a dictionary.

        Raises:
            ValueError: If the pattern name is unknown.
        """
        pattern_name = str(data.get("pattern", "uniform")).upper()
        if pattern_name not in SurfacePattern.__members__:
            raise ValueError(f"Unknown surface pattern: {data.get('pattern')}")

        def _color(key: str, default: Color) -> Color:
            values = data.get(key, default)
            return (float(values[0]), float(values[1]), float(values[2]))

        return cls(
            pattern=SurfacePattern[pattern_name],
            primary_diffuse=_color("primary_diffuse", (1.0, 1.0, 1.0)),
            secondary_diffuse=_color("secondary_diffuse", (0.0, 0.0, 0.0)),
            specular=_color("specular", (1.0, 1.0, 1.0)),
            primary_reflect=float(data.get("primary_reflect", 0.7)),
            secondary_reflect=float(data.get("secondary_reflect", 0.1)),
            roughness=float(data.get("roughness", 150.0)),
        )


# =============================================================================
# Surface Field Storage (for scene-level surface management)
# =============================================================================

# Maximum number of distinct surfaces in the scene
MAX_SURFACES = 64

surface_patterns = ti.field(dtype=ti.i32, shape=MAX_SURFACES)
surface_primary_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SURFACES)
surface_secondary_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SURFACES)
surface_specular = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SURFACES)
surface_primary_reflect = ti.field(dtype=ti.f32, shape=MAX_SURFACES)
surface_secondary_reflect = ti.field(dtype=ti.f32, shape=MAX_SURFACES)
surface_roughness = ti.field(dtype=ti.f32, shape=MAX_SURFACES)
num_surfaces = ti.field(dtype=ti.i32, shape=())


def clear_surfaces() -> None:
    """Clear all registered surfaces.

    Resets the surface count to zero. Existing data in the fields will be
    overwritten when new surfaces are added.
    """
    num_surfaces[None] = 0


def add_surface(surface: Surface) -> int:
    """Add a surface to the surface registry.

    Args:
        surface: The surface description.

    Returns:
        The index of the added surface.

    Raises:
        RuntimeError: If the maximum number of surfaces is exceeded.
        ValueError: If a color component or reflectivity is negative.
    """
    for name in ("primary_diffuse", "secondary_diffuse", "specular"):
        for i, component in enumerate(getattr(surface, name)):
            if component < 0.0:
                raise ValueError(f"Surface {name} component {i} = {component} is negative.")
    for name in ("primary_reflect", "secondary_reflect"):
        if getattr(surface, name) < 0.0:
            raise ValueError(f"Surface {name} = {getattr(surface, name)} is negative.")

    idx = num_surfaces[None]
    if idx >= MAX_SURFACES:
        raise RuntimeError(f"Maximum number of surfaces ({MAX_SURFACES}) exceeded")

    surface_patterns[idx] = int(surface.pattern)
    surface_primary_diffuse[idx] = vec3(*surface.primary_diffuse)
    surface_secondary_diffuse[idx] = vec3(*surface.secondary_diffuse)
    surface_specular[idx] = vec3(*surface.specular)
    surface_primary_reflect[idx] = surface.primary_reflect
    surface_secondary_reflect[idx] = surface.secondary_reflect
    surface_roughness[idx] = surface.roughness
    num_surfaces[None] = idx + 1
    return idx


def get_surface_count() -> int:
    """Get the number of surfaces in the registry."""
    return int(num_surfaces[None])


# =============================================================================
# Surface Evaluation (Taichi-side)
# =============================================================================


@ti.func
def _odd_parity(a: ti.f32, b: ti.f32) -> ti.i32:
    """Check whether floor(a) + floor(b) is odd."""
    return ti.cast(tm.floor(a) + tm.floor(b), ti.i32) % 2 != 0


@ti.func
def surface_is_primary(surface_id: ti.i32, point: vec3) -> ti.i32:
    """Evaluate a surface's pattern predicate at a world position.

    Args:
        surface_id: The index of the surface in the registry.
        point: The world position being shaded.

    Returns:
        1 if the primary parameters apply at this point, 0 otherwise.
    """
    pattern = surface_patterns[surface_id]
    result = 1
    if pattern == int(SurfacePattern.CHECKER_XY):
        result = _odd_parity(point.y, point.x)
    elif pattern == int(SurfacePattern.CHECKER_YZ):
        result = _odd_parity(point.y, point.z)
    elif pattern == int(SurfacePattern.CHECKER_XZ):
        result = _odd_parity(point.x, point.z)
    elif pattern == int(SurfacePattern.CHECKER_XZ_UNIT):
        result = (tm.floor(point.z) + tm.floor(point.x)) % 1.0 != 0.0
    elif pattern == int(SurfacePattern.RIPPLE):
        result = ti.sin(point.z) + ti.cos(point.x) < RIPPLE_THRESHOLD
    return result


@ti.func
def surface_diffuse(surface_id: ti.i32, point: vec3) -> vec3:
    """Diffuse color of a surface at a world position."""
    color = surface_secondary_diffuse[surface_id]
    if surface_is_primary(surface_id, point):
        color = surface_primary_diffuse[surface_id]
    return color


@ti.func
def surface_specular_color(surface_id: ti.i32, point: vec3) -> vec3:
    """Specular color of a surface at a world position."""
    return surface_specular[surface_id]


@ti.func
def surface_reflectivity(surface_id: ti.i32, point: vec3) -> ti.f32:
    """Mirror reflectivity of a surface at a world position."""
    reflectivity = surface_secondary_reflect[surface_id]
    if surface_is_primary(surface_id, point):
        reflectivity = surface_primary_reflect[surface_id]
    return reflectivity


@ti.func
def get_surface_roughness(surface_id: ti.i32) -> ti.f32:
    """Specular exponent of a surface."""
    return surface_roughness[surface_id]
