"""Tests for the Whitted shading integrator.

This module tests:
- Direct lighting (diffuse and specular terms)
- Shadow tests against occluders
- Mirror reflection weighting
- The depth limit and its grey fallback

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run, so module-level
imports of modules containing ti.field() declarations would fail.
"""

import math

import pytest

# Uniform matte white: no highlight, no reflection
MATTE_WHITE = dict(
    primary_diffuse=(1.0, 1.0, 1.0),
    secondary_diffuse=(1.0, 1.0, 1.0),
    specular=(0.0, 0.0, 0.0),
    primary_reflect=0.0,
    secondary_reflect=0.0,
)


def _mirror(reflectivity):
    from src.whitted.surfaces.surface import Surface

    return Surface(
        primary_diffuse=(0.0, 0.0, 0.0),
        secondary_diffuse=(0.0, 0.0, 0.0),
        specular=(0.0, 0.0, 0.0),
        primary_reflect=reflectivity,
        secondary_reflect=reflectivity,
    )


class TestNaturalColor:
    """Tests for direct illumination."""

    def test_facing_light_diffuse(self):
        """Test a light straight above a floor point gives full diffuse."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_light((0.0, 4.0, 0.0), (0.5, 0.25, 1.0))

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert color == pytest.approx((0.5, 0.25, 1.0), abs=1e-5)

    def test_oblique_light_scales_by_cosine(self):
        """Test the diffuse term is weighted by light . normal."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_light((3.0, 3.0, 0.0), (1.0, 1.0, 1.0))

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert color[0] == pytest.approx(math.sqrt(0.5), abs=1e-5)

    def test_light_behind_surface(self):
        """Test a light below the surface contributes nothing."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_light((0.0, -4.0, 0.0), (1.0, 1.0, 1.0))

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert color == (0.0, 0.0, 0.0)

    def test_specular_highlight(self):
        """Test the specular term when the light lies along the mirror direction."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(
            Surface(
                primary_diffuse=(0.0, 0.0, 0.0),
                secondary_diffuse=(0.0, 0.0, 0.0),
                specular=(0.5, 0.5, 0.5),
                roughness=50.0,
            )
        )
        add_light((0.0, 4.0, 0.0), (1.0, 1.0, 1.0))

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 2.0, 0.0))
        assert color == pytest.approx((0.5, 0.5, 0.5), abs=1e-5)

    def test_lights_add_without_clamping(self):
        """Test several lights sum past 1.0."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        for _ in range(3):
            add_light((0.0, 4.0, 0.0), (1.0, 1.0, 1.0))

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert color[1] == pytest.approx(3.0, abs=1e-5)


class TestShadows:
    """Tests for occlusion of lights."""

    def test_occluder_blocks_light(self):
        """Test a sphere between point and light removes its contribution."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light, add_sphere
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_light((0.0, 4.0, 0.0), (1.0, 1.0, 1.0))
        add_sphere((0.0, 2.0, 0.0), 0.5, surface_id=sid)

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert color == (0.0, 0.0, 0.0)

    def test_unoccluded_light_contributes(self):
        """Test the same setup without the occluder is lit."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_light((0.0, 4.0, 0.0), (1.0, 1.0, 1.0))

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert all(c > 0.0 for c in color)

    def test_object_beyond_light_does_not_shadow(self):
        """Test an object farther away than the light leaves it visible."""
        from src.whitted.core.integrator import compute_natural_color
        from src.whitted.scene.intersection import add_light, add_sphere
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_light((0.0, 4.0, 0.0), (1.0, 1.0, 1.0))
        add_sphere((0.0, 8.0, 0.0), 1.0, surface_id=sid)

        color = compute_natural_color(sid, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert color == pytest.approx((1.0, 1.0, 1.0), abs=1e-5)


class TestTrace:
    """Tests for full ray tracing with reflection."""

    def test_miss_is_black(self):
        """Test a ray through an empty scene is black."""
        from src.whitted.core.integrator import trace

        assert trace((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == (0.0, 0.0, 0.0)

    def test_single_bounce_then_miss(self):
        """Test a matte hit with nothing to reflect is just its direct light."""
        from src.whitted.core.integrator import trace
        from src.whitted.scene.intersection import add_light, add_plane
        from src.whitted.surfaces.surface import Surface, add_surface

        sid = add_surface(Surface(**MATTE_WHITE))
        add_plane((0.0, 1.0, 0.0), 0.0, surface_id=sid)
        add_light((0.0, 4.0, 0.0), (1.0, 1.0, 1.0))

        color = trace((0.0, 2.0, 0.0), (0.0, -1.0, 0.0))
        assert color == pytest.approx((1.0, 1.0, 1.0), abs=1e-5)

    def test_reflection_weighted_by_reflectivity(self):
        """Test a mirror floor shows a lit sphere scaled by its reflectivity."""
        from src.whitted.core.integrator import trace
        from src.whitted.scene.intersection import add_light, add_plane, add_sphere
        from src.whitted.surfaces.surface import Surface, add_surface

        mirror_id = add_surface(_mirror(0.5))
        matte_id = add_surface(Surface(**MATTE_WHITE))
        add_plane((0.0, 1.0, 0.0), 0.0, surface_id=mirror_id)
        add_sphere((0.0, 3.0, 0.0), 1.0, surface_id=matte_id)
        add_light((0.0, 1.0, 0.0), (1.0, 1.0, 1.0))

        # Looking straight down from between floor and sphere: the black
        # floor mirror shows the underside of the sphere, lit from below
        color = trace((0.0, 1.0, 0.0), (0.0, -1.0, 0.0))
        assert color == pytest.approx((0.5, 0.5, 0.5), abs=1e-4)

    def test_depth_limit_grey_fallback(self):
        """Test a ray starting at the depth limit gets local light plus grey."""
        from src.whitted.core.integrator import FALLBACK_GREY, MAX_DEPTH, trace
        from src.whitted.scene.intersection import add_plane
        from src.whitted.surfaces.surface import add_surface

        sid = add_surface(_mirror(1.0))
        add_plane((0.0, 1.0, 0.0), 0.0, surface_id=sid)

        color = trace((0.0, 1.0, 0.0), (0.0, -1.0, 0.0), depth=MAX_DEPTH)
        assert color == pytest.approx(tuple(FALLBACK_GREY), abs=1e-6)

    def test_mirror_box_terminates(self):
        """Test facing mirrors stop at the depth limit with a finite color."""
        from src.whitted.core.integrator import trace
        from src.whitted.scene.intersection import add_plane
        from src.whitted.surfaces.surface import add_surface

        sid = add_surface(_mirror(1.0))
        add_plane((0.0, 1.0, 0.0), 0.0, surface_id=sid)
        add_plane((0.0, -1.0, 0.0), 2.0, surface_id=sid)

        color = trace((0.0, 1.0, 0.0), (0.0, -1.0, 0.0))
        for c in color:
            assert math.isfinite(c)
        # No lights, perfect mirrors: only the grey fallback remains
        assert color == pytest.approx((0.5, 0.5, 0.5), abs=1e-5)

    def test_mirror_box_attenuates_fallback(self):
        """Test partial mirrors scale the fallback by every bounce's reflectivity."""
        from src.whitted.core.integrator import MAX_DEPTH, trace
        from src.whitted.scene.intersection import add_plane
        from src.whitted.surfaces.surface import add_surface

        sid = add_surface(_mirror(0.5))
        add_plane((0.0, 1.0, 0.0), 0.0, surface_id=sid)
        add_plane((0.0, -1.0, 0.0), 2.0, surface_id=sid)

        color = trace((0.0, 1.0, 0.0), (0.0, -1.0, 0.0))
        assert color[0] == pytest.approx(0.5 * 0.5**MAX_DEPTH, rel=1e-3)
