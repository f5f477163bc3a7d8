"""Tests for the sample scenes and the orbit camera."""

import math

import pytest


class TestSampleScenes:
    """Tests for create_default_scene and create_wall_scene."""

    def test_default_scene_contents(self):
        """Test the default scene's objects, lights and surfaces."""
        from src.whitted.scene.manager import PlaneObject, SphereObject
        from src.whitted.scene.samples import create_default_scene
        from src.whitted.surfaces.presets import CHECKERBOARD, RIPPLE, SHINY

        scene = create_default_scene()
        planes = [obj for obj in scene.objects if isinstance(obj, PlaneObject)]
        spheres = [obj for obj in scene.objects if isinstance(obj, SphereObject)]

        assert len(planes) == 1
        assert len(spheres) == 4
        assert len(scene.lights) == 4
        assert scene.surfaces == [RIPPLE, CHECKERBOARD, SHINY]

        # The checkerboard sphere keeps its negative radius
        assert spheres[0].radius == -1.0
        assert spheres[0].surface == CHECKERBOARD

    def test_wall_scene_contents(self):
        """Test the wall scene adds four walls before the shared objects."""
        from src.whitted.scene.manager import PlaneObject
        from src.whitted.scene.samples import WALL_OFFSET, create_default_scene, create_wall_scene
        from src.whitted.surfaces.presets import X_WALL, Z_WALL

        scene = create_wall_scene()
        walls = scene.objects[:4]

        assert all(isinstance(wall, PlaneObject) for wall in walls)
        assert all(wall.offset == WALL_OFFSET for wall in walls)
        assert [wall.surface for wall in walls] == [Z_WALL, Z_WALL, X_WALL, X_WALL]
        assert scene.objects[4:] == create_default_scene().objects
        assert scene.lights != create_default_scene().lights

    def test_sample_registry(self):
        """Test the sample registry builds both scenes."""
        from src.whitted.scene.manager import Scene
        from src.whitted.scene.samples import SAMPLE_SCENES

        assert set(SAMPLE_SCENES) == {"default", "walls"}
        for factory in SAMPLE_SCENES.values():
            assert isinstance(factory(), Scene)

    @pytest.mark.parametrize("name", ["default", "walls"])
    def test_serialization_round_trip(self, name):
        """Test each sample scene survives a dictionary round trip."""
        from src.whitted.scene.manager import Scene
        from src.whitted.scene.samples import SAMPLE_SCENES

        scene = SAMPLE_SCENES[name]()
        assert Scene.from_dict(scene.to_dict()) == scene

    def test_load_wall_scene(self):
        """Test the wall scene fits in the GPU-side storage."""
        from src.whitted.scene.intersection import get_plane_count, get_sphere_count
        from src.whitted.scene.manager import load_scene
        from src.whitted.scene.samples import create_wall_scene
        from src.whitted.surfaces.surface import get_surface_count

        load_scene(create_wall_scene())
        assert get_plane_count() == 5
        assert get_sphere_count() == 4
        assert get_surface_count() == 5


class TestOrbitCamera:
    """Tests for orbit_camera."""

    def test_orbit_start(self):
        """Test the orbit starts on the +z axis looking at the scene center."""
        from src.whitted.scene.samples import ORBIT_HEIGHT, ORBIT_RADIUS, orbit_camera

        camera = orbit_camera(0.0)
        assert camera.position == pytest.approx((0.0, ORBIT_HEIGHT, ORBIT_RADIUS))

    def test_orbit_quarter_turn(self):
        """Test a quarter turn moves the eye to the +x axis."""
        from src.whitted.scene.samples import orbit_camera

        camera = orbit_camera(math.pi / 2)
        assert camera.position == pytest.approx((5.0, 3.0, 0.0), abs=1e-5)

    def test_orbit_keeps_radius(self):
        """Test the eye stays on the orbit circle for any angle."""
        from src.whitted.scene.samples import ORBIT_RADIUS, ORBIT_STEP, orbit_camera

        for frame in range(0, 400, 37):
            x, _, z = orbit_camera(frame * ORBIT_STEP).position
            assert math.hypot(x, z) == pytest.approx(ORBIT_RADIUS, abs=1e-4)
