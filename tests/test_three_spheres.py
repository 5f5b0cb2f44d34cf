"""Tests for the default three-sphere scene.

Tests cover:
- Sphere count, placement and order
- The accompanying camera
- Which sphere the center and side rays see
"""

import pytest

from spheretrace.camera.pinhole import Camera
from spheretrace.core.ray import Ray
from spheretrace.core.vec3 import Vec3
from spheretrace.geometry.sphere import MISSED, HitRecord
from spheretrace.scene.manager import Scene
from spheretrace.scene.three_spheres import (
    SPHERE_DEPTH,
    SPHERE_RADIUS,
    SPHERE_SPACING,
    create_three_spheres_scene,
)


class TestThreeSpheresScene:
    """Tests for create_three_spheres_scene."""

    def test_returns_scene_and_camera(self):
        """Test the factory returns a Scene and the default Camera."""
        scene, camera = create_three_spheres_scene()
        assert isinstance(scene, Scene)
        assert camera == Camera.from_viewport()

    def test_sphere_layout(self):
        """Test the three spheres sit right, center, left in a row."""
        scene, _ = create_three_spheres_scene()
        assert [tuple(s.center) for s in scene] == [
            (SPHERE_SPACING, 0.0, SPHERE_DEPTH),
            (0.0, 0.0, SPHERE_DEPTH),
            (-SPHERE_SPACING, 0.0, SPHERE_DEPTH),
        ]
        assert all(s.radius == SPHERE_RADIUS for s in scene)

    def test_constants(self):
        """Test the scene constants."""
        assert SPHERE_RADIUS == 4.0
        assert SPHERE_DEPTH == -10.0
        assert SPHERE_SPACING == 9.0

    def test_each_call_builds_a_new_scene(self):
        """Test scenes from separate calls do not share state."""
        a, _ = create_three_spheres_scene()
        b, _ = create_three_spheres_scene()
        a.add_sphere((0.0, 0.0, 0.0), 1.0)
        assert len(b) == 3


class TestThreeSpheresVisibility:
    """Tests for what the camera sees in the default scene."""

    def test_center_ray_hits_middle_sphere(self, three_spheres, camera):
        """Test the image center sees the middle sphere's near point."""
        record = three_spheres.hit(camera.get_ray(0.5, 0.5))
        assert isinstance(record, HitRecord)
        assert tuple(record.point) == pytest.approx((0.0, 0.0, -6.0))

    def test_side_rays_hit_side_spheres(self, three_spheres):
        """Test rays aimed at the side spheres hit them."""
        for x in (SPHERE_SPACING, -SPHERE_SPACING):
            ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(x, 0.0, SPHERE_DEPTH))
            record = three_spheres.hit(ray)
            assert isinstance(record, HitRecord)
            assert (record.point - Vec3(x, 0.0, SPHERE_DEPTH)).length() == pytest.approx(SPHERE_RADIUS)

    def test_top_of_image_sees_sky(self, three_spheres, camera):
        """Test the top edge of the image center misses every sphere."""
        assert three_spheres.hit(camera.get_ray(0.5, 1.0)) is MISSED
