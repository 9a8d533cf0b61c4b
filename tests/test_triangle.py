"""Unit tests for triangle intersection."""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.triangle import Triangle

V0 = Vector3(0.0, 0.0, 0.0)
V1 = Vector3(1.0, 0.0, 0.0)
V2 = Vector3(0.0, 1.0, 0.0)


def from_front(x=0.2, y=0.2):
    return Ray(Vector3(x, y, 5.0), Vector3(0.0, 0.0, -1.0))


def from_back(x=0.2, y=0.2):
    return Ray(Vector3(x, y, -5.0), Vector3(0.0, 0.0, 1.0))


class TestTriangleIntersection:
    """Tests for Möller–Trumbore hits and misses."""

    def test_face_normal(self, grey):
        assert Triangle(V0, V1, V2, grey).normal.to_tuple() == pytest.approx((0.0, 0.0, 1.0))

    def test_front_hit(self, grey):
        rec = Triangle(V0, V1, V2, grey).hit(from_front(), 0.001, 1000.0)
        assert rec is not None
        assert rec.t == pytest.approx(5.0)
        assert rec.p.to_tuple() == pytest.approx((0.2, 0.2, 0.0))
        assert rec.normal.to_tuple() == pytest.approx((0.0, 0.0, 1.0))

    def test_miss_outside_edges(self, grey):
        assert Triangle(V0, V1, V2, grey).hit(from_front(0.8, 0.8), 0.001, 1000.0) is None

    def test_parallel_ray_misses(self, grey):
        ray = Ray(Vector3(-1.0, 0.2, 0.0), Vector3(1.0, 0.0, 0.0))
        assert Triangle(V0, V1, V2, grey).hit(ray, 0.001, 1000.0) is None

    def test_degenerate_triangle_misses(self, grey):
        tri = Triangle(V0, V0, V0, grey)
        assert tri.hit(from_front(0.0, 0.0), 0.001, 1000.0) is None

    def test_interval_excludes_hit(self, grey):
        assert Triangle(V0, V1, V2, grey).hit(from_front(), 0.001, 4.0) is None


class TestTriangleSides:
    """Tests for two-sided shading and back-face culling."""

    def test_two_sided_flips_normal_toward_ray(self, grey):
        rec = Triangle(V0, V1, V2, grey).hit(from_back(), 0.001, 1000.0)
        assert rec is not None
        assert rec.normal.to_tuple() == pytest.approx((0.0, 0.0, -1.0))

    def test_culled_back_face(self, grey):
        tri = Triangle(V0, V1, V2, grey, two_sided=False)
        assert tri.hit(from_back(), 0.001, 1000.0) is None
        assert tri.hit(from_front(), 0.001, 1000.0) is not None


class TestSmoothNormals:
    """Tests for barycentric normal interpolation."""

    def test_vertex_normals_are_blended(self, grey):
        up = Vector3(0.0, 0.0, 1.0)
        tri = Triangle(V0, V1, V2, grey, n0=up, n1=Vector3(1.0, 0.0, 0.0), n2=up)
        rec = tri.hit(from_front(0.25, 0.25), 0.001, 1000.0)
        # Weights: v0 0.5, v1 0.25, v2 0.25
        norm = math.sqrt(0.25 ** 2 + 0.75 ** 2)
        assert rec.normal.to_tuple() == pytest.approx((0.25 / norm, 0.0, 0.75 / norm))

    def test_missing_vertex_normals_default_to_face_normal(self, grey):
        tri = Triangle(V0, V1, V2, grey, n0=Vector3(1.0, 0.0, 0.0))
        assert tri.n1.to_tuple() == pytest.approx((0.0, 0.0, 1.0))
        assert tri.n0.to_tuple() == pytest.approx((0.0, 0.0, 1.0))

    def test_flat_bounding_box_is_padded(self, grey):
        box = Triangle(V0, V1, V2, grey).bounding_box()
        assert box.maximum.z > box.minimum.z
