"""Tests for material scattering."""

import math

import numpy as np
import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials import AIR_INDEX, Dielectric, Glossy, Lambertian, Metal, is_emissive
from pathtracer.materials.dielectric import ENTRY_TINT
from pathtracer.materials.glossy import SPECULAR_TINT
from pathtracer.materials.presets import DielectricPresets, LightPresets, MetalPresets

UP = Vector3(0.0, 1.0, 0.0)


def incoming(angle):
    """Downward ray hitting the origin at ``angle`` radians from the normal."""
    direction = Vector3(math.sin(angle), -math.cos(angle), 0.0)
    return Ray(Vector3(0.0, 0.0, 0.0) - direction, direction)


def record(material, t=1.0, normal=UP):
    return HitRecord(t, Vector3(0.0, 0.0, 0.0), normal, material)


class TestLambertian:
    """Tests for the diffuse material."""

    def test_direction_in_hemisphere(self, rng):
        mat = Lambertian(Vector3(0.8, 0.3, 0.3))
        for _ in range(200):
            scatter = mat.scatter(incoming(rng.uniform(0.0, 1.5)), record(mat), rng.random(), rng.random(), rng)
            assert scatter.ray.direction.dot(UP) >= -1e-9
            assert scatter.attenuation == mat.albedo

    def test_attenuation_in_unit_range(self, rng):
        mat = Lambertian(Vector3(0.8, 0.3, 0.3))
        scatter = mat.scatter(incoming(0.3), record(mat), 0.25, 0.75, rng)
        assert all(0.0 <= c <= 1.0 for c in scatter.attenuation)

    def test_emissive_albedo(self, rng):
        mat = Lambertian(Vector3(6.0, 6.0, 6.0))
        assert is_emissive(mat.scatter(incoming(0.0), record(mat), 0.5, 0.5, rng).attenuation)


class TestMetal:
    """Tests for the metal material."""

    def test_mirror_reflection(self, rng):
        mat = Metal(Vector3(0.9, 0.9, 0.9))
        scatter = mat.scatter(incoming(math.pi / 4.0), record(mat), 0.5, 0.5, rng)
        expected = Vector3(1.0, 1.0, 0.0).normalize()
        assert scatter.ray.direction.to_tuple() == pytest.approx(expected.to_tuple())

    def test_attenuation_in_unit_range(self, rng):
        mat = Metal(Vector3(0.95, 0.64, 0.54), roughness=0.4)
        for _ in range(200):
            scatter = mat.scatter(incoming(rng.uniform(0.0, 1.55)), record(mat), rng.random(), rng.random(), rng)
            assert all(0.0 <= c <= 1.0 for c in scatter.attenuation)

    def test_fresnel_brightens_at_grazing_angles(self, rng):
        mat = Metal(Vector3(0.5, 0.5, 0.5))
        head_on = mat.scatter(incoming(0.0), record(mat), 0.5, 0.5, rng).attenuation
        grazing = mat.scatter(incoming(1.5), record(mat), 0.5, 0.5, rng).attenuation
        assert head_on.x == pytest.approx(0.5)
        assert grazing.x > head_on.x

    def test_numpy_roughness(self, rng):
        """Roughness decoded by a loader as a numpy scalar."""
        mat = Metal(Vector3(0.9, 0.9, 0.9), roughness=np.float32(0.3))
        for _ in range(50):
            scatter = mat.scatter(incoming(0.5), record(mat), rng.random(), rng.random(), rng)
            assert all(0.0 <= c <= 1.0 for c in scatter.attenuation)


class TestGlossy:
    """Tests for the coated diffuse material."""

    def test_low_r1_takes_specular_lobe(self, rng):
        mat = Glossy(Vector3(0.2, 0.4, 0.6), reflectance=0.5)
        scatter = mat.scatter(incoming(0.0), record(mat), 0.0, 0.5, rng)
        assert scatter.attenuation == SPECULAR_TINT
        assert scatter.ray.direction.to_tuple() == pytest.approx((0.0, 1.0, 0.0))

    def test_high_r1_takes_diffuse_lobe(self, rng):
        mat = Glossy(Vector3(0.2, 0.4, 0.6), reflectance=0.5)
        scatter = mat.scatter(incoming(0.0), record(mat), 0.9, 0.5, rng)
        assert scatter.attenuation == mat.albedo
        assert scatter.ray.direction.dot(UP) >= 0.0

    def test_reflection_probability_grows_toward_grazing(self):
        mat = Glossy(Vector3(0.5, 0.5, 0.5), reflectance=0.5)
        rec = record(mat)
        head_on = mat.reflection_probability(incoming(0.0), rec)
        grazing = mat.reflection_probability(incoming(1.5), rec)
        ratio = AIR_INDEX / 1.5
        assert head_on == pytest.approx(((1.0 - ratio) / (1.0 + ratio)) ** 2)
        assert grazing > head_on


class TestDielectric:
    """Tests for glass-like materials."""

    def test_total_internal_reflection_always_reflects(self, rng):
        """A ray leaving glass at 60 degrees from the normal cannot refract."""
        mat = Dielectric(Vector3(0.1, 0.1, 0.1), 1.52)
        direction = Vector3(math.sin(math.pi / 3.0), math.cos(math.pi / 3.0), 0.0)
        ray = Ray(Vector3(0.0, 0.0, 0.0) - direction, direction)
        for r1 in (0.0, 0.25, 0.5, 0.75, 0.999):
            scatter = mat.scatter(ray, record(mat, t=2.0), r1, 0.5, rng)
            assert scatter.ray.direction.to_tuple() == pytest.approx((math.sin(math.pi / 3.0), -0.5, 0.0))

    def test_exit_applies_beer_lambert(self, rng):
        mat = Dielectric(Vector3(0.1, 0.2, 0.0), 1.52)
        ray = Ray(Vector3(0.0, -1.0, 0.0), UP)
        scatter = mat.scatter(ray, record(mat, t=2.0), 0.99, 0.5, rng)
        assert scatter.attenuation.to_tuple() == pytest.approx((math.exp(-0.2), math.exp(-0.4), 1.0))

    def test_entry_refracts_straight_through_at_normal_incidence(self, rng):
        mat = Dielectric(Vector3(0.1, 0.1, 0.1), 1.52)
        scatter = mat.scatter(incoming(0.0), record(mat), 0.99, 0.5, rng)
        assert scatter.attenuation == ENTRY_TINT
        assert scatter.ray.direction.to_tuple() == pytest.approx((0.0, -1.0, 0.0))

    def test_entry_reflects_for_low_r1(self, rng):
        mat = Dielectric(Vector3(0.1, 0.1, 0.1), 1.52)
        scatter = mat.scatter(incoming(0.0), record(mat), 0.0, 0.5, rng)
        assert scatter.ray.direction.to_tuple() == pytest.approx((0.0, 1.0, 0.0))

    def test_refraction_bends_toward_normal(self, rng):
        mat = Dielectric(Vector3(0.1, 0.1, 0.1), 1.52)
        angle = math.pi / 4.0
        scatter = mat.scatter(incoming(angle), record(mat), 0.99, 0.5, rng)
        sin_out = scatter.ray.direction.x
        assert sin_out == pytest.approx(math.sin(angle) * AIR_INDEX / 1.52)

    def test_preview_color(self):
        assert Dielectric(Vector3(0.1, 0.1, 0.1)).preview_color() == ENTRY_TINT


class TestPresets:
    """Tests for the predefined materials."""

    def test_light_presets_are_emissive(self):
        light = LightPresets.warm_light()
        assert is_emissive(light.albedo)

    def test_metal_and_glass_presets(self):
        assert isinstance(MetalPresets.gold(), Metal)
        assert DielectricPresets.glass().refractive_index == pytest.approx(1.52)
        assert DielectricPresets.water().refractive_index == pytest.approx(1.33)
