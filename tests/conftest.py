"""Shared fixtures for the path tracer tests."""

import random

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """Seeded generator so stochastic tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def grey():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def front_camera():
    """Pinhole camera at z=5 looking at the origin."""
    return Camera(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0),
                  fov=40.0, aspect_ratio=1.0)


@pytest.fixture
def unit_sphere_world(grey):
    """A single unit sphere at the origin with its BVH built."""
    world = World([Sphere(Vector3(0.0, 0.0, 0.0), 1.0, grey)])
    world.build_bvh()
    return world
