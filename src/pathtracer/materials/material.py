# materials/material.py
import random
from typing import NamedTuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord

# Refractive index of air, used for every air/material interface.
AIR_INDEX = 1.00028


class Scatter(NamedTuple):
    """Result of a scatter event: the color filter and the outgoing ray."""
    attenuation: Vector3
    ray: Ray


def is_emissive(attenuation: Vector3) -> bool:
    """Any channel above 1 marks a light source: the path stops there."""
    return attenuation.x > 1.0 or attenuation.y > 1.0 or attenuation.z > 1.0


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials are immutable value objects shared by every render worker.
    ``r1`` and ``r2`` are uniform numbers in [0, 1) drawn by the caller from
    its low-discrepancy block; ``rng`` is only used for secondary jitter.
    """
    __slots__ = ("albedo",)

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, r1: float, r2: float, rng: random.Random) -> Scatter:
        """
        Computes the attenuation and the scattered ray.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def preview_color(self) -> Vector3:
        """Flat color used by the single-bounce preview shader."""
        return self.albedo

    def __repr__(self) -> str:
        return f"{type(self).__name__}(albedo={self.albedo!r})"
