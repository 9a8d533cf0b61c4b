# materials/metal.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scatter


class Metal(Material):
    """
    Metal material with reflective properties.

    Roughness jitters the mirror normal; the tint follows a Schlick-style
    Fresnel blend from albedo toward white at grazing angles.
    """
    __slots__ = ("roughness",)

    def __init__(self, albedo: Vector3, roughness: float = 0.0):
        super().__init__(albedo)
        self.roughness = roughness

    def scatter(self, ray_in: Ray, rec: HitRecord, r1: float, r2: float, rng: random.Random) -> Scatter:
        normal = rec.normal
        if self.roughness > 0.0:
            normal = (normal + random_in_unit_sphere(rng) * self.roughness).normalize()
        reflected = reflect(ray_in.direction, normal)

        cosine = min(-ray_in.direction.dot(rec.normal), 1.0)
        attenuation = (self.albedo + (Vector3.one() - self.albedo) * math.pow(1.0 - cosine, 5)).clamped(0.0, 1.0)
        return Scatter(attenuation, Ray(rec.p, reflected))

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, roughness={self.roughness})"
