# materials/glossy.py
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect, sample_cosine_hemisphere, schlick
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import AIR_INDEX, Material, Scatter

# Tint of the specular lobe.
SPECULAR_TINT = Vector3(0.9, 0.9, 0.9)


class Glossy(Material):
    """
    Diffuse base under a clear coat.

    Each scatter picks one lobe: the near-specular coat with probability
    equal to its Schlick reflectance, otherwise the cosine-weighted diffuse
    base. ``reflectance`` sets the coat's index ratio as
    ``AIR_INDEX / (1 + reflectance)``.
    """
    __slots__ = ("reflectance", "roughness")

    def __init__(self, albedo: Vector3, reflectance: float = 0.5, roughness: float = 0.0):
        super().__init__(albedo)
        self.reflectance = reflectance
        self.roughness = roughness

    def reflection_probability(self, ray_in: Ray, rec: HitRecord) -> float:
        cosine = min(-ray_in.direction.dot(rec.normal), 1.0)
        return schlick(cosine, AIR_INDEX / (1.0 + self.reflectance))

    def scatter(self, ray_in: Ray, rec: HitRecord, r1: float, r2: float, rng: random.Random) -> Scatter:
        p = self.reflection_probability(ray_in, rec)
        if r1 < p:
            direction = reflect(ray_in.direction, rec.normal)
            if self.roughness > 0.0:
                direction = direction + random_in_unit_sphere(rng) * self.roughness
            return Scatter(SPECULAR_TINT, Ray(rec.p, direction))

        # Stretch the part of r1 left over by the lobe choice back to [0, 1)
        r1 = (r1 - p) / (1.0 - p) if p < 1.0 else r1
        return Scatter(self.albedo, Ray(rec.p, sample_cosine_hemisphere(rec.normal, r1, r2)))

    def __repr__(self) -> str:
        return f"Glossy(albedo={self.albedo!r}, reflectance={self.reflectance}, roughness={self.roughness})"
