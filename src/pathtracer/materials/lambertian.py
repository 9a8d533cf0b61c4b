# materials/lambertian.py
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import sample_cosine_hemisphere
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scatter


class Lambertian(Material):
    """
    Lambertian diffuse material.

    An albedo channel above 1 turns the surface into an emitter.
    """
    __slots__ = ()

    def __init__(self, albedo: Vector3):
        super().__init__(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, r1: float, r2: float, rng: random.Random) -> Scatter:
        """
        Scatter a ray according to a Lambertian reflection model.

        The direction is importance sampled from the cosine-weighted
        hemisphere, so BRDF / pdf reduces to the flat albedo.
        """
        scatter_direction = sample_cosine_hemisphere(rec.normal, r1, r2)
        return Scatter(self.albedo, Ray(rec.p, scatter_direction))
