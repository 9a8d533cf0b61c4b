# materials/dielectric.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, schlick
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import AIR_INDEX, Material, Scatter

# Scale of the Beer-Lambert absorption per unit of distance travelled inside.
ABSORPTION_SCALE = 1.0

# Filter applied when a ray enters the material from outside.
ENTRY_TINT = Vector3(0.99, 0.99, 0.99)


class Dielectric(Material):
    """
    Glass-like material that reflects or refracts.

    ``albedo`` is the absorption coefficient per channel: light that
    travelled ``t`` through the medium is filtered by
    ``exp(-albedo * t * ABSORPTION_SCALE)``.
    """
    __slots__ = ("refractive_index", "roughness")

    def __init__(self, albedo: Vector3, refractive_index: float = 1.52, roughness: float = 0.0):
        super().__init__(albedo)
        self.refractive_index = refractive_index
        self.roughness = roughness

    def scatter(self, ray_in: Ray, rec: HitRecord, r1: float, r2: float, rng: random.Random) -> Scatter:
        unit_direction = ray_in.direction

        # Determine if we're entering or exiting the material
        if unit_direction.dot(rec.normal) > 0.0:
            outward_normal = -rec.normal
            ni_over_nt = self.refractive_index / AIR_INDEX
            attenuation = (self.albedo * (-rec.t * ABSORPTION_SCALE)).exp()
        else:
            outward_normal = rec.normal
            ni_over_nt = AIR_INDEX / self.refractive_index
            attenuation = ENTRY_TINT

        if self.roughness > 0.0:
            outward_normal = (outward_normal + random_in_unit_sphere(rng) * self.roughness).normalize()

        cos_theta = min(-unit_direction.dot(outward_normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Check for total internal reflection
        if ni_over_nt * sin_theta > 1.0:
            return Scatter(attenuation, Ray(rec.p, unit_direction.reflect(outward_normal)))

        # Calculate reflection probability using Schlick's approximation
        if r1 < schlick(cos_theta, ni_over_nt):
            return Scatter(attenuation, Ray(rec.p, unit_direction.reflect(outward_normal)))
        return Scatter(attenuation, Ray(rec.p, unit_direction.refract(outward_normal, ni_over_nt)))

    def preview_color(self) -> Vector3:
        return ENTRY_TINT

    def __repr__(self) -> str:
        return (f"Dielectric(albedo={self.albedo!r}, refractive_index={self.refractive_index}, "
                f"roughness={self.roughness})")
