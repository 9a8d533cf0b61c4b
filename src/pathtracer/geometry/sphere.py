# geometry/sphere.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord, Hittable


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A negative radius keeps the same surface but flips the normal inward,
    which is how hollow glass shells are modelled.
    """
    __slots__ = ("center", "radius", "material", "_box")

    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material
        offset = Vector3(abs(radius), abs(radius), abs(radius))
        self._box = AABB(center - offset, center + offset)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if self.radius == 0.0:
            return None

        # Ray directions are unit length, so a == 1.
        oc = ray.origin - self.center
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - c

        if discriminant <= 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = -half_b - sqrt_disc
        if root <= t_min or root >= t_max:
            root = -half_b + sqrt_disc
            if root <= t_min or root >= t_max:
                return None

        p = ray.at(root)
        return HitRecord(root, p, (p - self.center) / self.radius, self.material)

    def bounding_box(self) -> AABB:
        # The bounding box of a sphere is center ± radius
        return self._box
