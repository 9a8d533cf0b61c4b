# geometry/hittable.py
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("t", "p", "normal", "material")

    def __init__(self, t: float, p: Vector3, normal: Vector3, material=None):
        self.t = t                  # Ray parameter, strictly inside (t_min, t_max)
        self.p = p                  # Intersection point
        self.normal = normal        # Unit shading normal
        self.material = material    # Shared, read-only material

    def __repr__(self) -> str:
        return f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r})"


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
