# geometry/triangle.py
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord, Hittable

# Determinant below which the ray is treated as parallel to the triangle.
PARALLEL_EPSILON = 1e-6


class Triangle(Hittable):
    """Represents a single triangle in 3D space with per-vertex normals."""
    __slots__ = ("v0", "v1", "v2", "n0", "n1", "n2", "normal", "two_sided", "material", "_box")

    def __init__(self,
                 v0: Vector3, v1: Vector3, v2: Vector3,
                 material,
                 n0: Optional[Vector3] = None, n1: Optional[Vector3] = None, n2: Optional[Vector3] = None,
                 two_sided: bool = True):
        # Vertices
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material
        self.two_sided = two_sided

        # Geometric normal, used for back-face culling
        self.normal = (v1 - v0).cross(v2 - v0).normalize()

        # Normals
        if n0 is None or n1 is None or n2 is None:
            self.n0 = self.n1 = self.n2 = self.normal
        else:
            self.n0 = n0
            self.n1 = n1
            self.n2 = n2

        self._box = AABB(v0.min_by_component(v1).min_by_component(v2),
                         v0.max_by_component(v1).max_by_component(v2))

    def get_normal(self, u: float, v: float) -> Vector3:
        """Interpolate normal at the given barycentric coordinates."""
        w = 1.0 - u - v
        return (self.n0 * w + self.n1 * u + self.n2 * v).normalize()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.two_sided and ray.direction.dot(self.normal) >= 0.0:
            return None

        # Möller–Trumbore intersection algorithm
        edge1 = self.v1 - self.v0
        edge2 = self.v2 - self.v0
        h = ray.direction.cross(edge2)
        a = edge1.dot(h)

        # If ray is parallel to triangle
        if -PARALLEL_EPSILON < a < PARALLEL_EPSILON:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)

        # Ray misses the triangle
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(edge1)
        v = f * ray.direction.dot(q)

        # Ray misses the triangle
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * edge2.dot(q)

        # Intersection is behind ray origin or too far
        if t <= t_min or t >= t_max:
            return None

        normal = self.get_normal(u, v)
        if self.two_sided and ray.direction.dot(normal) > 0.0:
            normal = -normal
        return HitRecord(t, ray.at(t), normal, self.material)

    def bounding_box(self) -> AABB:
        """Compute the bounding box for the triangle."""
        return self._box
