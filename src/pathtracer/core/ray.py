# core/ray.py
import math

from pathtracer.core.vector import Vector3


def reciprocal(value: float) -> float:
    """1/value with IEEE-754 semantics: +0 and -0 map to signed infinity."""
    if value == 0.0:
        return math.copysign(math.inf, value)
    return 1.0 / value


class Ray:
    """
    Represents a ray in 3D space with an origin and a unit-length direction.

    The direction is normalized once at construction and the component-wise
    reciprocal is cached for the slab tests in AABB and AxisBox.
    """
    __slots__ = ("origin", "direction", "inv_direction")

    def __init__(self, origin: Vector3, direction: Vector3):
        self.origin = origin
        self.direction = direction.normalize()
        d = self.direction
        self.inv_direction = Vector3(reciprocal(d.x), reciprocal(d.y), reciprocal(d.z))

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"
