from pathtracer.core.aabb import AABB, AABB_EPSILON
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3

__all__ = ["AABB", "AABB_EPSILON", "Color", "Ray", "Vector3"]
