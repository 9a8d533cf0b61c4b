"""
Primitives, the BVH and the world container.

Every primitive implements ``hit(ray, t_min, t_max)`` returning the nearest
HitRecord strictly inside the interval (or None) and ``bounding_box()``.
"""
from pathtracer.geometry.box import AxisBox, OrientedCube
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import HitRecord, Hittable
from pathtracer.geometry.mesh import Mesh
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.triangle import Triangle
from pathtracer.geometry.world import World, linear_hit

__all__ = [
    "AxisBox",
    "BVHNode",
    "HitRecord",
    "Hittable",
    "Mesh",
    "OrientedCube",
    "Sphere",
    "Triangle",
    "World",
    "linear_hit",
]
