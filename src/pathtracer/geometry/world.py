# geometry/world.py
import logging
from typing import List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.bvh import BVHNode, enclosing_box
from pathtracer.geometry.hittable import HitRecord, Hittable

logger = logging.getLogger(__name__)


def linear_hit(objects: List[Hittable], ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
    """Nearest hit by scanning every object."""
    hit_record = None
    closest_so_far = t_max
    for obj in objects:
        rec = obj.hit(ray, t_min, closest_so_far)
        if rec is not None:
            closest_so_far = rec.t
            hit_record = rec
    return hit_record


class World(Hittable):
    """
    A list of Hittable objects plus the BVH built over them.

    Until build_bvh() is called, hits fall back to a linear scan.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []
        self.bvh_root: Optional[BVHNode] = None

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bvh_root = None

    def clear(self):
        self.objects.clear()
        self.bvh_root = None

    def build_bvh(self) -> BVHNode:
        logger.info("Building BVH for %d objects...", len(self.objects))
        # The build sorts in place; keep the insertion order of self.objects.
        self.bvh_root = BVHNode(list(self.objects))
        logger.info("BVH built with depth %d", self.bvh_root.depth())
        return self.bvh_root

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if self.bvh_root is not None:
            return self.bvh_root.hit(ray, t_min, t_max)
        return linear_hit(self.objects, ray, t_min, t_max)

    def bounding_box(self) -> AABB:
        if self.bvh_root is not None:
            return self.bvh_root.bounding_box()
        if not self.objects:
            raise ValueError("An empty world has no bounding box")
        return enclosing_box(self.objects, 0, len(self.objects))

    def __len__(self) -> int:
        return len(self.objects)
