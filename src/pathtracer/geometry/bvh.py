# geometry/bvh.py
from functools import cmp_to_key
from typing import List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord, Hittable


def enclosing_box(objects: List[Hittable], start: int, end: int) -> AABB:
    box = objects[start].bounding_box()
    for i in range(start + 1, end):
        box = AABB.surrounding_box(box, objects[i].bounding_box())
    return box


def box_compare(a: Hittable, b: Hittable, axis: int) -> int:
    """
    Order for the build sort: a box that strictly contains the other along
    the axis comes first, otherwise boxes are ordered by center.
    """
    box_a = a.bounding_box()
    box_b = b.bounding_box()
    if box_a.surrounds_axis(box_b, axis):
        return -1
    if box_b.surrounds_axis(box_a, axis):
        return 1
    center_a = (box_a.minimum[axis] + box_a.maximum[axis]) * 0.5
    center_b = (box_b.minimum[axis] + box_b.maximum[axis]) * 0.5
    if center_a < center_b:
        return -1
    if center_a > center_b:
        return 1
    return 0


def true_middle(objects: List[Hittable], start: int, end: int, axis: int) -> int:
    """
    Index of the first object whose center lies past the spatial midpoint
    between the first object's minimum and the last object's maximum.

    The result is always in [start + 1, end - 1]. When no center crosses the
    midpoint (stacked duplicates) the split falls back to the count median
    so the tree depth stays logarithmic.
    """
    mid_world = (objects[start].bounding_box().minimum[axis]
                 + objects[end - 1].bounding_box().maximum[axis]) * 0.5
    mid_index = start + 1
    while mid_index < end - 1 and objects[mid_index].bounding_box().center()[axis] <= mid_world:
        mid_index += 1
    if mid_index == end - 1 and objects[mid_index].bounding_box().center()[axis] <= mid_world:
        return start + (end - start) // 2
    return mid_index


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy node.

    Children are either nested BVHNodes or primitives (the leaves). A node
    built over a single object keeps it as ``left`` with no ``right``. The
    tree is immutable once built and safe to share between render threads.
    """
    __slots__ = ("left", "right", "box")

    def __init__(self, objects: List[Hittable], start: int = 0, end: Optional[int] = None):
        if end is None:
            end = len(objects)
        object_span = end - start
        if object_span <= 0:
            raise ValueError("Cannot build a BVH over an empty object list")

        axis = enclosing_box(objects, start, end).longest_axis()
        objects[start:end] = sorted(objects[start:end],
                                    key=cmp_to_key(lambda a, b: box_compare(a, b, axis)))

        if object_span == 1:
            self.left = objects[start]
            self.right = None
        elif object_span == 2:
            self.left = objects[start]
            self.right = objects[start + 1]
        elif object_span == 3:
            self.left = BVHNode(objects, start, start + 2)
            self.right = objects[start + 2]
        else:
            mid = true_middle(objects, start, end, axis)
            self.left = BVHNode(objects, start, mid)
            self.right = BVHNode(objects, mid, end)

        if self.right is None:
            self.box = self.left.bounding_box()
        else:
            self.box = AABB.surrounding_box(self.left.bounding_box(), self.right.bounding_box())

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray.origin, ray.inv_direction, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)
        if self.right is None:
            return hit_left

        # Anything the right subtree returns is closer than the left hit
        hit_right = self.right.hit(ray, t_min, hit_left.t if hit_left is not None else t_max)
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self) -> AABB:
        return self.box

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 1
        right = self.right.depth() if isinstance(self.right, BVHNode) else (1 if self.right is not None else 0)
        return 1 + max(left, right)

    def leaves(self) -> List[Hittable]:
        result = []
        for child in (self.left, self.right):
            if child is None:
                continue
            if isinstance(child, BVHNode):
                result.extend(child.leaves())
            else:
                result.append(child)
        return result
