# core/aabb.py
from pathtracer.core.vector import Vector3

# Outward padding applied to every box so flat primitives keep a volume.
AABB_EPSILON = 1e-7


class AABB:
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = Vector3(minimum.x - AABB_EPSILON, minimum.y - AABB_EPSILON, minimum.z - AABB_EPSILON)
        self.maximum = Vector3(maximum.x + AABB_EPSILON, maximum.y + AABB_EPSILON, maximum.z + AABB_EPSILON)

    def hit(self, origin: Vector3, inv_dir: Vector3, t_min: float, t_max: float) -> bool:
        # Slab method: for each axis, find the entry/exit interval and keep
        # the intersection of all three. NaN compares false, so a 0 * inf
        # slab adds no bound.
        for a in range(3):
            t0 = (self.minimum[a] - origin[a]) * inv_dir[a]
            t1 = (self.maximum[a] - origin[a]) * inv_dir[a]
            if t0 > t1:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
        return t_min <= t_max

    def center(self) -> Vector3:
        return (self.minimum + self.maximum) * 0.5

    def extent(self) -> Vector3:
        return self.maximum - self.minimum

    def longest_axis(self) -> int:
        d = self.extent()
        if d.x > d.y and d.x > d.z:
            return 0
        if d.y > d.z:
            return 1
        return 2

    def contains(self, other: "AABB", tolerance: float = 0.0) -> bool:
        return all(
            self.minimum[a] <= other.minimum[a] + tolerance and self.maximum[a] >= other.maximum[a] - tolerance
            for a in range(3)
        )

    def surrounds_axis(self, other: "AABB", axis: int) -> bool:
        """Strict containment of ``other`` along a single axis."""
        return self.minimum[axis] < other.minimum[axis] and self.maximum[axis] > other.maximum[axis]

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        small = Vector3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
