# geometry/box.py
import math
from typing import Optional, Sequence, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord, Hittable

# Distance from a face within which a hit point counts as lying on it.
FACE_EPSILON = 1e-4


class AxisBox(Hittable):
    """
    Axis-aligned box given by its center and size.

    Any negative size component marks the box as hollow: the surface is the
    same but every normal points inward, which turns the box into a room the
    camera can sit inside.
    """
    __slots__ = ("minimum", "maximum", "hollow", "material", "_box")

    def __init__(self, center: Vector3, size: Vector3, material):
        self.hollow = min(size.x, size.y, size.z) < 0.0
        half = Vector3(abs(size.x * 0.5), abs(size.y * 0.5), abs(size.z * 0.5))
        self.minimum = center - half
        self.maximum = center + half
        self.material = material
        self._box = AABB(self.minimum, self.maximum)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        origin = ray.origin
        inv_d = ray.inv_direction
        t_near = t_min
        t_far = t_max
        for a in range(3):
            t0 = (self.minimum[a] - origin[a]) * inv_d[a]
            t1 = (self.maximum[a] - origin[a]) * inv_d[a]
            if t0 > t1:
                t0, t1 = t1, t0
            if t0 > t_near:
                t_near = t0
            if t1 < t_far:
                t_far = t1
        if t_near > t_far:
            return None

        # Entering face first, exiting face when the origin is inside.
        if t_min < t_near < t_max:
            t = t_near
        elif t_min < t_far < t_max:
            t = t_far
        else:
            return None

        p = ray.at(t)
        n = [0.0, 0.0, 0.0]
        for a in range(3):
            if abs(p[a] - self.minimum[a]) < FACE_EPSILON:
                n[a] = -1.0
            elif abs(p[a] - self.maximum[a]) < FACE_EPSILON:
                n[a] = 1.0
        normal = Vector3(n[0], n[1], n[2]).normalize()
        if self.hollow:
            normal = -normal
        return HitRecord(t, p, normal, self.material)

    def bounding_box(self) -> AABB:
        return self._box


def rotation_matrix(angles: Vector3) -> Tuple[Vector3, Vector3, Vector3]:
    """
    Rows of the rotation for Euler angles in radians.

    ``angles.x`` pitches about x, ``angles.y`` yaws about y and
    ``angles.z`` rolls about z; applied roll first, then pitch, then yaw.
    """
    pitch, yaw, roll = angles.x, angles.y, angles.z

    cx, sx = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cz, sz = math.cos(roll), math.sin(roll)

    rx = ((1.0, 0.0, 0.0), (0.0, cx, -sx), (0.0, sx, cx))
    ry = ((cy, 0.0, sy), (0.0, 1.0, 0.0), (-sy, 0.0, cy))
    rz = ((cz, -sz, 0.0), (sz, cz, 0.0), (0.0, 0.0, 1.0))

    m = _matmul(ry, _matmul(rx, rz))
    return tuple(Vector3(*row) for row in m)


def _matmul(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]):
    return tuple(
        tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3))
        for i in range(3)
    )


def rotate(rows: Tuple[Vector3, Vector3, Vector3], v: Vector3) -> Vector3:
    return Vector3(rows[0].dot(v), rows[1].dot(v), rows[2].dot(v))


def transpose(rows: Tuple[Vector3, Vector3, Vector3]) -> Tuple[Vector3, Vector3, Vector3]:
    return (
        Vector3(rows[0].x, rows[1].x, rows[2].x),
        Vector3(rows[0].y, rows[1].y, rows[2].y),
        Vector3(rows[0].z, rows[1].z, rows[2].z),
    )


class OrientedCube(Hittable):
    """An AxisBox rotated about its own center; rotation is in quarter turns."""
    __slots__ = ("axis_box", "center", "rotation", "_inverse", "_box")

    def __init__(self, center: Vector3, size: Vector3, rotation: Vector3, material):
        self.axis_box = AxisBox(center, size, material)
        self.center = center
        self.rotation = rotation_matrix(rotation * (math.pi / 2.0))
        self._inverse = transpose(self.rotation)
        self._box = self._rotated_bounds()

    @property
    def material(self):
        return self.axis_box.material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        # Move the ray into the box's unrotated frame; rotation keeps
        # lengths, so t is shared between both frames.
        local_origin = rotate(self._inverse, ray.origin - self.center) + self.center
        local_dir = rotate(self._inverse, ray.direction)
        rec = self.axis_box.hit(Ray(local_origin, local_dir), t_min, t_max)
        if rec is None:
            return None
        return HitRecord(rec.t, ray.at(rec.t), rotate(self.rotation, rec.normal), rec.material)

    def bounding_box(self) -> AABB:
        return self._box

    def _rotated_bounds(self) -> AABB:
        lo, hi = self.axis_box.minimum, self.axis_box.maximum
        corners = [
            Vector3(x, y, z)
            for x in (lo.x, hi.x)
            for y in (lo.y, hi.y)
            for z in (lo.z, hi.z)
        ]
        rotated = [rotate(self.rotation, c - self.center) + self.center for c in corners]
        minimum = rotated[0]
        maximum = rotated[0]
        for c in rotated[1:]:
            minimum = minimum.min_by_component(c)
            maximum = maximum.max_by_component(c)
        return AABB(minimum, maximum)
