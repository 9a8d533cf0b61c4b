# core/utils.py
import math
import random

from pathtracer.core.vector import Vector3


def random_in_unit_sphere(rng: random.Random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p


def random_in_unit_disk(rng: random.Random) -> Vector3:
    """Random point in the unit disk on the z=0 plane, used for the lens."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.dot(p) < 1.0:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


class OrthonormalBasis:
    """Right-handed frame (u, v, w) built around a single direction w."""
    __slots__ = ("u", "v", "w")

    def __init__(self, w: Vector3):
        self.w = w.normalize()
        a = Vector3(0.0, 1.0, 0.0) if abs(self.w.x) > 0.9 else Vector3(1.0, 0.0, 0.0)
        self.v = self.w.cross(a).normalize()
        self.u = self.w.cross(self.v)

    def local(self, a: Vector3) -> Vector3:
        return self.u * a.x + self.v * a.y + self.w * a.z


def cosine_direction(r1: float, r2: float) -> Vector3:
    """Cosine-weighted direction about +z from two uniform numbers."""
    z = math.sqrt(1.0 - r2)
    phi = 2.0 * math.pi * r1
    s = math.sqrt(r2)
    return Vector3(math.cos(phi) * s, math.sin(phi) * s, z)


def sample_cosine_hemisphere(normal: Vector3, r1: float, r2: float) -> Vector3:
    """
    Cosine-weighted sampling over the hemisphere oriented by 'normal'.

    With pdf = cos(theta)/pi the Lambertian BRDF (albedo/pi) times the cosine
    term cancels to a flat albedo, so callers never divide by the pdf.
    """
    return OrthonormalBasis(normal).local(cosine_direction(r1, r2))


def schlick(cosine: float, ratio: float) -> float:
    """Schlick approximation of Fresnel reflectance, clamped to [0, 1]."""
    r0 = (1.0 - ratio) / (1.0 + ratio)
    r0 = r0 * r0
    return min(max(r0 + (1.0 - r0) * math.pow(1.0 - cosine, 5), 0.0), 1.0)
