# geometry/mesh.py
import logging
from typing import List, Optional, Sequence

import numpy as np

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.box import rotate, rotation_matrix
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import HitRecord, Hittable
from pathtracer.geometry.triangle import Triangle

logger = logging.getLogger(__name__)


class Mesh(Hittable):
    """
    Represents a 3D mesh composed of triangles.

    The triangles live in a private BVH, so the mesh enters the scene BVH as
    a single primitive.
    """
    def __init__(self, triangles: List[Triangle], material, cull_backface: bool = False):
        if not triangles:
            raise ValueError("A mesh needs at least one triangle")
        self.triangles = triangles
        self.material = material
        self.cull_backface = cull_backface
        self.bvh = BVHNode(list(triangles))

    @classmethod
    def from_arrays(cls,
                    positions: Sequence[Sequence[float]],
                    indices: Sequence[int],
                    material,
                    normals: Optional[Sequence[Sequence[float]]] = None,
                    translation: Optional[Vector3] = None,
                    scale: Optional[Vector3] = None,
                    rotation: Optional[Vector3] = None,
                    cull_backface: bool = False) -> "Mesh":
        """
        Build a mesh from decoded vertex data.

        ``positions`` is (N, 3), ``indices`` holds three vertex indices per
        face (flat or (M, 3)), ``normals`` is an optional per-vertex (N, 3)
        array. Vertices are scaled, rotated (Euler radians) and translated;
        normals are rotated only.
        """
        translation = translation if translation is not None else Vector3(0.0, 0.0, 0.0)
        scale = scale if scale is not None else Vector3(1.0, 1.0, 1.0)
        rotation = rotation if rotation is not None else Vector3(0.0, 0.0, 0.0)

        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
        vertex_normals = None if normals is None else np.asarray(normals, dtype=np.float64).reshape(-1, 3)
        rot = rotation_matrix(rotation)

        vertices = [rotate(rot, Vector3.from_tuple(p) * scale) + translation for p in positions]
        if vertex_normals is not None:
            vertex_normals = [rotate(rot, Vector3.from_tuple(n)).normalize() for n in vertex_normals]

        triangles = []
        for a, b, c in faces:
            if vertex_normals is not None:
                n0, n1, n2 = vertex_normals[a], vertex_normals[b], vertex_normals[c]
            else:
                n0 = n1 = n2 = None
            triangles.append(Triangle(vertices[a], vertices[b], vertices[c], material,
                                      n0, n1, n2, two_sided=not cull_backface))

        logger.info("Loaded mesh with %d vertices and %d triangles", len(vertices), len(triangles))
        return cls(triangles, material, cull_backface)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.bvh.hit(ray, t_min, t_max)

    def bounding_box(self) -> AABB:
        return self.bvh.bounding_box()
