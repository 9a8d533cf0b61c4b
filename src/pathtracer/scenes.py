# scenes.py
import logging
import random
from typing import Optional

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.geometry.box import AxisBox, OrientedCube
from pathtracer.geometry.mesh import Mesh
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.glossy import Glossy
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import ColorPresets, DielectricPresets, GlossyPresets, LightPresets, MetalPresets

logger = logging.getLogger(__name__)

# Unit square pyramid: four base corners and an apex.
PYRAMID_POSITIONS = [
    (-0.5, 0.0, -0.5), (0.5, 0.0, -0.5), (0.5, 0.0, 0.5), (-0.5, 0.0, 0.5), (0.0, 1.0, 0.0),
]
PYRAMID_INDICES = [
    0, 2, 1, 0, 3, 2,  # base
    0, 1, 4, 1, 2, 4, 2, 3, 4, 3, 0, 4,  # sides
]


def random_scene(rng: Optional[random.Random] = None, lights: bool = True, diffuse: bool = True,
                 glossy: bool = True, metal: bool = True, glass: bool = True) -> World:
    """
    A grid of small random spheres around three large ones on a box floor.

    Each flag enables one kind of small sphere. The returned world has its
    BVH built.
    """
    rng = rng or random.Random()
    world = World()
    world.add(AxisBox(Vector3(-2.0, -0.5, -2.0), Vector3(50.0, 1.0, 50.0), Lambertian(Vector3(0.5, 0.5, 0.5))))

    if lights or diffuse or glossy or metal or glass:
        for a in range(-11, 11):
            for b in range(-10, 7):
                choose_mat = rng.random()
                center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
                if (center - Vector3(4.0, 0.2, 0.0)).length() <= 0.9:
                    continue

                albedo = Vector3(rng.random() * rng.random(),
                                 rng.random() * rng.random(),
                                 rng.random() * rng.random())
                if glossy and choose_mat < 0.3:
                    material = Glossy(albedo, reflectance=rng.random() * 0.5 + 1.0, roughness=rng.random() * 0.5)
                elif diffuse and choose_mat < 0.6:
                    material = Lambertian(albedo)
                elif metal and choose_mat < 0.8:
                    material = Metal(albedo, roughness=0.5 * rng.random())
                elif lights and choose_mat < 0.9:
                    material = Lambertian(Vector3(rng.random() * 6.0, rng.random() * 6.0, rng.random() * 6.0))
                elif glass:
                    material = Dielectric(Vector3(rng.random(), rng.random(), rng.random()), 1.52)
                else:
                    continue
                world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Vector3(4.0, 1.0, 0.0), 1.0, MetalPresets.steel()))
    world.add(Sphere(Vector3(0.0, 1.0, 0.0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-4.0, 1.0, 0.0), 1.0, GlossyPresets.varnished_wood()))

    logger.info("Random scene with %d objects", len(world))
    world.build_bvh()
    return world


def showcase_scene() -> World:
    """One object of every primitive kind under a warm area light."""
    world = World()

    # Ground plane
    world.add(Sphere(Vector3(0, -1000, 0), 1000, ColorPresets.matte(ColorPresets.GRAY)))

    # Glass sphere with a hollow inner shell
    world.add(Sphere(Vector3(-2, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-2, 1, 0), -0.9, DielectricPresets.glass()))

    world.add(Sphere(Vector3(2, 1, 0), 1.0, MetalPresets.gold()))
    world.add(AxisBox(Vector3(0, 0.5, -2), Vector3(1.0, 1.0, 1.0), ColorPresets.matte(ColorPresets.RED)))
    world.add(OrientedCube(Vector3(0, 0.5, 2), Vector3(0.8, 0.8, 0.8), Vector3(0.0, 0.5, 0.0),
                           GlossyPresets.plastic(ColorPresets.BLUE)))
    world.add(Mesh.from_arrays(PYRAMID_POSITIONS, PYRAMID_INDICES, ColorPresets.matte(ColorPresets.GREEN),
                               translation=Vector3(3.5, 0.0, 2.0)))

    # Main light source (warm light)
    world.add(Sphere(Vector3(0, 6, 0), 1.5, LightPresets.warm_light()))

    logger.info("Showcase scene with %d objects", len(world))
    world.build_bvh()
    return world


def default_camera(aspect_ratio: float, aperture: float = 0.1) -> Camera:
    """Camera framing both demo scenes from the front and slightly above."""
    eye = Vector3(13.0, 2.0, 3.0)
    lookat = Vector3(0.0, 0.0, 0.0)
    return Camera(eye, lookat, Vector3(0.0, 1.0, 0.0), 20.0, aspect_ratio,
                  aperture=aperture, focus_dist=10.0)
