# renderer/integrator.py
import math
import random
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.materials.material import is_emissive
from pathtracer.renderer.environment import EnvironmentMap
from pathtracer.renderer.sampler import SampleBlock

# Ray interval. The lower bound keeps a scattered ray from hitting the
# surface it leaves.
T_MIN = 1.5e-4
T_MAX = 1e5

# Returned when a path runs out of bounces without reaching a light.
EXHAUSTED_COLOR = Vector3(0.001, 0.001, 0.001)

# Bounces that are always traced before Russian roulette may end a path.
RR_MIN_BOUNCES = 3

SKY_HORIZON = Vector3(1.0, 1.0, 1.0)
SKY_ZENITH = Vector3(0.5, 0.7, 1.0)

# Direction toward the fixed light used by preview shading.
PREVIEW_LIGHT = Vector3(0.4, 1.0, 0.3).normalize()


def sky_color(direction: Vector3, environment: Optional[EnvironmentMap] = None) -> Color:
    """
    Radiance seen along ``direction`` when nothing is hit.

    Uses the environment map when there is one, else a white-to-blue
    vertical gradient.
    """
    if environment is not None:
        return environment.sample(direction)
    t = 0.5 * (direction.y + 1.0)
    return SKY_HORIZON * (1.0 - t) + SKY_ZENITH * t


def trace_path(ray: Ray, world: Hittable, max_bounce: int, sampler: SampleBlock, rng: random.Random,
               environment: Optional[EnvironmentMap] = None, light_clamp: float = math.inf,
               russian_roulette: bool = True) -> Color:
    """
    Estimates the radiance arriving along ``ray``.

    The path is followed iteratively for at most ``max_bounce`` surface
    interactions. Hitting an emissive surface or escaping to the sky ends
    it. Light and sky radiance are clamped per channel to ``light_clamp``.
    Non-finite channels in the result are replaced by 0.
    """
    color_total = Vector3.one()
    current_ray = ray

    for bounce in range(max_bounce):
        rec = world.hit(current_ray, T_MIN, T_MAX)
        if rec is None:
            sky = sky_color(current_ray.direction, environment).clamped(0.0, light_clamp)
            return (color_total * sky).finite_or_zero()

        r1, r2 = sampler.next()
        attenuation, scattered = rec.material.scatter(current_ray, rec, r1, r2, rng)
        if is_emissive(attenuation):
            return (color_total * attenuation.clamped(0.0, light_clamp)).finite_or_zero()

        color_total = color_total * attenuation

        if russian_roulette and bounce + 1 >= RR_MIN_BOUNCES:
            p = min(1.0, color_total.max_component())
            if rng.random() >= p:
                return Vector3.zero()
            color_total = color_total / p

        current_ray = scattered

    return EXHAUSTED_COLOR


def preview_color(ray: Ray, world: Hittable, environment: Optional[EnvironmentMap] = None) -> Color:
    """
    Cheap single-hit shading for interactive feedback: the material's
    preview color scaled by the facing ratio toward a fixed light and by
    the inverse hit distance.
    """
    rec = world.hit(ray, T_MIN, T_MAX)
    if rec is None:
        return sky_color(ray.direction, environment)
    intensity = max(0.0, rec.normal.dot(PREVIEW_LIGHT)) / rec.t
    return (rec.material.preview_color() * intensity).finite_or_zero()
