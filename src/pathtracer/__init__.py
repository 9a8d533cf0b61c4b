"""CPU Monte Carlo path tracer."""
from pathtracer.camera.camera import Camera
from pathtracer.config import QUALITY_PRESETS, RenderSettings
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.world import World
from pathtracer.renderer.environment import EnvironmentMap
from pathtracer.renderer.raytracer import Renderer, accumulate

__version__ = "0.1.0"

__all__ = [
    "Camera",
    "Color",
    "EnvironmentMap",
    "QUALITY_PRESETS",
    "RenderSettings",
    "Renderer",
    "Vector3",
    "World",
    "accumulate",
]
