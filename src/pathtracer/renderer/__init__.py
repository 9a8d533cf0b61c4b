from pathtracer.renderer.environment import EnvironmentMap, generate_gradient_env_map, load_environment
from pathtracer.renderer.integrator import preview_color, sky_color, trace_path
from pathtracer.renderer.raytracer import Renderer, accumulate
from pathtracer.renderer.tone_mapping import aces_tone_mapping, reinhard_tone_mapping

__all__ = [
    "EnvironmentMap",
    "Renderer",
    "aces_tone_mapping",
    "accumulate",
    "generate_gradient_env_map",
    "load_environment",
    "preview_color",
    "reinhard_tone_mapping",
    "sky_color",
    "trace_path",
]
