# config.py
import math
from dataclasses import dataclass, replace
from typing import Optional

# Contiguous pixel ranges handed to the worker pool per pass.
DEFAULT_CHUNK_COUNT = 64

# Quality settings, from fastest to best looking.
QUALITY_PRESETS = {
    "interactive": {"samples": 1, "bounces": 2, "scale": 0.5},
    "balanced": {"samples": 4, "bounces": 4, "scale": 0.67},
    "high_quality": {"samples": 8, "bounces": 6, "scale": 1.0},
}


def validate_render_params(width: int, height: int, sample_rate: int, max_bounce: int,
                           chunk_count: int, max_workers: Optional[int] = None,
                           light_clamp: float = math.inf):
    """Raises ValueError for the first parameter a renderer cannot work with."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    if max_bounce < 0:
        raise ValueError(f"max_bounce must not be negative, got {max_bounce}")
    if chunk_count <= 0:
        raise ValueError(f"chunk_count must be positive, got {chunk_count}")
    if max_workers is not None and max_workers <= 0:
        raise ValueError(f"max_workers must be positive, got {max_workers}")
    if not light_clamp > 0.0:
        raise ValueError(f"light_clamp must be positive, got {light_clamp}")


@dataclass
class RenderSettings:
    """Everything a Renderer needs besides the scene and camera."""
    width: int
    height: int
    sample_rate: int = 1
    max_bounce: int = 4
    light_clamp: float = math.inf
    chunk_count: int = DEFAULT_CHUNK_COUNT
    max_workers: Optional[int] = None
    seed: Optional[int] = None
    russian_roulette: bool = True

    def validate(self) -> "RenderSettings":
        validate_render_params(self.width, self.height, self.sample_rate, self.max_bounce,
                               self.chunk_count, self.max_workers, self.light_clamp)
        return self

    @classmethod
    def from_preset(cls, name: str, width: int, height: int, **overrides) -> "RenderSettings":
        """
        Settings for one of the QUALITY_PRESETS. ``width`` and ``height``
        are the window size; the render size is scaled down by the preset.
        """
        try:
            quality = QUALITY_PRESETS[name]
        except KeyError:
            raise ValueError(f"Unknown quality preset {name!r}, expected one of {sorted(QUALITY_PRESETS)}") from None

        settings = cls(
            width=max(1, int(width * quality["scale"])),
            height=max(1, int(height * quality["scale"])),
            sample_rate=quality["samples"],
            max_bounce=quality["bounces"],
        )
        return replace(settings, **overrides).validate()
