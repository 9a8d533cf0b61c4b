# renderer/environment.py
import logging
import math
import os

import numpy as np
from PIL import Image

from pathtracer.core.vector import Vector3

logger = logging.getLogger(__name__)


def srgb_to_linear(values: np.ndarray) -> np.ndarray:
    """Decodes sRGB-encoded values in [0, 1] to linear radiance."""
    return np.where(values <= 0.04045, values / 12.92, ((values + 0.055) / 1.055) ** 2.4)


def dir_to_uv(direction: Vector3):
    """
    Convert a normalized 3D direction to equirectangular UV coordinates.

    ``u`` follows the azimuth around the y axis, ``v`` runs from 0 at the
    zenith to 1 at the nadir. Both are in [0, 1].
    """
    # Compute phi in [0, 2*pi)
    phi = math.atan2(-direction.z, direction.x)
    if phi < 0.0:
        phi += 2.0 * math.pi
    # Compute theta in [0, pi]
    theta = math.acos(max(-1.0, min(1.0, direction.y)))
    return phi / (2.0 * math.pi), theta / math.pi


class EnvironmentMap:
    """
    Equirectangular radiance image surrounding the scene.

    ``data`` is a ``(height, width, 3)`` float array of linear radiance, row
    0 at the top of the sky.
    """

    def __init__(self, data: np.ndarray):
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Environment data must have shape (height, width, 3), got {data.shape}")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Environment data is empty: {data.shape}")
        self.data = data
        self.height, self.width = data.shape[:2]

    @classmethod
    def from_array(cls, array) -> "EnvironmentMap":
        """Wraps a linear float image, copying it into a float64 array."""
        return cls(np.array(array, dtype=np.float64))

    @classmethod
    def from_image(cls, image: Image.Image) -> "EnvironmentMap":
        """
        Builds a map from a PIL image.

        8-bit images are treated as sRGB encoded and linearised; single
        channel float images (mode ``F``) are taken as linear grey.
        """
        if image.mode == "F":
            channel = np.asarray(image, dtype=np.float64)
            return cls(np.repeat(channel[:, :, np.newaxis], 3, axis=2))

        # Convert to RGB if necessary
        if image.mode != "RGB":
            image = image.convert("RGB")
        data = np.asarray(image, dtype=np.float64) / 255.0
        return cls(srgb_to_linear(data))

    def pixel(self, u: float, v: float) -> Vector3:
        """Nearest texel at ``(u, v)``; ``u`` wraps, ``v`` is clamped."""
        u = u % 1.0
        v = min(max(v, 0.0), 1.0)

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))

    def sample(self, direction: Vector3) -> Vector3:
        """Radiance arriving from ``direction``."""
        u, v = dir_to_uv(direction)
        return self.pixel(u, v)

    def __repr__(self) -> str:
        return f"EnvironmentMap(width={self.width}, height={self.height})"


def load_environment(image_path: str) -> EnvironmentMap:
    """
    Load an image file as an environment map.

    Raises:
        FileNotFoundError: If the image file doesn't exist
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Environment image not found: {image_path}")

    logger.info("Loading environment map %s", image_path)
    with Image.open(image_path) as img:
        env = EnvironmentMap.from_image(img)
    logger.info("Environment map is %dx%d", env.width, env.height)
    return env


def generate_gradient_env_map(width=512, height=256):
    """
    Generate a gradient environment map.
    Interpolates vertically between a zenith color and a horizon color.

    Args:
        width (int): The width of the generated environment map.
        height (int): The height of the generated environment map.

    Returns:
        EnvironmentMap: backed by a (height x width x 3) float array with
        values in [0,1].
    """
    if width < 1 or height < 2:
        raise ValueError(f"Gradient map needs width >= 1 and height >= 2, got {width}x{height}")

    # Define the zenith (top) and horizon (bottom) colors.
    zenith_color = np.array([0.2, 0.4, 0.8])   # Deep blue sky
    horizon_color = np.array([1.0, 0.8, 0.6])    # Warm light near horizon

    t = np.linspace(0.0, 1.0, height)[:, np.newaxis]  # 0 at the top, 1 at the bottom
    rows = (1.0 - t) * zenith_color + t * horizon_color
    return EnvironmentMap(np.repeat(rows[:, np.newaxis, :], width, axis=1))
