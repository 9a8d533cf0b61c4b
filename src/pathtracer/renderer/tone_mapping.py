# renderer/tone_mapping.py
import numpy as np

# Narkowicz's fit of the ACES filmic curve.
ACES_A = 2.51
ACES_B = 0.03
ACES_C = 2.43
ACES_D = 0.59
ACES_E = 0.14


def to_uint8(mapped: np.ndarray, gamma: float) -> np.ndarray:
    mapped = np.clip(mapped, 0.0, None) ** (1.0 / gamma)
    return (mapped * 255).clip(0, 255).astype("uint8")


def aces_tone_mapping(accumulated, gamma=2.2):
    """
    Apply the ACES filmic curve to a linear radiance image and encode it
    to 8 bits. Non-finite values become black.
    """
    x = np.nan_to_num(np.asarray(accumulated, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    x = np.clip(x, 0.0, None)
    mapped = (x * (ACES_A * x + ACES_B)) / (x * (ACES_C * x + ACES_D) + ACES_E)
    return to_uint8(np.clip(mapped, 0.0, 1.0), gamma)


def reinhard_tone_mapping(accumulated, exposure=1.0, white_point=1.0, gamma=2.2):
    """
    Apply Reinhard tone mapping to a linear radiance image.
    """
    scaled = np.clip(np.nan_to_num(np.asarray(accumulated, dtype=np.float64) * exposure), 0.0, None)
    mapped = scaled / (1.0 + scaled / white_point)
    return to_uint8(mapped, gamma)


def auto_exposure_tone_mapping(accumulated, gamma=2.2, target_midgray=0.18):
    """
    Compute an exposure value based on the average scene luminance and then
    apply Reinhard tone mapping. Works on ``(..., 3)`` arrays.
    """
    accumulated = np.asarray(accumulated, dtype=np.float64)
    # Compute per-pixel luminance using standard coefficients.
    luminance = 0.2126 * accumulated[..., 0] + 0.7152 * accumulated[..., 1] + 0.0722 * accumulated[..., 2]
    avg_lum = luminance.mean() + 1e-5  # avoid division by zero
    exposure = target_midgray / avg_lum
    return reinhard_tone_mapping(accumulated, exposure=exposure, white_point=1.0, gamma=gamma)


def to_image_array(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Reshapes a flat ``(width * height, 3)`` render buffer to ``(height, width, 3)``, top row first."""
    return np.asarray(buffer).reshape(height, width, 3)
