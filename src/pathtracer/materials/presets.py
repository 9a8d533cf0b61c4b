# materials/presets.py
from pathtracer.core.vector import Vector3
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.glossy import Glossy
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal

# Absorption of clear glass: barely tinted.
CLEAR = Vector3(0.1, 0.1, 0.1)


class MetalPresets:
    """Predefined metal materials with realistic properties."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(1.0, 0.78, 0.34), roughness=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Vector3(0.95, 0.93, 0.88), roughness=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Vector3(0.95, 0.64, 0.54), roughness=0.1)

    @staticmethod
    def steel() -> Metal:
        return Metal(Vector3(0.7, 0.6, 0.5), roughness=0.01)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Vector3(0.8, 0.8, 0.8), roughness=0.3)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass(tint: Vector3 = CLEAR) -> Dielectric:
        return Dielectric(tint, 1.52)  # Common glass

    @staticmethod
    def frosted_glass(tint: Vector3 = CLEAR) -> Dielectric:
        return Dielectric(tint, 1.52, roughness=0.15)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(Vector3(0.3, 0.05, 0.02), 1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(CLEAR, 2.42)

    @staticmethod
    def ice() -> Dielectric:
        return Dielectric(Vector3(0.15, 0.05, 0.02), 1.31)


class GlossyPresets:
    """Coated diffuse surfaces."""

    @staticmethod
    def varnished_wood() -> Glossy:
        return Glossy(Vector3(0.2, 0.1, 0.05), reflectance=0.28, roughness=0.2)

    @staticmethod
    def plastic(color: Vector3) -> Glossy:
        return Glossy(color, reflectance=0.5, roughness=0.05)


class LightPresets:
    """
    Predefined light sources. Lights are Lambertian surfaces whose albedo
    exceeds 1 in at least one channel.
    """

    @staticmethod
    def warm_light(intensity: float = 6.0) -> Lambertian:
        return Lambertian(Vector3(1.0, 0.95, 0.9) * intensity)

    @staticmethod
    def cool_light(intensity: float = 6.0) -> Lambertian:
        return Lambertian(Vector3(0.9, 0.95, 1.0) * intensity)

    @staticmethod
    def daylight(intensity: float = 6.0) -> Lambertian:
        return Lambertian(Vector3(1.0, 1.0, 1.0) * intensity)


class ColorPresets:
    """Common color presets for materials."""

    # Warm colors
    RED = Vector3(0.9, 0.1, 0.1)
    ORANGE = Vector3(0.9, 0.6, 0.1)

    # Cool colors
    BLUE = Vector3(0.1, 0.1, 0.9)
    GREEN = Vector3(0.1, 0.9, 0.1)

    # Neutral colors
    WHITE = Vector3(0.9, 0.9, 0.9)
    GRAY = Vector3(0.5, 0.5, 0.5)
    BLACK = Vector3(0.01, 0.01, 0.01)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)
