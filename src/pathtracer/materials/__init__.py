from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.glossy import Glossy
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import AIR_INDEX, Material, Scatter, is_emissive
from pathtracer.materials.metal import Metal

__all__ = [
    "AIR_INDEX",
    "Dielectric",
    "Glossy",
    "Lambertian",
    "Material",
    "Metal",
    "Scatter",
    "is_emissive",
]
