"""Materials module.

Components:
    material: Material parameters (refractive index, gloss, tint)
    bounce: Default bounce decision choosing specular or diffuse continuation
"""

from .bounce import BounceFunction, bounce, specular_probability
from .material import Material, diffuse_material, glossy_material, mirror_material

__all__ = [
    "Material",
    "diffuse_material",
    "glossy_material",
    "mirror_material",
    "BounceFunction",
    "bounce",
    "specular_probability",
]
