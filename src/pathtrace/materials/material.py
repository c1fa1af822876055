"""Surface material parameters.

A Material carries everything the bounce decision needs to choose between a
specular (reflected) continuation and a diffuse one, plus the tint used by
the integrator to color specular reflections:

    index: Refractive index of the surface. Drives the Schlick Fresnel
        probability of a specular bounce. An index of 1 never reflects.
    gloss: Half angle (radians) of the cone that specular reflections are
        spread over. 0 is a perfect mirror direction.
    tint: Blend in [0, 1] between a neutral reflection (0) and one fully
        colored by the surface color (1).
    reflectivity: Optional fixed probability of a specular bounce that
        replaces the Fresnel term. 1 gives a pure mirror.

Example:
    >>> from pathtrace.materials.material import glossy_material, mirror_material
    >>> plastic = glossy_material(index=1.5, gloss=0.1)
    >>> chrome = mirror_material(tint=0.8)
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Material:
    """Material properties consumed by the bounce decision.

    Attributes:
        index: Refractive index (>= 1).
        gloss: Specular cone half angle in radians, in [0, pi/2].
        tint: Specular tint blend in [0, 1].
        reflectivity: Fixed specular probability in [0, 1], or None to use
            the Fresnel reflectance derived from ``index``.
    """

    index: float = 1.0
    gloss: float = 0.0
    tint: float = 0.0
    reflectivity: float | None = None

    def __post_init__(self) -> None:
        if self.index < 1.0:
            raise ValueError(f"Refractive index {self.index} must be >= 1.0")
        if self.gloss < 0.0 or self.gloss > math.pi / 2.0:
            raise ValueError(f"Gloss {self.gloss} is outside [0, pi/2]")
        if self.tint < 0.0 or self.tint > 1.0:
            raise ValueError(f"Tint {self.tint} is outside [0, 1]")
        if self.reflectivity is not None and not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"Reflectivity {self.reflectivity} is outside [0, 1]")


def diffuse_material() -> Material:
    """A purely diffuse (Lambertian) surface."""
    return Material()


def glossy_material(index: float = 1.5, gloss: float = 0.0, tint: float = 0.0) -> Material:
    """A dielectric-coated surface with Fresnel-weighted specular reflection."""
    return Material(index=index, gloss=gloss, tint=tint)


def mirror_material(tint: float = 0.0, gloss: float = 0.0) -> Material:
    """A surface that always reflects specularly."""
    return Material(gloss=gloss, tint=tint, reflectivity=1.0)
