"""Bounce decision: choose the outgoing ray at a surface hit.

The integrator draws three independent uniforms per bounce and hands them to
a bounce function without interpreting them. The default implementation uses
them as follows:

    p: lobe selection. The bounce is specular when p is below the specular
       probability (Fresnel reflectance from Schlick's approximation, or the
       material's fixed reflectivity).
    u, v: direction sampling. A specular bounce spreads the mirror direction
       over a cone of half angle ``material.gloss``; a diffuse bounce samples
       a cosine-weighted hemisphere around the facing normal.

Any callable with the same signature can be passed to
``SceneBuilder.compile(bounce=...)``.
"""

from collections.abc import Callable

from pathtrace.core.ray import Hit, Ray
from pathtrace.core.vector import (
    dot,
    reflect,
    sample_cone,
    sample_cosine_hemisphere,
    schlick_fresnel,
)
from pathtrace.materials.material import Material

BounceFunction = Callable[[Ray, Hit, Material, float, float, float], tuple[Ray, bool]]


def specular_probability(incoming: Ray, hit: Hit, material: Material) -> float:
    """Probability that a bounce off this surface is specular.

    Args:
        incoming: The ray that produced the hit.
        hit: The hit record (normal faces the incoming ray).
        material: The material at the hit point.

    Returns:
        A probability in [0, 1].
    """
    if material.reflectivity is not None:
        return material.reflectivity
    # No interface, nothing to reflect off
    if material.index == 1.0:
        return 0.0
    n1, n2 = 1.0, material.index
    if not hit.front_face:
        n1, n2 = n2, n1
    cosine = min(1.0, max(0.0, -dot(incoming.direction, hit.normal)))
    return schlick_fresnel(cosine, n1, n2)


def bounce(
    incoming: Ray,
    hit: Hit,
    material: Material,
    p: float,
    u: float,
    v: float,
) -> tuple[Ray, bool]:
    """Decide the outgoing ray for a bounce at a hit.

    Args:
        incoming: The ray that produced the hit.
        hit: The hit record; ``hit.ray`` is the surface ray.
        material: The material at the hit point.
        p: Uniform in [0, 1) for lobe selection.
        u: Uniform in [0, 1) for direction sampling.
        v: Uniform in [0, 1) for direction sampling.

    Returns:
        A tuple of (outgoing_ray, reflected) where reflected is True for a
        specular continuation and False for a diffuse one.
    """
    normal = hit.normal
    if p < specular_probability(incoming, hit, material):
        mirror = reflect(incoming.direction, normal)
        direction = sample_cone(mirror, material.gloss, u, v)
        # Keep glossy lobes above the surface
        if dot(direction, normal) <= 0.0:
            direction = mirror
        return Ray(hit.point, direction), True
    return Ray(hit.point, sample_cosine_hemisphere(normal, u, v)), False
