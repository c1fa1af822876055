"""Core rendering module.

Components:
    vector: Vector, color and sampling utilities on NumPy arrays
    ray: Ray and hit record structures
    config: Integrator configuration (shadow epsilon, zero light policy)
    errors: Exception hierarchy
    render: Image rendering driver (per-row generators, thread pool)
    progressive: Progressive pass accumulation
"""

from .config import DEFAULT_SHADOW_EPSILON, IntegratorConfig, ZeroLightPolicy
from .errors import NoLightsError, PathTraceError, SceneError, SceneNotCompiledError
from .ray import Hit, Ray
from .vector import (
    Color,
    Vec3,
    as_vec3,
    black,
    build_onb_from_normal,
    color,
    cosine_direction,
    cross,
    dot,
    length,
    local_to_world,
    normalize,
    readonly_vec3,
    reflect,
    sample_cone,
    sample_cosine_hemisphere,
    schlick_fresnel,
    vec3,
)

# Note: render and progressive are NOT imported here to avoid circular imports.
# Import directly from pathtrace.core.render or pathtrace.core.progressive.

__all__ = [
    "Ray",
    "Hit",
    "IntegratorConfig",
    "ZeroLightPolicy",
    "DEFAULT_SHADOW_EPSILON",
    "PathTraceError",
    "SceneError",
    "SceneNotCompiledError",
    "NoLightsError",
    "Vec3",
    "Color",
    "vec3",
    "as_vec3",
    "color",
    "black",
    "dot",
    "cross",
    "length",
    "normalize",
    "readonly_vec3",
    "reflect",
    "schlick_fresnel",
    "build_onb_from_normal",
    "local_to_world",
    "cosine_direction",
    "sample_cosine_hemisphere",
    "sample_cone",
]
