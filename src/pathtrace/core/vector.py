"""Vector and color utilities for CPU path tracing.

Points, directions and colors are all float64 NumPy arrays of shape (3,).
Colors support the usual radiance arithmetic directly through NumPy: add,
scale by a float, component-wise multiply and divide by a float.

Sampling helpers never draw random numbers themselves. They take the uniform
variates as arguments so callers control exactly which generator produced
them, which keeps concurrent sampling independent and reproducible.

Example:
    >>> from pathtrace.core.vector import vec3, normalize, dot
    >>> n = normalize(vec3(0.0, 2.0, 0.0))
    >>> dot(n, vec3(0.0, 1.0, 0.0))
    1.0
"""

import math

import numpy as np
import numpy.typing as npt

# Type aliases for 3D vectors and RGB colors
Vec3 = npt.NDArray[np.float64]
Color = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value) -> Vec3:
    """Convert a tuple, list or array to a float64 3-vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.array(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {result.shape}")
    return result


def readonly_vec3(value) -> Vec3:
    """Like as_vec3(), but the returned copy cannot be written to."""
    result = as_vec3(value)
    result.flags.writeable = False
    return result


def color(r: float, g: float, b: float) -> Color:
    """Create an RGB color."""
    return np.array((r, g, b), dtype=np.float64)


def black() -> Color:
    """Return a fresh zero color."""
    return np.zeros(3, dtype=np.float64)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Returns:
        A unit vector in the same direction as v. A zero-length input is
        returned unchanged (as a zero vector).
    """
    n = length(v)
    if n == 0.0:
        return np.array(v, dtype=np.float64)
    return v / n


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a unit normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def schlick_fresnel(cosine: float, n1: float, n2: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Total internal reflection (going from the denser medium past the
    critical angle) returns 1.

    Args:
        cosine: Cosine of the angle between the incident direction and the
            facing normal (non-negative).
        n1: Refractive index of the medium the ray travels in.
        n2: Refractive index of the medium on the other side.

    Returns:
        The approximate reflectance in [0, 1].
    """
    r0 = ((n1 - n2) / (n1 + n2)) ** 2
    x = 1.0 - cosine
    if n1 > n2:
        ratio = n1 / n2
        sin2_t = ratio * ratio * (1.0 - cosine * cosine)
        if sin2_t > 1.0:
            return 1.0
        x = 1.0 - math.sqrt(1.0 - sin2_t)
    return r0 + (1.0 - r0) * x**5


# =============================================================================
# Sampling Utilities for Monte Carlo
# =============================================================================


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis from a normal vector.

    Creates a local coordinate frame where the normal is the z-axis.

    Args:
        normal: The surface normal (should be normalized).

    Returns:
        A tuple (tangent, bitangent, normal) forming an orthonormal basis.
    """
    # Choose a vector not parallel to normal
    a = vec3(1.0, 0.0, 0.0)
    if abs(normal[0]) > 0.9:
        a = vec3(0.0, 1.0, 0.0)
    tangent = normalize(cross(a, normal))
    bitangent = cross(normal, tangent)
    return tangent, bitangent, normal


def local_to_world(local_dir: Vec3, tangent: Vec3, bitangent: Vec3, normal: Vec3) -> Vec3:
    """Transform a direction from local (z-up) to world coordinates."""
    return local_dir[0] * tangent + local_dir[1] * bitangent + local_dir[2] * normal


def cosine_direction(u: float, v: float) -> Vec3:
    """Map two uniforms to a cosine-weighted direction in the local frame.

    The distribution has PDF = cos(theta) / pi around +z.

    Args:
        u: Uniform in [0, 1), azimuth.
        v: Uniform in [0, 1), radial.

    Returns:
        A unit direction in the local coordinate frame (z-up).
    """
    phi = 2.0 * math.pi * u
    sqrt_v = math.sqrt(v)
    return vec3(math.cos(phi) * sqrt_v, math.sin(phi) * sqrt_v, math.sqrt(1.0 - v))


def sample_cosine_hemisphere(normal: Vec3, u: float, v: float) -> Vec3:
    """Cosine-weighted hemisphere direction around a normal.

    Args:
        normal: The unit normal defining the hemisphere orientation.
        u: Uniform in [0, 1).
        v: Uniform in [0, 1).

    Returns:
        The sampled unit direction in world space.
    """
    tangent, bitangent, n = build_onb_from_normal(normal)
    return normalize(local_to_world(cosine_direction(u, v), tangent, bitangent, n))


def sample_cone(axis: Vec3, half_angle: float, u: float, v: float) -> Vec3:
    """Uniformly sample a direction inside a cone around an axis.

    A zero half angle returns the axis itself.

    Args:
        axis: The unit cone axis.
        half_angle: The cone half angle in radians.
        u: Uniform in [0, 1), azimuth.
        v: Uniform in [0, 1), polar.

    Returns:
        A unit direction within half_angle of axis.
    """
    if half_angle <= 0.0:
        return axis
    cos_max = math.cos(half_angle)
    cos_theta = 1.0 - v * (1.0 - cos_max)
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    phi = 2.0 * math.pi * u
    local = vec3(math.cos(phi) * sin_theta, math.sin(phi) * sin_theta, cos_theta)
    tangent, bitangent, n = build_onb_from_normal(axis)
    return normalize(local_to_world(local, tangent, bitangent, n))
