"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere shape whose intersection uses the robust
quadratic formula from Ray Tracing Gems to avoid floating-point artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability.

Example:
    >>> from pathtrace.core.ray import Ray
    >>> from pathtrace.core.vector import vec3
    >>> from pathtrace.geometry.sphere import Sphere
    >>> sphere = Sphere(center=(0, 0, -1), radius=0.5, color=(0.8, 0.3, 0.3))
    >>> hit = sphere.intersect(Ray(vec3(0, 0, 0), vec3(0, 0, -1)))
    >>> hit.t
    0.5
"""

import math
from dataclasses import dataclass, field

import numpy as np

from pathtrace.core.ray import Hit, Ray
from pathtrace.core.vector import Color, Vec3, dot, readonly_vec3, vec3
from pathtrace.geometry.aabb import AABB
from pathtrace.geometry.shape import T_MIN, Shape
from pathtrace.materials.material import Material


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve quadratic equation using robust formula from Ray Tracing Gems.

    Solves a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-10:
        # Tangent ray: fall back to the standard formula
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(frozen=True, eq=False)
class Sphere(Shape):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        color: Surface color, or emitted radiance when used as a light.
        material: Surface material.
    """

    center: Vec3
    radius: float
    color: Color = field(default_factory=lambda: vec3(1.0, 1.0, 1.0))
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", readonly_vec3(self.center))
        object.__setattr__(self, "color", readonly_vec3(self.color))

    def intersect(self, ray: Ray, t_max: float = math.inf) -> Hit | None:
        """Test for ray-sphere intersection.

        The intersection is found by solving:
            |origin + t * direction - center|^2 = radius^2

        which expands to a*t^2 + 2*h*t + c = 0 with
            a = dot(direction, direction)
            h = dot(direction, oc)
            c = dot(oc, oc) - radius^2
            oc = origin - center

        Args:
            ray: The query ray.
            t_max: Only hits closer than this are reported.

        Returns:
            The nearest hit in (T_MIN, t_max), or None.
        """
        oc = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        h = dot(ray.direction, oc)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

        # First root in range, otherwise the far root (origin inside sphere)
        t = t0
        if not T_MIN < t < t_max:
            t = t1
            if not T_MIN < t < t_max:
                return None

        point = ray.at(t)
        outward_normal = (point - self.center) / self.radius
        front_face = dot(ray.direction, outward_normal) <= 0.0
        normal = outward_normal if front_face else -outward_normal
        return Hit(shape=self, t=t, ray=Ray(point, normal), front_face=front_face)

    def bounding_box(self) -> AABB:
        r = vec3(self.radius, self.radius, self.radius)
        return AABB(self.center - r, self.center + r)

    def color_at(self, point: Vec3) -> Color:
        return self.color

    def material_at(self, point: Vec3) -> Material:
        return self.material

    def random_point(self, rng: np.random.Generator) -> Vec3:
        """Uniform point on the sphere surface (Archimedes' projection)."""
        z = 1.0 - 2.0 * rng.random()
        phi = 2.0 * math.pi * rng.random()
        r = math.sqrt(max(0.0, 1.0 - z * z))
        return self.center + self.radius * vec3(r * math.cos(phi), r * math.sin(phi), z)

    def area(self) -> float:
        return 4.0 * math.pi * self.radius * self.radius
