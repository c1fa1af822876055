"""Quad (parallelogram) primitive.

A quad is defined by a corner point Q and two edge vectors u and v; its
vertices are Q, Q+u, Q+v and Q+u+v. Quads make good area lights because
uniform surface sampling is a direct mapping of two uniforms.

Example:
    >>> from pathtrace.geometry.quad import Quad
    >>> floor = Quad(corner=(0, 0, 0), edge_u=(1, 0, 0), edge_v=(0, 0, 1))
    >>> floor.area()
    1.0
"""

import math
from dataclasses import dataclass, field

import numpy as np

from pathtrace.core.ray import Hit, Ray
from pathtrace.core.vector import Color, Vec3, cross, dot, length, readonly_vec3, vec3
from pathtrace.geometry.aabb import AABB
from pathtrace.geometry.shape import T_MIN, Shape
from pathtrace.materials.material import Material

# Padding for the bounding box of planar shapes
BOX_PADDING = 1e-4


@dataclass(frozen=True, eq=False)
class Quad(Shape):
    """A quad (parallelogram) defined by a corner point and two edge vectors.

    Attributes:
        corner: The corner point Q of the quad.
        edge_u: Edge vector from Q to an adjacent corner.
        edge_v: Edge vector from Q to the other adjacent corner.
        color: Surface color, or emitted radiance when used as a light.
        material: Surface material.
    """

    corner: Vec3
    edge_u: Vec3
    edge_v: Vec3
    color: Color = field(default_factory=lambda: vec3(1.0, 1.0, 1.0))
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        object.__setattr__(self, "corner", readonly_vec3(self.corner))
        object.__setattr__(self, "edge_u", readonly_vec3(self.edge_u))
        object.__setattr__(self, "edge_v", readonly_vec3(self.edge_v))
        object.__setattr__(self, "color", readonly_vec3(self.color))

        # Plane frame used by intersect():
        #   normal = normalize(u x v), d = dot(normal, Q)
        #   w_u = (v x n) / dot(n, n), w_v = (n x u) / dot(n, n)
        # so that alpha = dot(w_u, P - Q), beta = dot(w_v, P - Q)
        n = cross(self.edge_u, self.edge_v)
        n_dot_n = dot(n, n)
        if n_dot_n <= 1e-20:
            raise ValueError("Quad edges are parallel or zero length")
        normal = readonly_vec3(n / math.sqrt(n_dot_n))
        object.__setattr__(self, "_normal", normal)
        object.__setattr__(self, "_d", dot(normal, self.corner))
        object.__setattr__(self, "_w_u", readonly_vec3(cross(self.edge_v, n) / n_dot_n))
        object.__setattr__(self, "_w_v", readonly_vec3(cross(n, self.edge_u) / n_dot_n))

    @property
    def normal(self) -> Vec3:
        """The unit normal, normalize(edge_u x edge_v)."""
        return self._normal

    def intersect(self, ray: Ray, t_max: float = math.inf) -> Hit | None:
        """Test for ray-quad intersection.

        1. Compute where the ray hits the plane containing the quad.
        2. Express the hit point in local coordinates (alpha, beta).
        3. Accept it if 0 <= alpha <= 1 and 0 <= beta <= 1.

        Args:
            ray: The query ray.
            t_max: Only hits closer than this are reported.

        Returns:
            The hit in (T_MIN, t_max), or None.
        """
        denom = dot(self._normal, ray.direction)
        # Parallel to the plane
        if abs(denom) < 1e-8:
            return None

        t = (self._d - dot(self._normal, ray.origin)) / denom
        if not T_MIN < t < t_max:
            return None

        point = ray.at(t)
        p_minus_q = point - self.corner
        alpha = dot(self._w_u, p_minus_q)
        beta = dot(self._w_v, p_minus_q)
        if not (0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0):
            return None

        front_face = denom < 0.0
        normal = self._normal if front_face else -self._normal
        return Hit(shape=self, t=t, ray=Ray(point, normal), front_face=front_face)

    def bounding_box(self) -> AABB:
        corners = np.array(
            [
                self.corner,
                self.corner + self.edge_u,
                self.corner + self.edge_v,
                self.corner + self.edge_u + self.edge_v,
            ]
        )
        pad = vec3(BOX_PADDING, BOX_PADDING, BOX_PADDING)
        return AABB(corners.min(axis=0) - pad, corners.max(axis=0) + pad)

    def color_at(self, point: Vec3) -> Color:
        return self.color

    def material_at(self, point: Vec3) -> Material:
        return self.material

    def random_point(self, rng: np.random.Generator) -> Vec3:
        a = rng.random()
        b = rng.random()
        return self.corner + a * self.edge_u + b * self.edge_v

    def area(self) -> float:
        """The area of the quad, |u x v|."""
        return length(cross(self.edge_u, self.edge_v))
