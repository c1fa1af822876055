"""Ray and hit record data structures.

A Ray is an immutable origin point plus a unit direction. A Hit is the result
of a successful intersection query: the shape that was struck, the distance
along the query ray, and a "surface ray" whose origin is the intersection
point and whose direction is the unit surface normal there.

Intersection queries return ``Hit | None``; ``None`` means nothing was hit.

Example:
    >>> from pathtrace.core.ray import Ray
    >>> from pathtrace.core.vector import vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtrace.core.vector import Vec3, normalize

if TYPE_CHECKING:
    from pathtrace.geometry.shape import Shape


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Expected to be unit length;
            use ``Ray.towards`` to build a ray from an unnormalized vector.
    """

    origin: Vec3
    direction: Vec3

    @classmethod
    def towards(cls, origin: Vec3, direction: Vec3) -> Ray:
        """Create a ray, normalizing the direction."""
        return cls(origin=origin, direction=normalize(direction))

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at distance t."""
        return self.origin + t * self.direction


@dataclass(frozen=True, eq=False)
class Hit:
    """Record of a ray-shape intersection.

    Attributes:
        shape: The intersected shape (a reference, not owned).
        t: Distance along the query ray to the intersection.
        ray: Surface ray. Its origin is the intersection point and its
            direction is the unit normal, oriented against the query ray.
        front_face: True if the query ray struck the outside of the surface
            (the geometric normal and the ray direction were opposed).
    """

    shape: Shape
    t: float
    ray: Ray
    front_face: bool = True

    @property
    def point(self) -> Vec3:
        """The intersection point."""
        return self.ray.origin

    @property
    def normal(self) -> Vec3:
        """The unit surface normal facing the query ray."""
        return self.ray.direction
