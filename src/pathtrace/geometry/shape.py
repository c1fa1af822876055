"""Shape interface shared by all primitives.

The integrator and the acceleration structure only ever see this interface:
a shape can be intersected by a ray, report its bounds, its color and
material at a surface point, and produce a random point on its surface for
light sampling. Emissive shapes report their emitted radiance as their color.
"""

import math
from abc import ABC, abstractmethod

import numpy as np

from pathtrace.core.ray import Hit, Ray
from pathtrace.core.vector import Color, Vec3
from pathtrace.geometry.aabb import AABB
from pathtrace.materials.material import Material

# Hits closer than this are ignored to avoid self-intersection
T_MIN = 1e-4


class Shape(ABC):
    """Abstract intersectable surface."""

    @abstractmethod
    def intersect(self, ray: Ray, t_max: float = math.inf) -> Hit | None:
        """Return the nearest hit with T_MIN < t < t_max, or None."""

    @abstractmethod
    def bounding_box(self) -> AABB:
        """Return an axis-aligned box enclosing the shape."""

    @abstractmethod
    def color_at(self, point: Vec3) -> Color:
        """Return the surface (or emitted) color at a point on the shape."""

    @abstractmethod
    def material_at(self, point: Vec3) -> Material:
        """Return the material at a point on the shape."""

    @abstractmethod
    def random_point(self, rng: np.random.Generator) -> Vec3:
        """Return a uniformly distributed random point on the surface."""
