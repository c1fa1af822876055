"""Geometry module for shape primitives and spatial acceleration.

Components:
    shape: Abstract Shape interface used by the integrator
    sphere: Sphere primitive with robust ray-sphere intersection
    quad: Parallelogram primitive, the usual area light
    aabb: Axis-Aligned Bounding Box utilities
    bvh: Bounding Volume Hierarchy for nearest-hit and shadow queries
"""

from .aabb import AABB
from .bvh import BVH, BVHNode
from .quad import Quad
from .shape import T_MIN, Shape
from .sphere import Sphere

__all__ = [
    "Shape",
    "T_MIN",
    "AABB",
    "BVH",
    "BVHNode",
    "Sphere",
    "Quad",
]
