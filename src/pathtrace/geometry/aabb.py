"""Axis-aligned bounding boxes."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from pathtrace.core.ray import Ray
from pathtrace.core.vector import Vec3


@dataclass(frozen=True, eq=False)
class AABB:
    """An axis-aligned box given by its minimum and maximum corners."""

    p_min: Vec3
    p_max: Vec3

    @classmethod
    def union_all(cls, boxes: Iterable[AABB]) -> AABB:
        """Return the smallest box enclosing all boxes.

        Raises:
            ValueError: If no boxes are given.
        """
        boxes = list(boxes)
        if not boxes:
            raise ValueError("Cannot take the union of zero boxes")
        p_min = np.min([b.p_min for b in boxes], axis=0)
        p_max = np.max([b.p_max for b in boxes], axis=0)
        return cls(p_min, p_max)

    def centroid(self) -> Vec3:
        return (self.p_min + self.p_max) / 2.0

    def extent(self) -> Vec3:
        return self.p_max - self.p_min

    def longest_axis(self) -> int:
        return int(np.argmax(self.extent()))

    def intersect(self, ray: Ray, t_max: float = math.inf) -> float | None:
        """Slab test against the box.

        Args:
            ray: The query ray.
            t_max: Upper bound on the distance of interest.

        Returns:
            The entry distance (clamped to 0 when the origin is inside), or
            None if the ray misses the box before t_max.
        """
        t_near = 0.0
        t_far = t_max
        for axis in range(3):
            origin = ray.origin[axis]
            direction = ray.direction[axis]
            lo = self.p_min[axis]
            hi = self.p_max[axis]
            if direction == 0.0:
                if origin < lo or origin > hi:
                    return None
                continue
            inv = 1.0 / direction
            t0 = (lo - origin) * inv
            t1 = (hi - origin) * inv
            if t0 > t1:
                t0, t1 = t1, t0
            t_near = max(t_near, t0)
            t_far = min(t_far, t1)
            if t_near > t_far:
                return None
        return float(t_near)
