"""Bounding volume hierarchy over an ordered list of shapes.

The hierarchy is built once from a fixed sequence of shapes and never changes
afterwards, so a single BVH can be queried from many threads at once. Nodes
are stored in a flat list in depth-first order: an interior node's first
child is the next node in the list and ``second_child_offset`` points at the
other one. Traversal is iterative with an explicit stack, visiting the nearer
child first and skipping nodes whose boxes start beyond the closest hit.

Example:
    >>> from pathtrace.geometry.bvh import BVH
    >>> tree = BVH([sphere, floor])
    >>> hit = tree.intersect(ray)
    >>> distance = tree.shadow(ray)  # math.inf when nothing is hit
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from pathtrace.core.ray import Hit, Ray
from pathtrace.geometry.aabb import AABB
from pathtrace.geometry.shape import Shape

logger = logging.getLogger(__name__)

# Maximum number of shapes stored in a leaf
MAX_LEAF_SIZE = 4


@dataclass(frozen=True, eq=False)
class BVHNode:
    """A node of the flattened hierarchy.

    Attributes:
        box: Bounds of everything below this node.
        reference_offset: Index of the first shape of a leaf in the
            reordered shape list.
        n_references: Number of shapes in a leaf (0 for interior nodes).
        second_child_offset: Index of the second child of an interior node.
    """

    box: AABB
    reference_offset: int
    n_references: int
    second_child_offset: int = -1

    def is_leaf(self) -> bool:
        return self.n_references > 0


class BVH:
    """Acceleration structure answering nearest-hit and shadow queries."""

    def __init__(self, shapes: Sequence[Shape]) -> None:
        self._shapes: list[Shape] = []
        self._nodes: list[BVHNode] = []
        if shapes:
            boxes = [shape.bounding_box() for shape in shapes]
            items = [(shape, box, box.centroid()) for shape, box in zip(shapes, boxes)]
            self._build(items)
        logger.debug("Built BVH: %d shapes, %d nodes", len(self._shapes), len(self._nodes))

    def __len__(self) -> int:
        return len(self._shapes)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def bounds(self) -> AABB | None:
        """Bounds of the whole hierarchy, or None when empty."""
        return self._nodes[0].box if self._nodes else None

    def _build(self, items: list) -> int:
        """Append the subtree for ``items`` and return its root index."""
        box = AABB.union_all(box for _, box, _ in items)
        index = len(self._nodes)

        if len(items) <= MAX_LEAF_SIZE:
            self._nodes.append(BVHNode(box, len(self._shapes), len(items)))
            self._shapes.extend(shape for shape, _, _ in items)
            return index

        # Median split along the longest axis of the centroid bounds
        centroids = np.array([centroid for _, _, centroid in items])
        axis = AABB(centroids.min(axis=0), centroids.max(axis=0)).longest_axis()
        order = np.argsort(centroids[:, axis], kind="stable")
        items = [items[i] for i in order]
        mid = len(items) // 2

        # Placeholder until the second child's position is known
        self._nodes.append(BVHNode(box, 0, 0))
        self._build(items[:mid])
        second = self._build(items[mid:])
        self._nodes[index] = BVHNode(box, 0, 0, second_child_offset=second)
        return index

    def intersect(self, ray: Ray, t_max: float = math.inf) -> Hit | None:
        """Find the nearest hit along a ray.

        Args:
            ray: The query ray.
            t_max: Only hits closer than this are reported.

        Returns:
            The nearest hit, or None if nothing is hit before t_max.
        """
        if not self._nodes:
            return None
        root_t = self._nodes[0].box.intersect(ray, t_max)
        if root_t is None:
            return None

        closest: Hit | None = None
        best_t = t_max
        stack = [(0, root_t)]
        while stack:
            node_index, entry_t = stack.pop()
            if entry_t >= best_t:
                continue
            node = self._nodes[node_index]
            if node.is_leaf():
                start = node.reference_offset
                for shape in self._shapes[start : start + node.n_references]:
                    hit = shape.intersect(ray, best_t)
                    if hit is not None:
                        closest = hit
                        best_t = hit.t
                continue

            first = node_index + 1
            second = node.second_child_offset
            t_first = self._nodes[first].box.intersect(ray, best_t)
            t_second = self._nodes[second].box.intersect(ray, best_t)
            if t_first is not None and t_second is not None:
                # Push the farther child first so the nearer one is popped next
                if t_second < t_first:
                    stack.append((first, t_first))
                    stack.append((second, t_second))
                else:
                    stack.append((second, t_second))
                    stack.append((first, t_first))
            elif t_first is not None:
                stack.append((first, t_first))
            elif t_second is not None:
                stack.append((second, t_second))
        return closest

    def shadow(self, ray: Ray, t_max: float = math.inf) -> float:
        """Distance to the nearest hit along a ray.

        Args:
            ray: The query ray.
            t_max: Hits at or beyond this distance are not reported.

        Returns:
            The hit distance, or math.inf when nothing is hit before t_max.
        """
        hit = self.intersect(ray, t_max)
        return math.inf if hit is None else hit.t
