"""Scene construction and the path tracing integrator.

A scene has a two-phase lifecycle:

1. ``SceneBuilder`` collects shapes and lights (append-only).
2. ``SceneBuilder.compile()`` snapshots both collections into an immutable
   ``Scene`` with one bounding volume hierarchy over the shapes and an
   independent one over the lights.

Only ``Scene`` can answer queries, so a scene cannot be sampled before it is
compiled, and later changes to the builder never leak into a compiled scene.
A ``Scene`` holds no per-call state: every sampling method takes its own
``numpy.random.Generator`` and many threads may sample the same scene at once
as long as each uses its own generator.

Lights are a separate collection used for emission sampling. The shape
collection is the only source of occlusion, so a light that should also
block or reflect rays has to be added with both ``add_shape`` and
``add_light``.

Estimator summary:

    sample()            n x n stratified bounces from the primary hit,
                        averaged over n*n where n = isqrt(samples).
    recursive_sample()  follows a path; diffuse vertices add
                        color * direct_light, specular vertices blend by tint,
                        and a specular ray that reaches a light returns its
                        emission directly.
    direct_light()      one sample per light, unweighted average over lights.

Example:
    >>> import numpy as np
    >>> from pathtrace.scene.scene import SceneBuilder
    >>> builder = SceneBuilder()
    >>> builder.add_shape(floor).add_shape(lamp).add_light(lamp)
    >>> scene = builder.compile()
    >>> rng = np.random.default_rng(7)
    >>> radiance = scene.sample(camera_ray, samples=16, depth=4, rng=rng)
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from pathtrace.core.config import IntegratorConfig, ZeroLightPolicy
from pathtrace.core.errors import NoLightsError, SceneNotCompiledError
from pathtrace.core.ray import Hit, Ray
from pathtrace.core.vector import Color, black, dot, length, normalize
from pathtrace.geometry.bvh import BVH
from pathtrace.geometry.shape import Shape
from pathtrace.materials.bounce import BounceFunction
from pathtrace.materials.bounce import bounce as default_bounce
from pathtrace.materials.material import Material

logger = logging.getLogger(__name__)


class SceneBuilder:
    """Mutable collection of shapes and lights, compiled into a Scene.

    Attributes:
        shapes: Shapes used for intersection and occlusion, in insertion
            order.
        lights: Emissive shapes sampled for direct lighting, in insertion
            order.
    """

    def __init__(self) -> None:
        self.shapes: list[Shape] = []
        self.lights: list[Shape] = []
        self._scene: Scene | None = None

    def add_shape(self, shape: Shape) -> "SceneBuilder":
        """Append a shape to the geometry collection."""
        self.shapes.append(shape)
        return self

    def add_shapes(self, shapes: Iterable[Shape]) -> "SceneBuilder":
        """Append several shapes to the geometry collection."""
        self.shapes.extend(shapes)
        return self

    def add_light(self, shape: Shape) -> "SceneBuilder":
        """Append a shape to the light collection."""
        self.lights.append(shape)
        return self

    def compile(
        self,
        config: IntegratorConfig | None = None,
        bounce: BounceFunction | None = None,
    ) -> "Scene":
        """Snapshot the collections and build the acceleration structures.

        Args:
            config: Integrator settings. Defaults to ``IntegratorConfig()``.
            bounce: Bounce decision function. Defaults to
                ``pathtrace.materials.bounce.bounce``.

        Returns:
            A new immutable Scene.

        Raises:
            NoLightsError: If there are no lights and the zero light policy
                is ``ZeroLightPolicy.REJECT``.
        """
        config = config or IntegratorConfig()
        if not self.lights:
            if config.zero_light_policy is ZeroLightPolicy.REJECT:
                raise NoLightsError("Scene has no lights")
            logger.warning("Compiling scene without lights; direct lighting will be black")

        self._scene = Scene.build(self.shapes, self.lights, config, bounce)
        return self._scene

    @property
    def scene(self) -> "Scene":
        """The most recently compiled scene.

        Raises:
            SceneNotCompiledError: If compile() has not been called.
        """
        if self._scene is None:
            raise SceneNotCompiledError("Call compile() before using the scene")
        return self._scene


@dataclass(frozen=True, eq=False)
class Scene:
    """Compiled, read-only scene implementing the integrator.

    Attributes:
        shapes: Snapshot of the shape collection.
        lights: Snapshot of the light collection.
        shape_tree: BVH over ``shapes``.
        light_tree: BVH over ``lights``.
        config: Integrator settings.
        bounce: Bounce decision function.
    """

    shapes: tuple[Shape, ...]
    lights: tuple[Shape, ...]
    shape_tree: BVH
    light_tree: BVH
    config: IntegratorConfig
    bounce: BounceFunction

    @classmethod
    def build(
        cls,
        shapes: Iterable[Shape],
        lights: Iterable[Shape],
        config: IntegratorConfig | None = None,
        bounce: BounceFunction | None = None,
    ) -> "Scene":
        """Build a scene from shape and light collections."""
        shapes = tuple(shapes)
        lights = tuple(lights)
        scene = cls(
            shapes=shapes,
            lights=lights,
            shape_tree=BVH(shapes),
            light_tree=BVH(lights),
            config=config or IntegratorConfig(),
            bounce=bounce or default_bounce,
        )
        logger.debug("Compiled scene: %d shapes, %d lights", len(shapes), len(lights))
        return scene

    # =========================================================================
    # Queries
    # =========================================================================

    def intersect_shapes(self, ray: Ray) -> Hit | None:
        """Nearest hit against the shape collection."""
        return self.shape_tree.intersect(ray)

    def intersect_lights(self, ray: Ray) -> Hit | None:
        """Nearest light hit that is not hidden behind a closer shape.

        The light hierarchy knows nothing about opaque shapes, so the shape
        hierarchy is queried too and a shape strictly closer than the light
        wins (the light is reported as not found).
        """
        light_hit = self.light_tree.intersect(ray)
        if light_hit is None:
            return None
        shape_hit = self.shape_tree.intersect(ray)
        if shape_hit is not None and shape_hit.t < light_hit.t:
            return None
        return light_hit

    def shadow(self, ray: Ray, max_distance: float) -> bool:
        """True iff a shape is hit strictly closer than max_distance."""
        return self.shape_tree.shadow(ray, max_distance) < max_distance

    # =========================================================================
    # Estimators
    # =========================================================================

    def direct_light(self, incoming: Ray, normal_ray: Ray, rng: np.random.Generator) -> Color:
        """Next-event estimate of direct light at a shading point.

        Samples one point on every light, skips occluded ones, and weights
        each visible sample by the clamped cosine with the surface normal.
        The sum is divided by the number of lights, so every light counts
        equally regardless of size or distance.

        The shadow segment is shortened by ``config.shadow_epsilon`` at both
        ends so that neither the shading surface nor the light's own surface
        registers as an occluder.

        Args:
            incoming: The ray that reached the shading point.
            normal_ray: Surface ray at the shading point (origin = point,
                direction = unit normal).
            rng: Random generator for light sampling.

        Returns:
            The direct light estimate. Black when the scene has no lights.
        """
        if not self.lights:
            return black()

        eps = self.config.shadow_epsilon
        origin = normal_ray.origin
        normal = normal_ray.direction
        total = black()
        for light in self.lights:
            point = light.random_point(rng)
            offset = point - origin
            distance = length(offset)
            direction = normalize(offset)
            shadow_ray = Ray(origin + eps * direction, direction)
            if self.shadow(shadow_ray, distance - 2.0 * eps):
                continue
            diffuse = max(0.0, dot(direction, normal))
            total = total + light.color_at(point) * diffuse
        return total / len(self.lights)

    def recursive_sample(
        self,
        ray: Ray,
        reflected: bool,
        depth: int,
        rng: np.random.Generator,
    ) -> Color:
        """Estimate the radiance carried back along a path.

        Implemented as a loop rather than by recursion. The forward pass
        follows the path and keeps a running throughput; direct lighting for
        diffuse vertices is evaluated afterwards, deepest vertex first, so the
        generator is consumed in the same order as the recursive definition
        (bounce uniforms on the way down, light samples on the way back up).

        Args:
            ray: The ray to follow.
            reflected: True if the ray left a specular bounce. Such a ray
                that reaches a visible light returns the light's emission
                and ends the path.
            depth: Remaining bounce budget. Negative means black.
            rng: Random generator for this call.

        Returns:
            The estimated radiance.
        """
        radiance = black()
        throughput = np.ones(3)
        # (throughput, incoming ray, hit) for vertices awaiting direct light
        pending: list[tuple[Color, Ray, Hit]] = []

        while depth >= 0:
            if reflected:
                light_hit = self.intersect_lights(ray)
                if light_hit is not None:
                    emitted = light_hit.shape.color_at(light_hit.point)
                    radiance = radiance + throughput * emitted
                    break

            hit = self.intersect_shapes(ray)
            if hit is None:
                break

            shape = hit.shape
            surface = shape.color_at(hit.point)
            material = shape.material_at(hit.point)
            p, u, v = rng.random(), rng.random(), rng.random()
            next_ray, next_reflected = self.bounce(ray, hit, material, p, u, v)

            if next_reflected:
                if material.tint > 0.0:
                    throughput = throughput * _reflection_weight(surface, material)
            else:
                weighted = throughput * surface
                pending.append((weighted, ray, hit))
                throughput = weighted

            ray, reflected = next_ray, next_reflected
            depth -= 1

        for weight, incoming, hit in reversed(pending):
            radiance = radiance + weight * self.direct_light(incoming, hit.ray, rng)
        return radiance

    def sample(
        self,
        ray: Ray,
        samples: int,
        depth: int,
        rng: np.random.Generator,
    ) -> Color:
        """Estimate the radiance arriving along a primary ray.

        The primary ray is intersected once. The bounce domain at the hit is
        stratified into an n x n grid with n = isqrt(samples); each cell gets
        one jittered bounce whose continuation is estimated by
        recursive_sample(). A non-square ``samples`` is truncated to n*n
        bounces and the result is the mean over those n*n bounces.

        Args:
            ray: The primary (camera) ray.
            samples: Requested number of samples (non-negative).
            depth: Bounce budget. Negative means black.
            rng: Random generator for this call.

        Returns:
            The estimated radiance.

        Raises:
            ValueError: If samples is negative.
        """
        if samples < 0:
            raise ValueError(f"samples must be non-negative, got {samples}")
        if depth < 0:
            return black()
        hit = self.intersect_shapes(ray)
        if hit is None:
            return black()

        n = math.isqrt(samples)
        if n == 0:
            return black()

        shape = hit.shape
        surface = shape.color_at(hit.point)
        material = shape.material_at(hit.point)
        result = black()
        for i in range(n):
            for j in range(n):
                p = rng.random()
                fu = (i + rng.random()) / n
                fv = (j + rng.random()) / n
                next_ray, reflected = self.bounce(ray, hit, material, p, fu, fv)
                indirect = self.recursive_sample(next_ray, reflected, depth - 1, rng)
                if reflected:
                    if material.tint > 0.0:
                        indirect = indirect * _reflection_weight(surface, material)
                    result = result + indirect
                else:
                    direct = self.direct_light(ray, hit.ray, rng)
                    result = result + surface * (direct + indirect)
        return result / (n * n)


def _reflection_weight(surface: Color, material: Material) -> Color:
    """Factor applied to light arriving through a specular bounce.

    color * (indirect * tint) + indirect * (1 - tint)
        == indirect * (color * tint + (1 - tint))
    """
    return surface * material.tint + (1.0 - material.tint)
