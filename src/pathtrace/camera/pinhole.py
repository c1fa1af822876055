"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Jittered sampling for anti-aliasing

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Jitter offsets are passed in by the caller rather than drawn internally, so
the camera holds no random state and can be shared between threads.

Example:
    >>> from pathtrace.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.ray_for(0.5, 0.5)  # Ray through image center
"""

import math
from dataclasses import dataclass

import numpy as np

from pathtrace.core.ray import Ray
from pathtrace.core.vector import Vec3, normalize


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical field of view {self.vfov} is outside (0, 180)")
        if not self.aspect_ratio > 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")

        # Viewport dimensions at unit distance
        theta = math.radians(self.vfov)
        viewport_height = 2.0 * math.tan(theta / 2.0)
        viewport_width = self.aspect_ratio * viewport_height

        origin = np.array(self.lookfrom, dtype=np.float64)
        w = normalize(origin - np.array(self.lookat, dtype=np.float64))
        u = normalize(np.cross(np.array(self.vup, dtype=np.float64), w))
        v = np.cross(w, u)

        horizontal = viewport_width * u
        vertical = viewport_height * v
        lower_left = origin - w - horizontal / 2.0 - vertical / 2.0

        object.__setattr__(self, "_origin", origin)
        object.__setattr__(self, "_basis", (u, v, w))
        object.__setattr__(self, "_horizontal", horizontal)
        object.__setattr__(self, "_vertical", vertical)
        object.__setattr__(self, "_lower_left", lower_left)

    @property
    def origin(self) -> Vec3:
        """Camera position in world space."""
        return self._origin

    @property
    def basis(self) -> tuple[Vec3, Vec3, Vec3]:
        """The (u, v, w) basis: right, up, backward."""
        return self._basis

    def ray_for(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        Args:
            u: Horizontal coordinate in [0, 1] (left to right).
            v: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A Ray from the camera origin toward that point on the image plane.
        """
        point = self._lower_left + u * self._horizontal + v * self._vertical
        return Ray.towards(self._origin, point - self._origin)

    def ray_for_pixel(
        self,
        pixel_i: int,
        pixel_j: int,
        width: int,
        height: int,
        jitter_u: float = 0.5,
        jitter_v: float = 0.5,
    ) -> Ray:
        """Generate a ray through a pixel with a sub-pixel offset.

        Args:
            pixel_i: Pixel x-coordinate (0 = left).
            pixel_j: Pixel y-coordinate (0 = bottom).
            width: Image width in pixels.
            height: Image height in pixels.
            jitter_u: Horizontal offset within the pixel in [0, 1).
            jitter_v: Vertical offset within the pixel in [0, 1).

        Returns:
            The primary ray for that pixel position.
        """
        return self.ray_for((pixel_i + jitter_u) / width, (pixel_j + jitter_v) / height)
