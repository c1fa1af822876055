"""Cornell box scene configuration.

This module provides a factory function to create the classic Cornell box scene,
a standard test scene used in computer graphics for evaluating global illumination
algorithms.

The Cornell box consists of:
- 5 walls forming an open box (left, right, back, floor, ceiling)
- Left wall: red diffuse
- Right wall: green diffuse
- Back, floor, ceiling: white diffuse
- 3 spheres with different materials (diffuse, glossy, mirror)
- Area light on the ceiling (emissive quad)

The box spans from 0 to 555 in each dimension, with the camera positioned
outside looking in through the open front.

Example:
    >>> from pathtrace.scene.cornell_box import create_cornell_box_scene
    >>> scene, camera = create_cornell_box_scene()
    >>> len(scene.shapes), len(scene.lights)
    (9, 1)
"""

from dataclasses import dataclass

from pathtrace.camera.pinhole import PinholeCamera
from pathtrace.core.config import IntegratorConfig
from pathtrace.core.vector import as_vec3
from pathtrace.geometry.quad import Quad
from pathtrace.geometry.sphere import Sphere
from pathtrace.materials.material import diffuse_material, glossy_material, mirror_material
from pathtrace.scene.scene import Scene, SceneBuilder


@dataclass
class CornellBoxParams:
    """Parameters for configuring a Cornell box scene.

    Attributes:
        light_intensity: Scale applied to light_color to get the emitted
            radiance of the area light.
        light_color: RGB color of the light (each component in [0, 1]).
        left_wall_color: RGB albedo of the left wall.
        right_wall_color: RGB albedo of the right wall.
        back_wall_color: RGB albedo of the back wall, floor and ceiling.

    Example:
        >>> params = CornellBoxParams()
        >>> params.light_intensity
        15.0

        >>> # Custom parameters
        >>> custom = CornellBoxParams(
        ...     light_intensity=20.0,
        ...     light_color=(1.0, 0.9, 0.8),  # Warm light
        ... )
    """

    light_intensity: float = 15.0
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    left_wall_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    right_wall_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    back_wall_color: tuple[float, float, float] = (0.73, 0.73, 0.73)


# Classic Cornell box dimensions (approximately 555x555x555 units)
BOX_SIZE = 555.0

# Ceiling light size (classic Cornell box light is ~130x105 units)
LIGHT_WIDTH = 130.0
LIGHT_DEPTH = 105.0

# Sphere parameters
SPHERE_RADIUS = 80.0
DIFFUSE_SPHERE_COLOR = (0.73, 0.73, 0.73)
GLOSSY_SPHERE_COLOR = (0.2, 0.3, 0.8)
MIRROR_SPHERE_COLOR = (0.95, 0.93, 0.88)


def get_light_quad(box_size: float = BOX_SIZE, params: CornellBoxParams | None = None) -> Quad:
    """Build the ceiling area light.

    The light sits just below the ceiling to avoid coincident surfaces.
    """
    if params is None:
        params = CornellBoxParams()
    emission = as_vec3(params.light_color) * params.light_intensity
    x_offset = (box_size - LIGHT_WIDTH) / 2.0
    z_offset = (box_size - LIGHT_DEPTH) / 2.0
    return Quad(
        corner=(x_offset, box_size - 1.0, z_offset),
        edge_u=(LIGHT_WIDTH, 0.0, 0.0),
        edge_v=(0.0, 0.0, LIGHT_DEPTH),
        color=emission,
        material=diffuse_material(),
    )


def create_cornell_box_builder(
    box_size: float = BOX_SIZE,
    params: CornellBoxParams | None = None,
) -> SceneBuilder:
    """Populate a SceneBuilder with the Cornell box geometry.

    The coordinate system places the box origin at (0, 0, 0) with:
    - X-axis: left to right (0 to box_size)
    - Y-axis: floor to ceiling (0 to box_size)
    - Z-axis: front to back (0 to box_size), camera looks toward +Z
    """
    if params is None:
        params = CornellBoxParams()

    white = params.back_wall_color
    builder = SceneBuilder()

    # Walls
    builder.add_shapes(
        [
            # Left wall - YZ plane at x=0
            Quad(
                (0.0, 0.0, 0.0),
                (0.0, box_size, 0.0),
                (0.0, 0.0, box_size),
                params.left_wall_color,
            ),
            # Right wall - YZ plane at x=box_size
            Quad(
                (box_size, 0.0, box_size),
                (0.0, box_size, 0.0),
                (0.0, 0.0, -box_size),
                params.right_wall_color,
            ),
            # Back wall - XY plane at z=box_size
            Quad((0.0, 0.0, box_size), (box_size, 0.0, 0.0), (0.0, box_size, 0.0), white),
            # Floor - XZ plane at y=0
            Quad((0.0, 0.0, 0.0), (box_size, 0.0, 0.0), (0.0, 0.0, box_size), white),
            # Ceiling - XZ plane at y=box_size
            Quad((0.0, box_size, box_size), (box_size, 0.0, 0.0), (0.0, 0.0, -box_size), white),
        ]
    )

    # Area light: occludes like any shape and is sampled for direct light
    light = get_light_quad(box_size, params)
    builder.add_shape(light)
    builder.add_light(light)

    # Spheres resting on the floor
    builder.add_shapes(
        [
            Sphere(
                center=(box_size * 0.27, SPHERE_RADIUS, box_size * 0.35),
                radius=SPHERE_RADIUS,
                color=DIFFUSE_SPHERE_COLOR,
                material=diffuse_material(),
            ),
            Sphere(
                center=(box_size * 0.73, SPHERE_RADIUS, box_size * 0.35),
                radius=SPHERE_RADIUS,
                color=MIRROR_SPHERE_COLOR,
                material=mirror_material(tint=0.5),
            ),
            Sphere(
                center=(box_size * 0.5, SPHERE_RADIUS, box_size * 0.65),
                radius=SPHERE_RADIUS,
                color=GLOSSY_SPHERE_COLOR,
                material=glossy_material(index=1.5, gloss=0.05),
            ),
        ]
    )
    return builder


def create_cornell_box_camera(
    box_size: float = BOX_SIZE, aspect_ratio: float = 1.0
) -> PinholeCamera:
    """Camera outside the box looking in through the open front."""
    camera_distance = 800.0
    return PinholeCamera(
        lookfrom=(box_size / 2.0, box_size / 2.0, -camera_distance),
        lookat=(box_size / 2.0, box_size / 2.0, box_size / 2.0),
        vup=(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=aspect_ratio,
    )


def create_cornell_box_scene(
    box_size: float = BOX_SIZE,
    params: CornellBoxParams | None = None,
    config: IntegratorConfig | None = None,
) -> tuple[Scene, PinholeCamera]:
    """Create a compiled Cornell box scene and its camera.

    Args:
        box_size: The size of the box in each dimension.
        params: Optional CornellBoxParams for customizing light and wall colors.
        config: Optional integrator settings.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    builder = create_cornell_box_builder(box_size, params)
    return builder.compile(config), create_cornell_box_camera(box_size)
