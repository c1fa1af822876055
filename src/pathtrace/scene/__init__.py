"""Scene module: construction, compilation and the integrator.

Components:
    scene: SceneBuilder (mutable) and Scene (compiled, immutable integrator)
    cornell_box: Cornell box demo scene
"""

from .cornell_box import (
    BOX_SIZE,
    CornellBoxParams,
    create_cornell_box_builder,
    create_cornell_box_camera,
    create_cornell_box_scene,
    get_light_quad,
)
from .scene import Scene, SceneBuilder

__all__ = [
    "Scene",
    "SceneBuilder",
    "CornellBoxParams",
    "create_cornell_box_builder",
    "create_cornell_box_camera",
    "create_cornell_box_scene",
    "get_light_quad",
    "BOX_SIZE",
]
