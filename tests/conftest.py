"""Pytest configuration for path tracer tests.

Shared fixtures build small scenes by hand so each test controls exactly
which shapes occlude and which emit. Every test gets its own seeded
generator; nothing here holds global random state.
"""

import numpy as np
import pytest

from pathtrace.core.ray import Ray
from pathtrace.core.vector import vec3
from pathtrace.geometry.quad import Quad
from pathtrace.geometry.sphere import Sphere
from pathtrace.materials.material import diffuse_material, mirror_material
from pathtrace.scene.scene import SceneBuilder


@pytest.fixture
def rng():
    """A seeded random generator private to the test."""
    return np.random.default_rng(12345)


@pytest.fixture
def floor_quad():
    """A 10x10 white diffuse floor in the y=0 plane, centered on the origin."""
    return Quad(
        corner=(-5.0, 0.0, -5.0),
        edge_u=(10.0, 0.0, 0.0),
        edge_v=(0.0, 0.0, 10.0),
        color=(0.5, 0.5, 0.5),
        material=diffuse_material(),
    )


@pytest.fixture
def ceiling_light():
    """A small emissive quad facing down, 2 units above the origin."""
    return Quad(
        corner=(-0.5, 2.0, -0.5),
        edge_u=(1.0, 0.0, 0.0),
        edge_v=(0.0, 0.0, 1.0),
        color=(4.0, 4.0, 4.0),
        material=diffuse_material(),
    )


@pytest.fixture
def lit_floor_builder(floor_quad, ceiling_light):
    """Floor plus a ceiling light that is both a shape and a light."""
    builder = SceneBuilder()
    builder.add_shape(floor_quad)
    builder.add_shape(ceiling_light)
    builder.add_light(ceiling_light)
    return builder


@pytest.fixture
def mirror_sphere():
    """A neutral perfect mirror sphere at the origin."""
    return Sphere(
        center=(0.0, 0.0, 0.0), radius=1.0, color=(0.9, 0.2, 0.2), material=mirror_material()
    )


@pytest.fixture
def down_ray():
    """A ray from above pointing straight down at the origin."""
    return Ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
