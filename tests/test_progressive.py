"""Tests for the image render driver and the progressive renderer.

Tests cover:
- Output shape, dtype and argument validation
- Reproducibility for a fixed seed
- Independence of the result from the worker count
- Row callbacks
- Progressive accumulation (running average, reset, batching)
"""

import numpy as np
import pytest

from pathtrace.core.progressive import ProgressiveRenderer
from pathtrace.core.render import render_image, render_pixel
from pathtrace.scene.cornell_box import create_cornell_box_scene

WIDTH = 6
HEIGHT = 4


@pytest.fixture(scope="module")
def cornell():
    return create_cornell_box_scene()


class TestRenderImage:
    """Tests for render_image()."""

    def test_shape_and_dtype(self, cornell):
        scene, camera = cornell
        image = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=1, seed=0)
        assert image.shape == (HEIGHT, WIDTH, 3)
        assert image.dtype == np.float64
        assert np.all(np.isfinite(image))
        assert np.all(image >= 0.0)

    def test_not_all_black(self, cornell):
        scene, camera = cornell
        image = render_image(scene, camera, WIDTH, HEIGHT, samples=4, depth=2, seed=0)
        assert image.max() > 0.0

    def test_same_seed_same_image(self, cornell):
        scene, camera = cornell
        a = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=5)
        b = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=5)
        assert np.array_equal(a, b)

    def test_different_seeds_differ(self, cornell):
        scene, camera = cornell
        a = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=1)
        b = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=2)
        assert not np.array_equal(a, b)

    def test_worker_count_does_not_change_result(self, cornell):
        """Test that concurrent rendering of a shared scene is reproducible."""
        scene, camera = cornell
        serial = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=9)
        threaded = render_image(
            scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=9, workers=4
        )
        assert np.array_equal(serial, threaded)

    def test_seed_sequence_accepted(self, cornell):
        scene, camera = cornell
        a = render_image(scene, camera, 2, 2, samples=1, depth=1, seed=np.random.SeedSequence(3))
        b = render_image(scene, camera, 2, 2, samples=1, depth=1, seed=3)
        assert np.array_equal(a, b)

    def test_row_callback(self, cornell):
        scene, camera = cornell
        progress = []
        render_image(
            scene,
            camera,
            2,
            HEIGHT,
            samples=1,
            depth=0,
            seed=0,
            callback=lambda done, total: progress.append((done, total)),
        )
        assert progress == [(row, HEIGHT) for row in range(1, HEIGHT + 1)]

    @pytest.mark.parametrize(
        "width, height, workers", [(0, 4, 1), (4, 0, 1), (-1, 4, 1), (4, 4, 0)]
    )
    def test_invalid_arguments(self, cornell, width, height, workers):
        scene, camera = cornell
        with pytest.raises(ValueError):
            render_image(scene, camera, width, height, workers=workers)

    def test_render_pixel_uses_given_generator(self, cornell):
        scene, camera = cornell
        a = render_pixel(scene, camera, 3, 2, WIDTH, HEIGHT, 4, 2, np.random.default_rng(8))
        b = render_pixel(scene, camera, 3, 2, WIDTH, HEIGHT, 4, 2, np.random.default_rng(8))
        assert np.array_equal(a, b)


class TestProgressiveRenderer:
    """Tests for progressive pass accumulation."""

    def test_initial_state(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, WIDTH, HEIGHT, seed=0)
        assert renderer.width == WIDTH
        assert renderer.height == HEIGHT
        assert renderer.sample_count == 0
        assert np.array_equal(renderer.get_radiance(), np.zeros((HEIGHT, WIDTH, 3)))

    def test_single_pass_matches_render_image(self, cornell):
        """Test that the first pass uses the first spawned child seed."""
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, WIDTH, HEIGHT, depth=2, seed=4)
        renderer.render(1)

        child = np.random.SeedSequence(4).spawn(1)[0]
        expected = render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=child)
        assert renderer.sample_count == 1
        assert np.allclose(renderer.get_radiance(), expected)

    def test_running_average(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, WIDTH, HEIGHT, depth=2, seed=6)
        renderer.render(3)

        children = np.random.SeedSequence(6).spawn(3)
        passes = [
            render_image(scene, camera, WIDTH, HEIGHT, samples=1, depth=2, seed=child)
            for child in children
        ]
        assert renderer.sample_count == 3
        assert np.allclose(renderer.get_radiance(), np.mean(passes, axis=0))

    def test_reset_reproduces(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, WIDTH, HEIGHT, depth=1, seed=2)
        renderer.render(2)
        first = renderer.get_radiance()
        renderer.reset()
        assert renderer.sample_count == 0
        renderer.render(2)
        assert np.array_equal(renderer.get_radiance(), first)

    def test_batches_and_callback(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, 2, 2, depth=0, seed=0)
        progress = []
        renderer.render(5, batch_size=2, callback=lambda cur, total: progress.append((cur, total)))
        assert progress == [(2, 5), (4, 5), (5, 5)]

    def test_render_progressive_yields(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, 2, 2, depth=0, seed=0)
        renderer.render(1)
        assert list(renderer.render_progressive(2)) == [(2, 3), (3, 3)]

    def test_zero_passes_is_noop(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, 2, 2, seed=0)
        renderer.render(0)
        assert renderer.sample_count == 0

    def test_display_image_is_clamped_float32(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, WIDTH, HEIGHT, samples_per_pass=4, seed=0)
        renderer.render(1)
        image = renderer.get_image_numpy(gamma=2.2)
        assert image.dtype == np.float32
        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_invalid_dimensions(self, cornell):
        scene, camera = cornell
        with pytest.raises(ValueError):
            ProgressiveRenderer(scene, camera, 0, 4)

    def test_repr(self, cornell):
        scene, camera = cornell
        renderer = ProgressiveRenderer(scene, camera, WIDTH, HEIGHT, seed=0)
        assert repr(renderer) == f"ProgressiveRenderer(width={WIDTH}, height={HEIGHT}, samples=0)"
