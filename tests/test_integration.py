"""Integration tests for end-to-end rendering pipeline.

This module tests the complete rendering pipeline from scene creation through
final image output. It verifies that all components work together correctly
and that the output meets basic quality criteria.

Tests are designed to be fast (low resolution, few samples) while still
exercising the full pipeline.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from examples.render_cornell_box import main, render_cornell_box
from pathtrace.core.config import IntegratorConfig, ZeroLightPolicy
from pathtrace.core.progressive import ProgressiveRenderer
from pathtrace.core.render import render_image
from pathtrace.preview.export import compute_rmse, save_png
from pathtrace.scene.cornell_box import create_cornell_box_scene


class TestCornellBoxIntegration:
    """Integration tests for Cornell box rendering."""

    def test_end_to_end_render_to_png(self, tmp_path) -> None:
        """Test that scene, renderer and export work together."""
        scene, camera = create_cornell_box_scene()
        renderer = ProgressiveRenderer(scene, camera, 8, 8, samples_per_pass=4, depth=3, seed=0)
        renderer.render(2)

        path = save_png(renderer.get_radiance(), tmp_path / "cornell.png", tone_map="reinhard")
        with Image.open(path) as image:
            pixels = np.asarray(image)
        assert pixels.shape == (8, 8, 3)
        assert pixels.max() > 0

    def test_more_passes_reduce_noise(self) -> None:
        """Test that averaging more passes moves toward a converged image."""
        scene, camera = create_cornell_box_scene()
        reference = ProgressiveRenderer(scene, camera, 4, 4, samples_per_pass=4, depth=2, seed=100)
        reference.render(48)

        few = ProgressiveRenderer(scene, camera, 4, 4, samples_per_pass=4, depth=2, seed=1)
        few.render(1)
        many = ProgressiveRenderer(scene, camera, 4, 4, samples_per_pass=4, depth=2, seed=1)
        many.render(16)

        target = reference.get_radiance()
        assert compute_rmse(many.get_radiance(), target) < compute_rmse(
            few.get_radiance(), target
        )

    def test_reject_policy_scene_still_renders_with_light(self) -> None:
        config = IntegratorConfig(zero_light_policy=ZeroLightPolicy.REJECT)
        scene, camera = create_cornell_box_scene(config=config)
        image = render_image(scene, camera, 2, 2, samples=1, depth=1, seed=0)
        assert image.shape == (2, 2, 3)


class TestExampleScript:
    """Tests for the command-line example."""

    def test_render_function(self, tmp_path) -> None:
        output = render_cornell_box(
            width=4,
            height=4,
            samples=1,
            passes=1,
            depth=1,
            output_path=str(tmp_path / "box.png"),
            quiet=True,
        )
        assert output.exists()

    def test_main_success(self, tmp_path) -> None:
        output = tmp_path / "main.png"
        code = main(
            [
                "--width",
                "4",
                "--height",
                "3",
                "--samples",
                "1",
                "--passes",
                "1",
                "--depth",
                "1",
                "--output",
                str(output),
                "--quiet",
            ]
        )
        assert code == 0
        with Image.open(output) as image:
            assert image.size == (4, 3)

    def test_main_reports_errors(self, tmp_path, capsys) -> None:
        code = main(["--width", "0", "--output", str(tmp_path / "bad.png"), "--quiet"])
        assert code == 1
        assert "Error" in capsys.readouterr().err
