"""Tests for display processing and image export.

Tests cover:
- Reinhard and exposure tone mapping
- Gamma correction and clamping
- uint8 conversion
- PNG export via Pillow
- RMSE comparison
"""

import numpy as np
import pytest
from PIL import Image

from pathtrace.preview.display import (
    TONE_MAP_METHODS,
    apply_gamma,
    process_image_for_display,
    tone_map_exposure,
    tone_map_reinhard,
)
from pathtrace.preview.export import compute_rmse, image_to_uint8, save_png


class TestToneMapping:
    """Tests for tone mapping operators."""

    def test_reinhard(self):
        image = np.array([[[0.0, 1.0, 3.0]]])
        result = tone_map_reinhard(image)
        assert result.dtype == np.float32
        assert np.allclose(result, [[[0.0, 0.5, 0.75]]])

    def test_reinhard_white_point(self):
        """Test that radiance at the white point maps to exactly 1."""
        image = np.array([[[0.0, 1.0, 4.0]]])
        result = tone_map_reinhard(image, white=4.0)
        assert np.allclose(result, [[[0.0, 0.5 * (1.0 + 1.0 / 16.0), 1.0]]])

    def test_reinhard_clamps_negative(self):
        result = tone_map_reinhard(np.array([[[-1.0, 0.0, 0.0]]]))
        assert np.all(result >= 0.0)

    def test_exposure(self):
        image = np.array([[[0.0, 1.0, 100.0]]])
        result = tone_map_exposure(image, exposure=1.0)
        assert np.allclose(result, [[[0.0, 1.0 - np.exp(-1.0), 1.0]]])

    def test_exposure_scales(self):
        image = np.full((1, 1, 3), 0.5)
        assert tone_map_exposure(image, 2.0)[0, 0, 0] > tone_map_exposure(image, 1.0)[0, 0, 0]


class TestGammaAndDisplay:
    """Tests for gamma correction and the display pipeline."""

    def test_gamma_identity(self):
        image = np.array([[[0.25, 0.5, 1.0]]])
        assert np.allclose(apply_gamma(image, 1.0), image)

    def test_gamma_brightens_midtones(self):
        result = apply_gamma(np.array([[[0.5, 0.5, 0.5]]]), 2.2)
        assert np.allclose(result, 0.5 ** (1.0 / 2.2))

    def test_gamma_no_nan_for_negative(self):
        result = apply_gamma(np.array([[[-0.5, 0.0, 2.0]]]), 2.2)
        assert not np.any(np.isnan(result))
        assert np.allclose(result, [[[0.0, 0.0, 1.0]]])

    def test_display_clamps_hdr(self):
        result = process_image_for_display(np.array([[[5.0, 0.5, -1.0]]]), gamma=1.0)
        assert np.allclose(result, [[[1.0, 0.5, 0.0]]])

    def test_methods_match_cli_choices(self):
        for method in TONE_MAP_METHODS:
            result = process_image_for_display(np.full((1, 1, 3), 0.5), tone_map=method)
            assert result.dtype == np.float32
        assert set(TONE_MAP_METHODS) == {"none", "reinhard", "exposure"}

    def test_display_unknown_method(self):
        with pytest.raises(ValueError):
            process_image_for_display(np.zeros((1, 1, 3)), tone_map="filmic")


class TestExport:
    """Tests for uint8 conversion and PNG export."""

    def test_uint8_conversion(self):
        image = np.array([[[0.0, 0.5, 1.0]]])
        result = image_to_uint8(image, gamma=1.0)
        assert result.dtype == np.uint8
        assert result.tolist() == [[[0, 128, 255]]]

    def test_save_png(self, tmp_path):
        image = np.zeros((3, 5, 3))
        image[0, 0] = (1.0, 0.0, 0.0)
        path = save_png(image, tmp_path / "out.png", gamma=1.0)

        assert path.exists()
        with Image.open(path) as loaded:
            assert loaded.size == (5, 3)
            assert loaded.mode == "RGB"
            assert loaded.getpixel((0, 0)) == (255, 0, 0)
            assert loaded.getpixel((4, 2)) == (0, 0, 0)

    def test_save_png_accepts_str(self, tmp_path):
        path = save_png(np.ones((2, 2, 3)), str(tmp_path / "white.png"), tone_map="reinhard")
        assert path.name == "white.png"
        assert path.exists()

    def test_rmse(self):
        a = np.zeros((2, 2, 3))
        b = np.full((2, 2, 3), 0.5)
        assert compute_rmse(a, a) == 0.0
        assert np.isclose(compute_rmse(a, b), 0.5)

    def test_rmse_shape_mismatch(self):
        with pytest.raises(ValueError):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((3, 2, 3)))
