"""Tests for the input tensor encoder."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from classification_pipeline.config import PreprocessConfig
from classification_pipeline.errors import ShapeError
from classification_pipeline.transforms import (
    ImageTensorEncoder,
    encode_image,
    interleaved_to_planar,
    normalize,
    resize_exact,
    to_pixel_grid,
)

MEAN = (0.485, 0.456, 0.406)
STD = (0.229, 0.224, 0.225)


@pytest.fixture()
def grid_2x2() -> np.ndarray:
    """2x2 interleaved RGB grid with distinct per-pixel values."""
    return np.array(
        [
            [[10, 20, 30], [40, 50, 60]],
            [[70, 80, 90], [100, 110, 120]],
        ],
        dtype=np.uint8,
    )


class TestNormalize:
    def test_black_red_channel(self) -> None:
        out = normalize(np.zeros((1, 1, 3), dtype=np.uint8), MEAN, STD)
        assert out[0, 0, 0] == pytest.approx(-2.1179, abs=1e-3)

    def test_white_red_channel(self) -> None:
        out = normalize(np.full((1, 1, 3), 255, dtype=np.uint8), MEAN, STD)
        assert out[0, 0, 0] == pytest.approx(2.2489, abs=1e-3)

    def test_per_channel_constants(self) -> None:
        out = normalize(np.full((1, 1, 3), 255, dtype=np.uint8), MEAN, STD)
        expected = [(1.0 - m) / s for m, s in zip(MEAN, STD)]
        np.testing.assert_allclose(out[0, 0], expected, atol=1e-5)

    def test_float32_output(self, grid_2x2: np.ndarray) -> None:
        assert normalize(grid_2x2, MEAN, STD).dtype == np.float32


class TestInterleavedToPlanar:
    def test_channel_planes(self, grid_2x2: np.ndarray) -> None:
        planar = interleaved_to_planar(grid_2x2)
        assert planar.shape == (3, 2, 2)
        assert planar[0].ravel().tolist() == [10, 40, 70, 100]
        assert planar[1].ravel().tolist() == [20, 50, 80, 110]
        assert planar[2].ravel().tolist() == [30, 60, 90, 120]

    def test_rejects_non_3d(self) -> None:
        with pytest.raises(ShapeError):
            interleaved_to_planar(np.zeros((2, 2)))


class TestResizeExact:
    def test_exact_target_size(self, rgb_image: Image.Image) -> None:
        out = resize_exact(rgb_image, height=10, width=7)
        assert out.size == (7, 10)

    @pytest.mark.parametrize(("height", "width"), [(0, 4), (4, 0), (0, 0), (-1, 4)])
    def test_invalid_dimensions(
        self, rgb_image: Image.Image, height: int, width: int
    ) -> None:
        with pytest.raises(ShapeError):
            resize_exact(rgb_image, height=height, width=width)

    def test_deterministic(self, rgb_image: Image.Image) -> None:
        a = to_pixel_grid(resize_exact(rgb_image, 16, 16))
        b = to_pixel_grid(resize_exact(rgb_image, 16, 16))
        np.testing.assert_array_equal(a, b)

    def test_uniform_image_stays_uniform(self) -> None:
        img = Image.new("RGB", (50, 30), color=(12, 34, 56))
        grid = to_pixel_grid(resize_exact(img, 7, 9))
        diff = np.abs(grid.astype(np.int16) - np.array([12, 34, 56]))
        assert diff.max() <= 1


@pytest.fixture()
def rgb_grid(rgb_image: Image.Image) -> np.ndarray:
    return to_pixel_grid(rgb_image)


class TestEncodeImage:
    def test_output_dimensions(self, rgb_grid: np.ndarray) -> None:
        tensor = encode_image(rgb_grid, PreprocessConfig(height=8, width=10))
        assert tensor.dimensions == (1, 3, 8, 10)
        assert len(tensor.data) == 3 * 8 * 10 * 4

    def test_planar_layout_matches_grid(self, grid_2x2: np.ndarray) -> None:
        tensor = encode_image(grid_2x2, PreprocessConfig(height=2, width=2))
        array = tensor.to_array()[0]
        expected = normalize(grid_2x2, MEAN, STD)
        for c in range(3):
            np.testing.assert_allclose(array[c], expected[..., c], atol=1e-6)

    def test_resizes_through_pillow(self, rgb_image: Image.Image) -> None:
        cfg = PreprocessConfig(height=5, width=6)
        tensor = encode_image(to_pixel_grid(rgb_image), cfg)
        resized = to_pixel_grid(resize_exact(rgb_image, 5, 6))
        np.testing.assert_allclose(
            tensor.to_array()[0].transpose(1, 2, 0),
            normalize(resized, MEAN, STD),
            atol=1e-6,
        )

    def test_zero_target_raises(self, rgb_grid: np.ndarray) -> None:
        with pytest.raises(ShapeError):
            encode_image(rgb_grid, PreprocessConfig(height=0, width=224))

    @pytest.mark.parametrize(
        "grid",
        [
            np.zeros((4, 4), dtype=np.uint8),
            np.zeros((4, 4, 4), dtype=np.uint8),
            np.zeros((4, 4, 3), dtype=np.float32),
        ],
    )
    def test_rejects_non_rgb_grid(self, grid: np.ndarray) -> None:
        with pytest.raises(ShapeError, match="pixel grid"):
            encode_image(grid, PreprocessConfig(height=2, width=2))

    def test_deterministic_bytes(self, rgb_grid: np.ndarray) -> None:
        cfg = PreprocessConfig(height=12, width=12)
        assert encode_image(rgb_grid, cfg).data == encode_image(rgb_grid, cfg).data


class TestImageTensorEncoder:
    def test_default_size(self, rgb_grid: np.ndarray) -> None:
        assert ImageTensorEncoder()(rgb_grid).dimensions == (1, 3, 224, 224)

    def test_callable(self, rgb_grid: np.ndarray) -> None:
        encoder = ImageTensorEncoder(PreprocessConfig(height=4, width=4))
        tensor = encoder(rgb_grid)
        assert tensor.dimensions == (1, 3, 4, 4)
        assert tensor.data == encode_image(rgb_grid, encoder.config).data
