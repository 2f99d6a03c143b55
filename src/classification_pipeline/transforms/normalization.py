"""Resize, normalize and lay out an RGB image as an NCHW float32 tensor."""

from __future__ import annotations

import numpy as np
from loguru import logger
from PIL import Image

from classification_pipeline.config import PreprocessConfig
from classification_pipeline.errors import ShapeError
from classification_pipeline.schemas.tensor import Tensor
from classification_pipeline.types import PixelGrid


def resize_exact(image: Image.Image, height: int, width: int) -> Image.Image:
    """Resize to exactly ``width x height`` with Pillow's triangle filter.

    ``BILINEAR`` widens its support when downscaling, so the result is
    anti-aliased.  Aspect ratio is not preserved.

    Raises:
        ShapeError: If either target dimension is not positive.
    """
    if height <= 0 or width <= 0:
        raise ShapeError(
            f"Target dimensions must be positive, got height={height} width={width}"
        )
    return image.convert("RGB").resize((width, height), Image.Resampling.BILINEAR)


def to_pixel_grid(image: Image.Image) -> PixelGrid:
    """Return the ``(H, W, 3)`` uint8 interleaved samples of an image."""
    return np.asarray(image.convert("RGB"), dtype=np.uint8)


def normalize(
    grid: PixelGrid,
    mean: tuple[float, float, float],
    std: tuple[float, float, float],
) -> np.ndarray:  # type: ignore[type-arg]
    """Apply ``(raw / 255 - mean[c]) / std[c]`` per channel, in float32.

    The last axis of ``grid`` is the channel axis, ordered R, G, B.
    """
    mean_arr = np.asarray(mean, dtype=np.float32)
    std_arr = np.asarray(std, dtype=np.float32)
    scaled = grid.astype(np.float32) / np.float32(255.0)
    return (scaled - mean_arr) / std_arr


def interleaved_to_planar(array: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
    """Convert ``(H, W, C)`` channel-minor layout to ``(C, H, W)`` channel-major."""
    if array.ndim != 3:
        raise ShapeError(f"Expected a 3-D (H, W, C) array, got shape {array.shape}")
    return np.ascontiguousarray(array.transpose(2, 0, 1))


def encode_image(grid: PixelGrid, config: PreprocessConfig) -> Tensor:
    """Encode an ``(H, W, 3)`` uint8 grid into a ``(1, 3, H, W)`` float32 tensor.

    Raises:
        ShapeError: If ``grid`` is not a uint8 RGB grid, or the target size
            is not positive.
    """
    if grid.ndim != 3 or grid.shape[2] != 3 or grid.dtype != np.uint8:
        raise ShapeError(
            f"Expected an (H, W, 3) uint8 pixel grid, got {grid.shape} {grid.dtype}"
        )
    resized = resize_exact(Image.fromarray(grid), config.height, config.width)
    planar = interleaved_to_planar(
        normalize(to_pixel_grid(resized), config.mean, config.std)
    )
    tensor = Tensor.from_array(planar[np.newaxis, ...])
    logger.debug(
        f"Encoded {grid.shape[1]}x{grid.shape[0]} pixel grid into tensor "
        f"{tensor.dimensions}"
    )
    return tensor


class ImageTensorEncoder:
    """Callable preprocessing step: ``PixelGrid`` -> input ``Tensor``.

    Args:
        config: Target size and per-channel mean/std.
    """

    def __init__(self, config: PreprocessConfig | None = None) -> None:
        self.config = config or PreprocessConfig()

    def __call__(self, grid: PixelGrid) -> Tensor:
        return encode_image(grid, self.config)
