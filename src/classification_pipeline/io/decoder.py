"""Decode base64 / data-URL payloads and encoded image bytes into pixels."""

from __future__ import annotations

import base64
import binascii
import io

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from classification_pipeline.errors import DecodeError
from classification_pipeline.types import PixelGrid


def strip_data_url(text: str) -> str:
    """Drop a ``data:<mime>;base64,`` style prefix.

    Everything after the first comma is the payload; text without a comma
    is returned unchanged.
    """
    if "," in text:
        return text.split(",", 1)[1]
    return text


def decode_base64(text: str) -> bytes:
    """Decode a bare base64 payload or a data URL into raw bytes.

    Uses the standard alphabet with padding and rejects any character
    outside it.

    Raises:
        DecodeError: On invalid characters or padding.
    """
    payload = strip_data_url(text).strip()
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 image payload: {e}") from e


def decode_image(data: bytes) -> Image.Image:
    """Decode encoded image bytes (JPEG, PNG, ...) into an RGB image.

    The container format is detected from the byte signature.  Pixel data
    is loaded eagerly so truncated or corrupt files fail here.

    Raises:
        DecodeError: If the format is unrecognized, the pixel data is corrupt,
            or the declared size exceeds Pillow's decompression-bomb limit.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            fmt = img.format
            rgb = img.convert("RGB")
    except UnidentifiedImageError as e:
        raise DecodeError("Unrecognized image format") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large to decode: {e}") from e
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Corrupt image data: {e}") from e

    logger.debug(f"Decoded {fmt} image {rgb.size[0]}x{rgb.size[1]}")
    return rgb


def decode_pixel_grid(data: bytes) -> PixelGrid:
    """Decode image bytes straight into an ``(H, W, 3)`` uint8 grid."""
    return np.asarray(decode_image(data), dtype=np.uint8)
