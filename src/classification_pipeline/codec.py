"""Conversion between tensor byte buffers and float32 sequences.

Both directions use little-endian float32 (``<f4``) regardless of the host
byte order, so buffers are portable between the encoder, the engine, and
the output interpreter.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from classification_pipeline.errors import CodecError

FLOAT32_LE = np.dtype("<f4")


def bytes_to_floats(buffer: bytes) -> np.ndarray:  # type: ignore[type-arg]
    """Interpret ``buffer`` as consecutive 4-byte little-endian float32 values.

    Raises:
        CodecError: If the buffer length is not a multiple of 4.
    """
    if len(buffer) % FLOAT32_LE.itemsize != 0:
        raise CodecError(
            f"Tensor buffer length {len(buffer)} is not a multiple of "
            f"{FLOAT32_LE.itemsize}"
        )
    # frombuffer returns a read-only view; astype hands back an owned native array
    return np.frombuffer(buffer, dtype=FLOAT32_LE).astype(np.float32)


def floats_to_bytes(values: Sequence[float] | np.ndarray) -> bytes:  # type: ignore[type-arg]
    """Serialize ``values`` (flattened in row-major order) as little-endian float32."""
    return np.asarray(values, dtype=FLOAT32_LE).tobytes(order="C")
