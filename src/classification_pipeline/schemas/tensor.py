"""Tensor value exchanged with the inference engine."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np
from pydantic import BaseModel, model_validator

from classification_pipeline.codec import (
    bytes_to_floats,
    floats_to_bytes,
)
from classification_pipeline.errors import CodecError


def _check_length(dimensions: tuple[int, ...], data: bytes) -> None:
    expected = math.prod(dimensions) * 4
    if len(data) != expected:
        raise CodecError(
            f"Tensor data has {len(data)} bytes, expected {expected} "
            f"for dimensions {tuple(dimensions)}"
        )


class TensorType(str, Enum):
    FP32 = "fp32"


class Tensor(BaseModel, frozen=True):
    """Flat little-endian float32 buffer plus its NCHW dimensions.

    ``data`` always holds exactly ``prod(dimensions) * 4`` bytes; any other
    length raises ``CodecError`` at construction.
    """

    dimensions: tuple[int, ...]
    tensor_type: TensorType = TensorType.FP32
    data: bytes

    @model_validator(mode="after")
    def _data_matches_dimensions(self) -> "Tensor":
        _check_length(self.dimensions, self.data)
        return self

    @property
    def element_count(self) -> int:
        return math.prod(self.dimensions)

    @classmethod
    def from_bytes(cls, dimensions: tuple[int, ...], data: bytes) -> "Tensor":
        """Build a tensor from raw little-endian float32 bytes.

        Raises:
            CodecError: If ``data`` does not hold ``prod(dimensions)`` floats.
        """
        _check_length(dimensions, data)
        return cls(dimensions=tuple(dimensions), data=data)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Tensor":  # type: ignore[type-arg]
        """Build a tensor from an array, keeping its shape as the dimensions."""
        return cls.from_bytes(tuple(array.shape), floats_to_bytes(array))

    def to_array(self) -> np.ndarray:  # type: ignore[type-arg]
        """Decode the buffer into a float32 array shaped by ``dimensions``."""
        return bytes_to_floats(self.data).reshape(self.dimensions)
