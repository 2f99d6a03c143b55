"""Shared pytest fixtures for classification_pipeline tests."""

from __future__ import annotations

import base64
import io
from collections.abc import Callable

import numpy as np
import pytest
from PIL import Image

from classification_pipeline.inference.engine import NamedTensor
from classification_pipeline.io.labels import LabelTable
from classification_pipeline.schemas.graph import ExecutionTarget, GraphEncoding
from classification_pipeline.schemas.tensor import Tensor

OUTPUT_NAME = "squeezenet0_flatten0_reshape0"


class FakeContext:
    """Execution context that records its inputs and returns canned outputs."""

    def __init__(self, outputs: list[NamedTensor]) -> None:
        self.outputs = outputs
        self.inputs: list[NamedTensor] | None = None

    def compute(self, inputs: list[NamedTensor]) -> list[NamedTensor]:
        self.inputs = inputs
        return self.outputs


class FakeGraph:
    def __init__(self, outputs: list[NamedTensor]) -> None:
        self.outputs = outputs
        self.contexts: list[FakeContext] = []

    def init_execution_context(self) -> FakeContext:
        ctx = FakeContext(self.outputs)
        self.contexts.append(ctx)
        return ctx


class FakeEngine:
    """Engine whose graphs always emit ``logits`` as a (1, C, 1, 1) tensor."""

    def __init__(self, logits: list[float], output_name: str = OUTPUT_NAME) -> None:
        array = np.asarray(logits, dtype=np.float32).reshape(1, -1, 1, 1)
        self.outputs: list[NamedTensor] = [(output_name, Tensor.from_array(array))]
        self.loaded: list[tuple[bytes, GraphEncoding, ExecutionTarget]] = []
        self.graphs: list[FakeGraph] = []

    def load(
        self,
        model_bytes: bytes,
        encoding: GraphEncoding,
        target: ExecutionTarget,
    ) -> FakeGraph:
        self.loaded.append((model_bytes, encoding, target))
        graph = FakeGraph(self.outputs)
        self.graphs.append(graph)
        return graph


def _png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def encode_png() -> Callable[[Image.Image], bytes]:
    return _png_bytes


@pytest.fixture()
def make_engine() -> Callable[..., FakeEngine]:
    return FakeEngine


@pytest.fixture()
def abc_labels() -> LabelTable:
    return LabelTable(["a", "b", "c"])


@pytest.fixture()
def white_png() -> bytes:
    """1x1 pure white PNG."""
    return _png_bytes(Image.new("RGB", (1, 1), color=(255, 255, 255)))


@pytest.fixture()
def white_data_url(white_png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(white_png).decode()


@pytest.fixture()
def rgb_image() -> Image.Image:
    """64x48 RGB test image with non-uniform content."""
    rng = np.random.default_rng(0)
    return Image.fromarray(rng.integers(0, 256, (48, 64, 3), dtype=np.uint8))
