"""Graph encoding and execution target identifiers for the engine boundary."""

from __future__ import annotations

from enum import Enum


class GraphEncoding(str, Enum):
    """Serialization format of the model bytes handed to the engine."""

    ONNX = "onnx"
    OPENVINO = "openvino"
    PYTORCH = "pytorch"
    TENSORFLOW = "tensorflow"
    TENSORFLOWLITE = "tensorflowlite"


class ExecutionTarget(str, Enum):
    """Device class the engine should execute the graph on."""

    CPU = "cpu"
    GPU = "gpu"
    TPU = "tpu"
