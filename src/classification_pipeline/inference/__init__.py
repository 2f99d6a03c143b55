"""Classification inference framework."""

from classification_pipeline.inference.base import BaseClassificationInferencer
from classification_pipeline.inference.engine import (
    ExecutionContext,
    Graph,
    InferenceEngine,
    find_output,
)
from classification_pipeline.inference.onnx_engine import OnnxRuntimeEngine
from classification_pipeline.inference.pipeline import (
    ClassificationPipeline,
    ClassifierSession,
)
from classification_pipeline.inference.postprocess import (
    format_predictions,
    interpret,
    softmax,
)

__all__ = [
    "BaseClassificationInferencer",
    "ClassificationPipeline",
    "ClassifierSession",
    "ExecutionContext",
    "Graph",
    "InferenceEngine",
    "OnnxRuntimeEngine",
    "find_output",
    "format_predictions",
    "interpret",
    "softmax",
]
