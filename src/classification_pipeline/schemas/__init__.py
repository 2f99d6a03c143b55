"""Pipeline value types: tensors, predictions and request envelopes."""

from classification_pipeline.schemas.annotation import ClassificationPrediction
from classification_pipeline.schemas.graph import ExecutionTarget, GraphEncoding
from classification_pipeline.schemas.request import (
    ClassificationRequest,
    ClassificationResponse,
)
from classification_pipeline.schemas.tensor import Tensor, TensorType

__all__ = [
    "ClassificationPrediction",
    "ClassificationRequest",
    "ClassificationResponse",
    "ExecutionTarget",
    "GraphEncoding",
    "Tensor",
    "TensorType",
]
