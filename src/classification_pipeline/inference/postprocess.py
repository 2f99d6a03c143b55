"""Turn raw output logits into a ranked, labelled top-K prediction list."""

from __future__ import annotations

import numpy as np
from loguru import logger

from classification_pipeline.codec import bytes_to_floats
from classification_pipeline.errors import ShapeError
from classification_pipeline.io.labels import LabelTable
from classification_pipeline.schemas.annotation import ClassificationPrediction
from classification_pipeline.schemas.tensor import Tensor


def logits_from_tensor(tensor: Tensor) -> np.ndarray:  # type: ignore[type-arg]
    """Flatten a ``(1, C, 1, 1)`` output tensor into its length-C logit vector.

    Any shape with at most one non-singleton axis is accepted, so ``(1, C)``
    and ``(C,)`` outputs work too.
    """
    non_singleton = [d for d in tensor.dimensions if d != 1]
    if len(non_singleton) > 1:
        raise ShapeError(
            f"Expected a single class axis in output tensor, got {tensor.dimensions}"
        )
    return bytes_to_floats(tensor.data)


def softmax(logits: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
    """Softmax over a 1-D logit vector.

    The maximum logit is subtracted before ``exp`` so very large logits do
    not overflow; the result is mathematically identical to the unshifted
    form.
    """
    x = np.asarray(logits, dtype=np.float64)
    if x.size == 0:
        return x
    exp = np.exp(x - x.max())
    return exp / exp.sum()


def rank(probabilities: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
    """Class indices by descending probability; equal values keep ascending index."""
    return np.argsort(-np.asarray(probabilities), kind="stable")


def top_k(
    probabilities: np.ndarray,  # type: ignore[type-arg]
    labels: LabelTable,
    k: int,
) -> list[ClassificationPrediction]:
    """Label the ``k`` most probable classes.

    Raises:
        LabelLookupError: If a selected class index has no label.
    """
    return [
        ClassificationPrediction(
            class_id=int(idx),
            label=labels.get(int(idx)),
            confidence=float(probabilities[idx]),
        )
        for idx in rank(probabilities)[:k]
    ]


def format_predictions(predictions: list[ClassificationPrediction]) -> str:
    """Join predictions as ``"<label>: <p>, <label>: <p>, ..."`` in rank order."""
    return ", ".join(p.format() for p in predictions)


def interpret(
    tensor: Tensor, labels: LabelTable, k: int
) -> list[ClassificationPrediction]:
    """Output tensor -> softmax -> ranked top-``k`` predictions."""
    logits = logits_from_tensor(tensor)
    if logits.size == 0:
        raise ShapeError(f"Output tensor {tensor.dimensions} holds no class scores")
    if logits.size != labels.count():
        logger.warning(
            f"Model produced {logits.size} classes but label table has "
            f"{labels.count()} entries"
        )
    probs = softmax(logits)
    return top_k(probs, labels, k)
