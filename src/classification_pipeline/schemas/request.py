"""Request and response envelopes exchanged with the host runtime."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from classification_pipeline.schemas.annotation import ClassificationPrediction


class ClassificationRequest(BaseModel):
    """Incoming classification event.

    ``input`` is a base64 payload, optionally wrapped in a data URL.  All
    three fields are required strings; no coercion from other JSON types.
    """

    model_config = ConfigDict(strict=True, frozen=True, protected_namespaces=())

    model_path: str
    labels_path: str
    input: str


class ClassificationResponse(BaseModel, frozen=True):
    """Result of a classification event.

    ``output`` is the ``", "``-joined top-K string consumed downstream as text;
    ``predictions`` carries the same ranking in structured form.
    """

    output: str
    predictions: list[ClassificationPrediction] = []
