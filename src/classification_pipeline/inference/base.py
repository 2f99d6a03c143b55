"""Abstract base class for classification inferencers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from classification_pipeline.io.sources import ImageSource
from classification_pipeline.schemas.annotation import ClassificationPrediction


class BaseClassificationInferencer(ABC):
    """Base class for classification inferencers.

    Subclasses implement ``predict`` for a single image and return
    predictions sorted by descending confidence.
    """

    @abstractmethod
    def predict(self, source: ImageSource) -> list[ClassificationPrediction]:
        """Run inference on a single image.

        Returns predictions sorted by confidence descending.
        """
