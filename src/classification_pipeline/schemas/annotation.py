"""Ranked classification prediction schema."""

from __future__ import annotations

from pydantic import BaseModel

PROBABILITY_DECIMALS = 5


class ClassificationPrediction(BaseModel, frozen=True):
    """A single ranked prediction: class index, its label and probability."""

    class_id: int
    label: str
    confidence: float

    def format(self) -> str:
        """Render as ``"<label>: <confidence>"`` with 5 decimal places."""
        return f"{self.label}: {self.confidence:.{PROBABILITY_DECIMALS}f}"
