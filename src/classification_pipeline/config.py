"""Pydantic frozen configuration models for classification_pipeline."""

from pydantic import BaseModel, Field, field_validator

from classification_pipeline.schemas.graph import ExecutionTarget, GraphEncoding

IMAGENET_MEAN = (0.485, 0.456, 0.406)
IMAGENET_STD = (0.229, 0.224, 0.225)


class PreprocessConfig(BaseModel, frozen=True):
    """Target size and per-channel normalization for the input tensor.

    ``mean`` and ``std`` are indexed by channel in R, G, B order.  Zero
    target dimensions are accepted here and rejected by the encoder with
    ``ShapeError``, so a bad size is reported where the tensor is built.
    """

    height: int = 224
    width: int = 224
    mean: tuple[float, float, float] = IMAGENET_MEAN
    std: tuple[float, float, float] = IMAGENET_STD

    @field_validator("std")
    @classmethod
    def _std_nonzero(cls, v: tuple[float, float, float]) -> tuple[float, float, float]:
        if any(s == 0.0 for s in v):
            raise ValueError(f"std entries must be non-zero, got {v}")
        return v


class PipelineConfig(BaseModel, frozen=True):
    """Configuration for ClassificationPipeline.

    Validated at construction and frozen afterwards, so one instance can be
    shared by every request the pipeline serves.
    """

    preprocess: PreprocessConfig = Field(default_factory=PreprocessConfig)
    input_name: str = "data"
    output_name: str = "squeezenet0_flatten0_reshape0"
    top_k: int = Field(default=3, ge=1)
    encoding: GraphEncoding = GraphEncoding.ONNX
    target: ExecutionTarget = ExecutionTarget.CPU
