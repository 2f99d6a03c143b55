"""Typed failures raised by the classification pipeline.

Errors fall into two families so callers can pick a retry policy:
``ClientInputError`` (malformed input, resubmitting the same request will
fail again) and ``EngineError`` (the engine or its environment misbehaved).
File reads surface the built-in ``OSError`` unchanged.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for every failure raised by the pipeline."""


class ClientInputError(PipelineError):
    """The request, image, or tensor supplied by the caller is malformed."""


class EngineError(PipelineError):
    """The inference engine returned something the pipeline cannot use."""


class DecodeError(ClientInputError):
    """Malformed base64 payload or undecodable image bytes."""


class ShapeError(ClientInputError):
    """Invalid target tensor dimensions."""


class CodecError(EngineError):
    """Tensor byte buffer length does not match its float32 element count.

    The only runtime source of tensor bytes the pipeline decodes is the
    engine output, so this is reported as an engine failure.
    """


class MalformedRequestError(ClientInputError):
    """Request envelope is not valid JSON or misses a required field."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class LabelLookupError(ClientInputError, LookupError):
    """Class index has no entry in the label table.

    Signals that the label file and the model disagree on the class count.
    """

    def __init__(self, index: int, count: int) -> None:
        super().__init__(
            f"Class index {index} out of range for label table of size {count}"
        )
        self.index = index
        self.count = count


class OutputNotFoundError(EngineError):
    """Engine result does not contain the expected named output tensor."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            f"Output tensor {name!r} not found in engine result "
            f"(available: {available})"
        )
        self.name = name
        self.available = available


class GraphLoadError(EngineError):
    """The engine could not build a graph from the model bytes."""


class ComputeError(EngineError):
    """The engine failed while executing the graph."""
