"""Inference engine boundary.

The engine is an external collaborator: it loads model bytes into a graph,
hands out execution contexts, and maps named input tensors to named output
tensors.  The pipeline only depends on these structural interfaces; handles
are passed in explicitly, never held as process-wide singletons.
"""

from __future__ import annotations

from typing import Protocol

from classification_pipeline.errors import OutputNotFoundError
from classification_pipeline.schemas.graph import ExecutionTarget, GraphEncoding
from classification_pipeline.schemas.tensor import Tensor

NamedTensor = tuple[str, Tensor]


class ExecutionContext(Protocol):
    def compute(self, inputs: list[NamedTensor]) -> list[NamedTensor]:
        """Run the graph on named input tensors, returning named outputs."""
        ...


class Graph(Protocol):
    def init_execution_context(self) -> ExecutionContext:
        """Create a fresh execution context for one request."""
        ...


class InferenceEngine(Protocol):
    def load(
        self,
        model_bytes: bytes,
        encoding: GraphEncoding,
        target: ExecutionTarget,
    ) -> Graph:
        """Load serialized model bytes into an executable graph."""
        ...


def find_output(outputs: list[NamedTensor], name: str) -> Tensor:
    """Return the output tensor called ``name``.

    Raises:
        OutputNotFoundError: If no output carries that name.
    """
    for output_name, tensor in outputs:
        if output_name == name:
            return tensor
    raise OutputNotFoundError(name, [n for n, _ in outputs])
