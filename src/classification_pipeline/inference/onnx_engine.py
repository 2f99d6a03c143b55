"""ONNX Runtime implementation of the inference engine boundary."""

from __future__ import annotations

import numpy as np
import onnxruntime as ort
from loguru import logger

from classification_pipeline.errors import ComputeError, GraphLoadError
from classification_pipeline.inference.engine import NamedTensor
from classification_pipeline.schemas.graph import ExecutionTarget, GraphEncoding
from classification_pipeline.schemas.tensor import Tensor


class OnnxRuntimeExecutionContext:
    """Execution context over a single ``ort.InferenceSession``."""

    def __init__(self, session: ort.InferenceSession) -> None:
        self.session = session
        self.output_names = [o.name for o in session.get_outputs()]

    def compute(self, inputs: list[NamedTensor]) -> list[NamedTensor]:
        """Run the session.  Non-numeric outputs (e.g. ZipMap maps) are dropped.

        Raises:
            ComputeError: If ONNX Runtime rejects the feeds or fails to run.
        """
        feeds = {name: tensor.to_array() for name, tensor in inputs}
        try:
            results = self.session.run(self.output_names, feeds)
        except Exception as e:  # noqa: BLE001
            raise ComputeError(f"ONNX Runtime execution failed: {e}") from e

        outputs: list[NamedTensor] = []
        for name, result in zip(self.output_names, results):
            if not isinstance(result, np.ndarray) or not np.issubdtype(
                result.dtype, np.number
            ):
                logger.debug(f"Skipping non-tensor output {name!r}")
                continue
            outputs.append((name, Tensor.from_array(result.astype(np.float32))))
        return outputs


class OnnxRuntimeGraph:
    def __init__(self, session: ort.InferenceSession) -> None:
        self.session = session

    def init_execution_context(self) -> OnnxRuntimeExecutionContext:
        return OnnxRuntimeExecutionContext(self.session)


class OnnxRuntimeEngine:
    """Load ONNX model bytes into CPU ``InferenceSession`` graphs.

    Only ``GraphEncoding.ONNX`` on ``ExecutionTarget.CPU`` is supported.
    """

    providers = ["CPUExecutionProvider"]

    def load(
        self,
        model_bytes: bytes,
        encoding: GraphEncoding = GraphEncoding.ONNX,
        target: ExecutionTarget = ExecutionTarget.CPU,
    ) -> OnnxRuntimeGraph:
        if encoding is not GraphEncoding.ONNX:
            raise GraphLoadError(f"Unsupported graph encoding: {encoding.value}")
        if target is not ExecutionTarget.CPU:
            raise GraphLoadError(f"Unsupported execution target: {target.value}")

        try:
            session = ort.InferenceSession(model_bytes, providers=self.providers)
        except Exception as e:  # noqa: BLE001
            raise GraphLoadError(f"Failed to load ONNX graph: {e}") from e

        logger.info(
            f"Graph loaded into ONNX Runtime "
            f"(inputs={[i.name for i in session.get_inputs()]}, "
            f"outputs={[o.name for o in session.get_outputs()]})"
        )
        return OnnxRuntimeGraph(session)
