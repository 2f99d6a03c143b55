"""End-to-end classification: image bytes -> engine -> ranked labels."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from classification_pipeline.config import PipelineConfig
from classification_pipeline.inference.base import BaseClassificationInferencer
from classification_pipeline.inference.engine import Graph, InferenceEngine, find_output
from classification_pipeline.inference.postprocess import format_predictions, interpret
from classification_pipeline.io.decoder import decode_pixel_grid
from classification_pipeline.io.envelope import dump_response, parse_request
from classification_pipeline.io.labels import LabelTable
from classification_pipeline.io.sources import (
    Base64ImageSource,
    ByteReader,
    FileImageSource,
    ImageSource,
    read_bytes,
)
from classification_pipeline.schemas.annotation import ClassificationPrediction
from classification_pipeline.schemas.request import (
    ClassificationRequest,
    ClassificationResponse,
)
from classification_pipeline.transforms.normalization import ImageTensorEncoder


class ClassificationPipeline:
    """Pre/post-processing around an injected inference engine.

    The pipeline holds no per-request state: every call decodes, encodes
    and interprets into buffers it owns, so one instance can serve
    independent requests.  Graphs and label tables are passed in
    explicitly, either per call or bound once via :meth:`session`.

    Args:
        engine: Inference engine used to load model bytes into graphs.
        config: Tensor names, preprocessing and top-K settings.
    """

    def __init__(
        self,
        engine: InferenceEngine,
        config: PipelineConfig | None = None,
    ) -> None:
        self.engine = engine
        self.config = config or PipelineConfig()
        self.encoder = ImageTensorEncoder(self.config.preprocess)

    def load_graph(self, model_bytes: bytes) -> Graph:
        logger.info(f"Loaded model bytes: {len(model_bytes)}")
        graph = self.engine.load(model_bytes, self.config.encoding, self.config.target)
        logger.debug(
            f"Graph loaded ({self.config.encoding.value} on {self.config.target.value})"
        )
        return graph

    def predict(
        self, source: ImageSource, graph: Graph, labels: LabelTable
    ) -> list[ClassificationPrediction]:
        """Classify one image and return the top-K predictions."""
        grid = decode_pixel_grid(source.read())
        tensor = self.encoder(grid)

        context = graph.init_execution_context()
        outputs = context.compute([(self.config.input_name, tensor)])
        output = find_output(outputs, self.config.output_name)
        logger.debug(f"Output {self.config.output_name!r} {output.dimensions}")

        return interpret(output, labels, self.config.top_k)

    def classify(self, source: ImageSource, graph: Graph, labels: LabelTable) -> str:
        """Classify one image and return the formatted top-K string."""
        return format_predictions(self.predict(source, graph, labels))

    def classify_base64(self, payload: str, graph: Graph, labels: LabelTable) -> str:
        return self.classify(Base64ImageSource(payload), graph, labels)

    def classify_file(
        self,
        path: str | Path,
        graph: Graph,
        labels: LabelTable,
        reader: ByteReader = read_bytes,
    ) -> str:
        return self.classify(FileImageSource(path, reader), graph, labels)

    def session(self, graph: Graph, labels: LabelTable) -> ClassifierSession:
        """Bind a loaded graph and label table into a reusable handle."""
        return ClassifierSession(self, graph, labels)

    def handle_request(
        self,
        request: ClassificationRequest,
        reader: ByteReader = read_bytes,
    ) -> ClassificationResponse:
        """Serve one request: read model and labels, classify ``request.input``.

        File reads go through ``reader``; its ``OSError`` propagates unchanged.
        """
        graph = self.load_graph(reader(request.model_path))
        labels = LabelTable.from_bytes(reader(request.labels_path))
        logger.info(f"Loaded {labels.count()} labels")

        predictions = self.predict(Base64ImageSource(request.input), graph, labels)
        return ClassificationResponse(
            output=format_predictions(predictions),
            predictions=predictions,
        )

    def handle_event(self, raw: str | bytes, reader: ByteReader = read_bytes) -> bytes:
        """JSON event in, JSON response out."""
        return dump_response(self.handle_request(parse_request(raw), reader))


class ClassifierSession(BaseClassificationInferencer):
    """A pipeline bound to one loaded graph and its label table."""

    def __init__(
        self,
        pipeline: ClassificationPipeline,
        graph: Graph,
        labels: LabelTable,
    ) -> None:
        self.pipeline = pipeline
        self.graph = graph
        self.labels = labels

    def predict(self, source: ImageSource) -> list[ClassificationPrediction]:
        return self.pipeline.predict(source, self.graph, self.labels)

    def classify(self, source: ImageSource) -> str:
        return format_predictions(self.predict(source))
