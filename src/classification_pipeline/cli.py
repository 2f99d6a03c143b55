"""Command-line entry point: classify one image with an ONNX model.

Usage::

    # Image file on disk
    classify-image --model squeezenet.onnx --labels labels.txt --image dog.jpg

    # Base64 payload or data URL
    classify-image --model squeezenet.onnx --labels labels.txt \\
        --base64 "data:image/jpeg;base64,/9j/4AAQ..."

    # Full request envelope, JSON response on stdout
    classify-image --request event.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from rich.console import Console
from rich.table import Table

from classification_pipeline.config import PipelineConfig, PreprocessConfig
from classification_pipeline.errors import ClientInputError, PipelineError
from classification_pipeline.inference.engine import InferenceEngine
from classification_pipeline.inference.onnx_engine import OnnxRuntimeEngine
from classification_pipeline.inference.pipeline import ClassificationPipeline
from classification_pipeline.inference.postprocess import format_predictions
from classification_pipeline.io.envelope import dump_response, parse_request
from classification_pipeline.io.labels import LabelTable
from classification_pipeline.io.sources import (
    Base64ImageSource,
    FileImageSource,
    ImageSource,
    read_bytes,
)
from classification_pipeline.schemas.annotation import ClassificationPrediction
from classification_pipeline.schemas.request import ClassificationResponse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify an image with an ONNX model and print the top-K labels"
    )
    parser.add_argument(
        "--request",
        type=Path,
        default=None,
        help="JSON request envelope with model_path, labels_path and input",
    )
    parser.add_argument("--model", type=Path, default=None, help="ONNX model file")
    parser.add_argument(
        "--labels",
        type=Path,
        default=None,
        help="Label file, one class name per line",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--image", type=Path, default=None, help="Image file")
    source.add_argument(
        "--base64",
        type=str,
        default=None,
        help="Base64 image payload, optionally a data URL",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=3,
        help="Number of predictions to report (default: 3)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=224,
        help="Square input size expected by the model (default: 224)",
    )
    parser.add_argument(
        "--input-name",
        type=str,
        default="data",
        help="Model input tensor name (default: data)",
    )
    parser.add_argument(
        "--output-name",
        type=str,
        default="squeezenet0_flatten0_reshape0",
        help="Model output tensor name",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the response envelope as JSON instead of a table",
    )
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser


def print_predictions(
    predictions: list[ClassificationPrediction], console: Console
) -> None:
    table = Table(title="Top Predictions")
    table.add_column("Rank", justify="right")
    table.add_column("Class", justify="right")
    table.add_column("Label")
    table.add_column("Probability", justify="right")
    for rank, pred in enumerate(predictions, start=1):
        table.add_row(
            str(rank), str(pred.class_id), pred.label, f"{pred.confidence:.5f}"
        )
    console.print(table)


def _run(
    args: argparse.Namespace, pipeline: ClassificationPipeline
) -> ClassificationResponse:
    if args.request is not None:
        request = parse_request(read_bytes(str(args.request)))
        return pipeline.handle_request(request)

    source: ImageSource
    if args.image is not None:
        source = FileImageSource(args.image)
    else:
        source = Base64ImageSource(args.base64)

    graph = pipeline.load_graph(read_bytes(str(args.model)))
    labels = LabelTable.from_file(args.labels)
    session = pipeline.session(graph, labels)
    predictions = session.predict(source)
    return ClassificationResponse(
        output=format_predictions(predictions),
        predictions=predictions,
    )


def main(argv: list[str] | None = None, engine: InferenceEngine | None = None) -> int:
    """Run the CLI.  Returns a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.request is None:
        if args.model is None or args.labels is None:
            parser.error("--model and --labels are required without --request")
        if args.image is None and args.base64 is None:
            parser.error("one of --image, --base64 or --request is required")
    if args.top_k < 1 or args.size < 1:
        parser.error("--top-k and --size must be positive")

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    if engine is None:
        engine = OnnxRuntimeEngine()

    config = PipelineConfig(
        preprocess=PreprocessConfig(height=args.size, width=args.size),
        input_name=args.input_name,
        output_name=args.output_name,
        top_k=args.top_k,
    )
    pipeline = ClassificationPipeline(engine, config)

    try:
        response = _run(args, pipeline)
    except ClientInputError as e:
        logger.error(f"Invalid input: {e}")
        return 2
    except (PipelineError, OSError) as e:
        logger.error(f"Classification failed: {e}")
        return 1

    if args.json:
        sys.stdout.write(dump_response(response).decode() + "\n")
    else:
        print_predictions(response.predictions, Console())
    return 0


if __name__ == "__main__":
    sys.exit(main())
