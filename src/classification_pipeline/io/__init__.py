"""Input decoding, label tables and JSON envelopes."""

from classification_pipeline.io.decoder import (
    decode_base64,
    decode_image,
    decode_pixel_grid,
    strip_data_url,
)
from classification_pipeline.io.envelope import dump_response, parse_request
from classification_pipeline.io.labels import LabelTable
from classification_pipeline.io.sources import (
    Base64ImageSource,
    BytesImageSource,
    FileImageSource,
    ImageSource,
    read_bytes,
)

__all__ = [
    "Base64ImageSource",
    "BytesImageSource",
    "FileImageSource",
    "ImageSource",
    "LabelTable",
    "decode_base64",
    "decode_image",
    "decode_pixel_grid",
    "dump_response",
    "parse_request",
    "read_bytes",
    "strip_data_url",
]
