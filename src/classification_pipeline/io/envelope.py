"""JSON request/response envelopes using orjson."""

from __future__ import annotations

import orjson
from pydantic import ValidationError

from classification_pipeline.errors import MalformedRequestError
from classification_pipeline.schemas.request import (
    ClassificationRequest,
    ClassificationResponse,
)


def parse_request(raw: str | bytes) -> ClassificationRequest:
    """Parse a classification event body.

    Raises:
        MalformedRequestError: If the body is not a JSON object or any of
            ``model_path``, ``labels_path``, ``input`` is missing or not a
            string.  ``fields`` lists the offending field names.
    """
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedRequestError(f"Request is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedRequestError(
            f"Request must be a JSON object, got {type(payload).__name__}"
        )

    try:
        return ClassificationRequest.model_validate(payload)
    except ValidationError as e:
        fields = tuple(
            ".".join(str(p) for p in err["loc"]) for err in e.errors()
        )
        raise MalformedRequestError(
            f"Invalid request field(s): {', '.join(fields)}", fields=fields
        ) from e


def dump_response(response: ClassificationResponse) -> bytes:
    """Serialize a response envelope to JSON bytes."""
    return orjson.dumps(response.model_dump())
