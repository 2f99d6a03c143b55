"""Byte sources feeding encoded images into the pipeline.

The pipeline core only needs ``read() -> bytes``; base64 requests and
file-path requests are thin adapters over that single interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from classification_pipeline.io.decoder import decode_base64

ByteReader = Callable[[str], bytes]


def read_bytes(path: str) -> bytes:
    """Default file reader.  Propagates ``OSError`` if the file is unreadable."""
    return Path(path).read_bytes()


class ImageSource(ABC):
    """Something that yields encoded image bytes."""

    @abstractmethod
    def read(self) -> bytes:
        """Return the encoded image bytes."""


class BytesImageSource(ImageSource):
    """Encoded image bytes already held in memory."""

    def __init__(self, data: bytes) -> None:
        self.data = data

    def read(self) -> bytes:
        return self.data


class Base64ImageSource(ImageSource):
    """Base64 payload, optionally wrapped in a ``data:`` URL."""

    def __init__(self, payload: str) -> None:
        self.payload = payload

    def read(self) -> bytes:
        return decode_base64(self.payload)


class FileImageSource(ImageSource):
    """Image file on disk, read through an injectable reader."""

    def __init__(self, path: str | Path, reader: ByteReader = read_bytes) -> None:
        self.path = str(path)
        self.reader = reader

    def read(self) -> bytes:
        return self.reader(self.path)
