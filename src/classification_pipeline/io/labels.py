"""Ordered class-name table loaded from a newline-separated label file."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from classification_pipeline.errors import DecodeError, LabelLookupError


class LabelTable:
    """Immutable, index-addressable list of class names.

    ``get(i)`` is the human-readable name of class index ``i``.  The table
    length must match the model's class count; a mismatch shows up as a
    ``LabelLookupError`` when a prediction lands past the end.
    """

    def __init__(self, labels: list[str] | tuple[str, ...]) -> None:
        self._labels: tuple[str, ...] = tuple(labels)

    @classmethod
    def from_text(cls, text: str) -> LabelTable:
        """Parse one label per line.

        ``\\n`` and ``\\r\\n`` line endings are both accepted.  Trailing blank
        lines are dropped; blank lines in the middle are kept because a
        label's position is its class index.
        """
        lines = [line.rstrip("\r") for line in text.split("\n")]
        while lines and not lines[-1]:
            lines.pop()
        return cls(lines)

    @classmethod
    def from_bytes(cls, data: bytes) -> LabelTable:
        """Parse a UTF-8 encoded label file body."""
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Label file is not valid UTF-8: {e}") from e
        return cls.from_text(text)

    @classmethod
    def from_file(cls, path: str | Path) -> LabelTable:
        table = cls.from_bytes(Path(path).read_bytes())
        logger.info(f"Loaded {table.count()} labels from {path}")
        return table

    def count(self) -> int:
        return len(self._labels)

    def get(self, index: int) -> str:
        """Return the label for ``index``.

        Raises:
            LabelLookupError: If ``index`` is outside ``[0, count())``.
        """
        if not 0 <= index < len(self._labels):
            raise LabelLookupError(index, len(self._labels))
        return self._labels[index]

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __repr__(self) -> str:
        return f"LabelTable(count={len(self._labels)})"
