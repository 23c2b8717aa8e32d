"""Streaming reader that turns a trace resource into tokenized records."""

import io
import logging
from collections.abc import Iterator
from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO

from swf_workload.config import DEFAULT_COMMENT_MARKER
from swf_workload.errors import InvalidConfiguration, MalformedArchive

from .decompression import DECODE_ERRORS, Compression, open_decompressed
from .sources import TraceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceRecord:
    """Whitespace-delimited fields of one data line.

    Attributes:
        line_no: 1-based physical line number in the (decompressed) trace
        fields: Ordered field values
    """

    line_no: int
    fields: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, index: int) -> str:
        return self.fields[index]


@dataclass
class ReaderStats:
    """Counters updated as lines are consumed."""

    lines_read: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    records: int = 0


class TraceStreamReader:
    """Lazy, single-pass reader over a (possibly compressed) trace.

    The reader owns the stream it is given: the stream and every
    decompression layer are closed when iteration finishes, fails or is
    abandoned, or when the reader is used as a context manager and exits.

    Example:
        with TraceStreamReader.open(TraceSource.from_path("trace.swf.gz")) as reader:
            for record in reader:
                print(record.fields)
    """

    def __init__(
        self,
        stream: BinaryIO,
        name: str | None = None,
        comment_marker: str = DEFAULT_COMMENT_MARKER,
    ):
        """Open the decompression and text layers over a binary stream.

        Args:
            stream: Binary stream positioned at the start of the trace
            name: Resource name, used to choose the decompression strategy
            comment_marker: Leading character of lines to skip

        Raises:
            InvalidConfiguration: If comment_marker is not a single visible character
            MalformedArchive: If the stream's container cannot be decoded
        """
        self.name = name or "<stream>"
        self.comment_marker = comment_marker
        self.stats = ReaderStats()
        self._consumed = False
        self._stack = ExitStack()
        self._stack.callback(stream.close)

        try:
            if len(comment_marker) != 1 or comment_marker.isspace():
                raise InvalidConfiguration(
                    f"comment_marker must be a single non-whitespace character, "
                    f"got {comment_marker!r}"
                )
            binary, self.compression = open_decompressed(stream, name, self._stack)
            self._text = self._stack.enter_context(
                io.TextIOWrapper(binary, encoding="utf-8", errors="replace")
            )
        except BaseException:
            self._stack.close()
            raise

        logger.info(f"Opened trace '{self.name}' ({self.compression.value})")

    @classmethod
    def open(
        cls, source: TraceSource, comment_marker: str = DEFAULT_COMMENT_MARKER
    ) -> "TraceStreamReader":
        """Open a reader over a named source.

        Raises:
            SourceUnavailable: If the source cannot be opened
            MalformedArchive: If the source's container cannot be decoded
        """
        return cls(source.open(), name=source.name, comment_marker=comment_marker)

    @staticmethod
    def tokenize(line: str) -> tuple[str, ...]:
        """Split a line on runs of whitespace."""
        return tuple(line.split())

    def lines(self) -> Iterator[str]:
        """Iterate over retained (non-blank, non-comment) lines.

        Raises:
            RuntimeError: If the reader was already iterated
        """
        return (text for _, text in self._numbered_lines())

    def __iter__(self) -> Iterator[TraceRecord]:
        """Iterate over tokenized records of retained lines."""
        return self._records()

    def _records(self) -> Iterator[TraceRecord]:
        for line_no, text in self._numbered_lines():
            self.stats.records += 1
            yield TraceRecord(line_no=line_no, fields=self.tokenize(text))

    def _numbered_lines(self) -> Iterator[tuple[int, str]]:
        if self._consumed:
            raise RuntimeError(f"Trace '{self.name}' was already read; reopen the source")
        self._consumed = True
        return self._read()

    def _read(self) -> Iterator[tuple[int, str]]:
        try:
            for line_no, line in enumerate(self._text, start=1):
                self.stats.lines_read += 1
                text = line.strip()
                if not text:
                    self.stats.blank_lines += 1
                    continue
                if text.startswith(self.comment_marker):
                    self.stats.comment_lines += 1
                    continue
                yield line_no, text
        except DECODE_ERRORS as e:
            raise MalformedArchive(
                f"Failed to decode '{self.name}' ({self.compression.value}) "
                f"after {self.stats.lines_read} lines: {e}"
            ) from e
        finally:
            self.close()

    def close(self) -> None:
        """Close the text, decompression and underlying streams."""
        self._stack.close()

    @property
    def closed(self) -> bool:
        """Check whether the underlying text stream is closed."""
        return self._text.closed

    def __enter__(self) -> "TraceStreamReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["TraceStreamReader", "TraceRecord", "ReaderStats", "Compression"]
