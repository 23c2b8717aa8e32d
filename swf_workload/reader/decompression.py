"""Compression strategies for trace streams.

A trace may be raw text, gzip-compressed text or a zip archive holding the
text as its first entry. The strategy is chosen from the name suffix and,
when the suffix says nothing, from the leading bytes of the stream.
"""

import gzip
import io
import logging
import zipfile
import zlib
from collections.abc import Callable
from contextlib import ExitStack
from enum import Enum
from pathlib import PurePath
from typing import BinaryIO

from swf_workload.errors import MalformedArchive

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
ZIP_MAGIC = b"PK\x03\x04"

# Errors raised by the decompression layers while reading, after a successful open
DECODE_ERRORS = (gzip.BadGzipFile, zipfile.BadZipFile, zlib.error, EOFError)


class Compression(str, Enum):
    """Container format of a trace stream."""

    RAW = "raw"
    GZIP = "gzip"
    ZIP = "zip"


SUFFIX_COMPRESSION: dict[str, Compression] = {
    ".gz": Compression.GZIP,
    ".zip": Compression.ZIP,
}


def _peekable(stream: BinaryIO) -> BinaryIO:
    if hasattr(stream, "peek"):
        return stream
    return io.BufferedReader(stream)  # type: ignore[arg-type]


def detect_compression(name: str | None, stream: BinaryIO) -> Compression:
    """Choose the decompression strategy for a stream.

    Args:
        name: Resource name hint (may be None)
        stream: Peekable binary stream; no bytes are consumed

    Returns:
        Detected Compression
    """
    suffix = PurePath(name).suffix.lower() if name else ""
    if suffix in SUFFIX_COMPRESSION:
        return SUFFIX_COMPRESSION[suffix]

    head = stream.peek(len(ZIP_MAGIC))[: len(ZIP_MAGIC)]  # type: ignore[attr-defined]
    if head.startswith(GZIP_MAGIC):
        return Compression.GZIP
    if head.startswith(ZIP_MAGIC):
        return Compression.ZIP
    return Compression.RAW


def _open_raw(stream: BinaryIO, name: str, stack: ExitStack) -> BinaryIO:
    return stream


def _open_gzip(stream: BinaryIO, name: str, stack: ExitStack) -> BinaryIO:
    head = stream.peek(len(GZIP_MAGIC))[: len(GZIP_MAGIC)]  # type: ignore[attr-defined]
    if head != GZIP_MAGIC:
        raise MalformedArchive(f"'{name}' is not a gzip stream")
    return stack.enter_context(gzip.GzipFile(fileobj=stream, mode="rb"))


def _open_zip(stream: BinaryIO, name: str, stack: ExitStack) -> BinaryIO:
    if not stream.seekable():
        stream = io.BytesIO(stream.read())

    try:
        archive = stack.enter_context(zipfile.ZipFile(stream))
    except zipfile.BadZipFile as e:
        raise MalformedArchive(f"'{name}' is not a valid zip archive: {e}") from e

    entries = [info for info in archive.infolist() if not info.is_dir()]
    if not entries:
        raise MalformedArchive(f"Zip archive '{name}' contains no entries")
    if len(entries) > 1:
        logger.warning(
            f"Zip archive '{name}' contains {len(entries)} entries, reading only "
            f"'{entries[0].filename}'"
        )

    try:
        return stack.enter_context(archive.open(entries[0]))
    except (zipfile.BadZipFile, NotImplementedError) as e:
        raise MalformedArchive(f"Cannot read '{entries[0].filename}' from '{name}': {e}") from e


STRATEGIES: dict[Compression, Callable[[BinaryIO, str, ExitStack], BinaryIO]] = {
    Compression.RAW: _open_raw,
    Compression.GZIP: _open_gzip,
    Compression.ZIP: _open_zip,
}


def open_decompressed(
    stream: BinaryIO, name: str | None, stack: ExitStack
) -> tuple[BinaryIO, Compression]:
    """Wrap a binary stream with the decompression layer it needs.

    Layers opened here are registered on ``stack`` so the caller closes them
    together with the underlying stream.

    Args:
        stream: Binary stream positioned at the start of the resource
        name: Resource name hint
        stack: ExitStack owning the opened layers

    Returns:
        Tuple of (decompressed binary stream, detected compression)

    Raises:
        MalformedArchive: If the container cannot be decoded
    """
    stream = _peekable(stream)
    compression = detect_compression(name, stream)
    label = name or "<stream>"
    logger.debug(f"Opening '{label}' as {compression.value}")
    return STRATEGIES[compression](stream, label, stack), compression
