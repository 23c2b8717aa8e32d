"""Trace stream reading: sources, decompression and tokenization."""

from .decompression import Compression, detect_compression, open_decompressed
from .sources import ResourceResolver, TraceSource
from .stream import ReaderStats, TraceRecord, TraceStreamReader

__all__ = [
    "Compression",
    "detect_compression",
    "open_decompressed",
    "ResourceResolver",
    "TraceSource",
    "ReaderStats",
    "TraceRecord",
    "TraceStreamReader",
]
