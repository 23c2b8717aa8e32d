"""Named byte resources that trace readers open.

A ``TraceSource`` pairs a name (used as the decompression hint) with a
callable that opens a fresh binary stream. ``ResourceResolver`` maps logical
trace names to sources, the way workload names are mapped to directories.
"""

import io
import logging
from collections.abc import Callable
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import BinaryIO

from swf_workload.errors import InvalidConfiguration, SourceUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceSource:
    """A named, openable byte resource.

    Attributes:
        name: Resource name; its suffix selects the decompression strategy
        opener: Callable returning a new binary stream positioned at the start
    """

    name: str
    opener: Callable[[], BinaryIO]

    def open(self) -> BinaryIO:
        """Open the resource.

        Returns:
            Binary stream owned by the caller

        Raises:
            SourceUnavailable: If the resource cannot be opened
        """
        try:
            return self.opener()
        except SourceUnavailable:
            raise
        except OSError as e:
            raise SourceUnavailable(f"Cannot open trace '{self.name}': {e}") from e

    @classmethod
    def from_path(cls, path: str | Path) -> "TraceSource":
        """Create a source reading a local file."""
        file_path = Path(path)
        if not str(path).strip():
            raise InvalidConfiguration("trace path must not be blank")
        return cls(name=file_path.name, opener=lambda: open(file_path, "rb"))

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> "TraceSource":
        """Create a source over an in-memory buffer (re-openable)."""
        return cls(name=name, opener=lambda: io.BytesIO(data))

    @classmethod
    def from_stream(cls, name: str, stream: BinaryIO) -> "TraceSource":
        """Create a source over an already open stream.

        The stream can be consumed only once; a second ``open()`` raises
        ``SourceUnavailable``.
        """
        handed_out = False

        def opener() -> BinaryIO:
            nonlocal handed_out
            if handed_out:
                raise SourceUnavailable(f"Stream for '{name}' was already consumed")
            handed_out = True
            return stream

        return cls(name=name, opener=opener)


class ResourceResolver:
    """Resolves logical trace names to openable sources.

    Absolute paths are used as-is. Relative names are looked up in each search
    path in order, then as package data of ``package`` when one is given.
    """

    def __init__(self, search_paths: list[Path] | None = None, package: str | None = None):
        """Initialize the resolver.

        Args:
            search_paths: Directories searched for relative names
            package: Optional package whose data files are searched last
        """
        if search_paths is None:
            search_paths = [Path.cwd()]
        self.search_paths = [Path(p) for p in search_paths]
        self.package = package

    def resolve(self, name: str) -> TraceSource:
        """Map a logical name to a trace source.

        Args:
            name: Absolute path or name relative to a search location

        Returns:
            TraceSource for the first match

        Raises:
            InvalidConfiguration: If name is empty or blank
            SourceUnavailable: If no search location contains the resource
        """
        if name is None or not name.strip():
            raise InvalidConfiguration("trace resource name must not be blank")
        name = name.strip()

        candidate = Path(name)
        if candidate.is_absolute():
            if candidate.is_file():
                return TraceSource.from_path(candidate)
            raise SourceUnavailable(f"Trace file not found: {candidate}")

        for base in self.search_paths:
            path = base / candidate
            if path.is_file():
                logger.debug(f"Resolved trace '{name}' to {path}")
                return TraceSource.from_path(path)

        if self.package is not None:
            try:
                traversable = resources.files(self.package).joinpath(name)
            except ModuleNotFoundError as e:
                raise SourceUnavailable(f"Package not found: {self.package}") from e
            if traversable.is_file():
                logger.debug(f"Resolved trace '{name}' to package data of {self.package}")
                return TraceSource(name=candidate.name, opener=lambda: traversable.open("rb"))

        searched = ", ".join(str(p) for p in self.search_paths)
        raise SourceUnavailable(f"Trace '{name}' not found (searched: {searched})")
