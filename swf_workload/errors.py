"""Error taxonomy for trace ingestion.

Fatal errors (configuration, source, archive) propagate to the caller.
``MalformedRecord`` is raised while parsing a single line and is absorbed by
the synthesizer, which counts and skips the offending record.
"""


class WorkloadError(Exception):
    """Base class for all errors raised by swf_workload."""


class InvalidConfiguration(WorkloadError, ValueError):
    """Raised when configuration values are rejected at construction time."""


class SourceUnavailable(WorkloadError, OSError):
    """Raised when a named trace resource cannot be opened."""


class MalformedArchive(WorkloadError):
    """Raised when a compressed trace container cannot be decoded."""


class MalformedRecord(WorkloadError, ValueError):
    """Raised when a trace line fails structural or numeric parsing."""

    def __init__(self, message: str, line_no: int | None = None):
        super().__init__(message if line_no is None else f"line {line_no}: {message}")
        self.line_no = line_no
