"""Workload synthesis from Standard Workload Format traces.

Reads a trace once, maps its columns to job attributes and accumulates the
jobs accepted by a predicate. The first ``generate()`` materializes the
result; later calls return the cached tuple without reopening the trace.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from swf_workload.config import SynthesizerConfig, WorkloadConfig
from swf_workload.errors import InvalidConfiguration, MalformedRecord
from swf_workload.models import JobSpec
from swf_workload.predicates import Predicate, accept_all
from swf_workload.reader import ResourceResolver, TraceRecord, TraceSource, TraceStreamReader

logger = logging.getLogger(__name__)


class SynthesizerState(str, Enum):
    """Lifecycle of a synthesizer. ``MATERIALIZED`` is terminal."""

    CONFIGURED = "configured"
    MATERIALIZED = "materialized"


@dataclass
class SynthesisStats:
    """Line and record counts from the run that materialized the workload."""

    lines_read: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    malformed_records: int = 0
    rejected_records: int = 0
    accepted_records: int = 0

    @property
    def skipped_lines(self) -> int:
        """Get the number of lines that did not produce a candidate job."""
        return self.blank_lines + self.comment_lines + self.malformed_records


# Signed ASCII decimal integer: no digit separators, no non-ASCII digits
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(record: TraceRecord, index: int, field: str) -> int:
    token = record[index]
    if not _INTEGER.fullmatch(token):
        raise MalformedRecord(
            f"{field} (column {index}) is not an integer: {token!r}", record.line_no
        )
    return int(token)


def _parse_optional(record: TraceRecord, index: int | None) -> int | None:
    """Parse a reserved column; unknown values (unparsable or negative) give None."""
    if index is None or not _INTEGER.fullmatch(record[index]):
        return None
    value = int(record[index])
    return value if value >= 0 else None


class WorkloadSynthesizer:
    """Creates simulated jobs from the lines of a workload trace.

    Each data line yields one candidate job:
    - runtime is floored to 1 second (the trace rounds sub-second runs down to 0)
    - processors = max(requested, used, 1), trusting whichever field is reported
    - length = runtime * mips_rate

    Malformed lines are counted and skipped; only source and archive errors
    abort generation.
    """

    def __init__(
        self,
        source: TraceSource,
        config: SynthesizerConfig,
        predicate: Predicate | None = None,
    ):
        """Initialize the synthesizer.

        Args:
            source: Trace resource to read
            config: Immutable synthesis settings
            predicate: Acceptance predicate (defaults to accepting every job)

        Raises:
            InvalidConfiguration: If predicate is not callable
        """
        if predicate is not None and not callable(predicate):
            raise InvalidConfiguration("predicate must be callable")

        self.source = source
        self.config = config
        self.state = SynthesizerState.CONFIGURED
        self.stats = SynthesisStats()
        self._predicate: Predicate = predicate or accept_all
        self._jobs: tuple[JobSpec, ...] = ()

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        mips_rate: int,
        predicate: Predicate | None = None,
        **settings,
    ) -> "WorkloadSynthesizer":
        """Create a synthesizer for a local trace file.

        Args:
            path: Trace file path (raw text, .gz or .zip)
            mips_rate: MIPS of the target processing element
            predicate: Optional acceptance predicate
            **settings: Extra SynthesizerConfig fields

        Raises:
            InvalidConfiguration: If mips_rate <= 0 or settings are invalid
        """
        config = SynthesizerConfig(mips_rate=mips_rate, **settings)
        return cls(TraceSource.from_path(path), config, predicate)

    @classmethod
    def from_resource(
        cls,
        name: str,
        mips_rate: int,
        resolver: ResourceResolver | None = None,
        predicate: Predicate | None = None,
        **settings,
    ) -> "WorkloadSynthesizer":
        """Create a synthesizer for a trace looked up by logical name.

        Raises:
            InvalidConfiguration: If mips_rate <= 0 or name is blank
            SourceUnavailable: If the name cannot be resolved
        """
        config = SynthesizerConfig(mips_rate=mips_rate, **settings)
        source = (resolver or ResourceResolver()).resolve(name)
        return cls(source, config, predicate)

    @classmethod
    def from_config(
        cls, workload_config: WorkloadConfig, predicate: Predicate | None = None
    ) -> "WorkloadSynthesizer":
        """Create a synthesizer from a loaded workload configuration."""
        resolver = ResourceResolver(workload_config.search_paths or None)
        source = resolver.resolve(workload_config.trace)
        return cls(source, workload_config.synthesizer, predicate)

    @property
    def mips_rate(self) -> int:
        """Get the MIPS rate used to compute job lengths."""
        return self.config.mips_rate

    @property
    def predicate(self) -> Predicate:
        """Get the acceptance predicate."""
        return self._predicate

    @property
    def is_materialized(self) -> bool:
        """Check whether the workload has been generated."""
        return self.state is SynthesizerState.MATERIALIZED

    def set_predicate(self, predicate: Predicate) -> "WorkloadSynthesizer":
        """Replace the acceptance predicate before generation.

        Args:
            predicate: New acceptance predicate

        Returns:
            This synthesizer

        Raises:
            InvalidConfiguration: If the workload was already generated
                or predicate is not callable
        """
        if self.is_materialized:
            raise InvalidConfiguration(
                "Cannot change the predicate: workload already generated "
                f"({len(self._jobs)} jobs cached)"
            )
        if not callable(predicate):
            raise InvalidConfiguration("predicate must be callable")
        self._predicate = predicate
        return self

    def generate(self) -> tuple[JobSpec, ...]:
        """Generate the jobs accepted by the predicate, in trace order.

        Only the first call reads the trace; later calls return the same tuple.

        Returns:
            Tuple of accepted jobs

        Raises:
            SourceUnavailable: If the trace cannot be opened
            MalformedArchive: If the trace container cannot be decoded
        """
        if self.is_materialized:
            logger.debug(f"Returning {len(self._jobs)} cached jobs for '{self.source.name}'")
            return self._jobs

        jobs, stats = self._read_jobs()

        self._jobs = tuple(jobs)
        self.stats = stats
        self.state = SynthesizerState.MATERIALIZED

        logger.info(
            f"Generated {stats.accepted_records} jobs from '{self.source.name}' "
            f"({stats.lines_read} lines, {stats.comment_lines} comments, "
            f"{stats.malformed_records} malformed, {stats.rejected_records} rejected)"
        )
        return self._jobs

    def _read_jobs(self) -> tuple[list[JobSpec], SynthesisStats]:
        stats = SynthesisStats()
        jobs: list[JobSpec] = []
        seen_ids: set[int] = set()

        logger.info(f"Reading workload trace '{self.source.name}' (mips_rate={self.mips_rate})")

        with TraceStreamReader.open(self.source, comment_marker=self.config.comment_marker) as reader:
            for record in reader:
                try:
                    job = self.create_job(record, accepted_count=len(jobs))
                except MalformedRecord as e:
                    stats.malformed_records += 1
                    logger.debug(f"Skipping record in '{self.source.name}': {e}")
                    continue

                if job.id in seen_ids:
                    stats.malformed_records += 1
                    logger.warning(
                        f"Skipping duplicate job id {job.id} at line {record.line_no} "
                        f"of '{self.source.name}'"
                    )
                    continue

                if self._predicate(job):
                    jobs.append(job)
                    seen_ids.add(job.id)
                else:
                    stats.rejected_records += 1

            stats.lines_read = reader.stats.lines_read
            stats.blank_lines = reader.stats.blank_lines
            stats.comment_lines = reader.stats.comment_lines

        stats.accepted_records = len(jobs)
        return jobs, stats

    def create_job(self, record: TraceRecord, accepted_count: int = 0) -> JobSpec:
        """Build a candidate job from one trace record.

        Args:
            record: Tokenized trace line
            accepted_count: Number of jobs accepted so far, used to number jobs
                when the trace has no job id column

        Returns:
            Candidate JobSpec (not yet checked against the predicate)

        Raises:
            MalformedRecord: If the record is too short or a consumed field is not an integer
        """
        columns = self.config.columns
        if len(record) < columns.field_count:
            raise MalformedRecord(
                f"expected at least {columns.field_count} fields, got {len(record)}",
                record.line_no,
            )

        if columns.job_id is None:
            job_id = accepted_count + 1
        else:
            job_id = _parse_int(record, columns.job_id, "job_id")

        run_time = max(_parse_int(record, columns.run_time, "run_time"), 1)
        processors = max(
            _parse_int(record, columns.requested_processors, "requested_processors"),
            _parse_int(record, columns.used_processors, "used_processors"),
            1,
        )
        submit_time = _parse_int(record, columns.submit_time, "submit_time")

        return JobSpec.create(
            id=job_id,
            runtime_seconds=run_time,
            processor_count=processors,
            submit_delay_seconds=submit_time,
            mips_rate=self.config.mips_rate,
            transfer_size=self.config.default_transfer_size,
            requested_runtime_seconds=_parse_optional(record, columns.requested_run_time),
            user_id=_parse_optional(record, columns.user_id),
            group_id=_parse_optional(record, columns.group_id),
        )
