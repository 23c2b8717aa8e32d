"""SWF Workload - Standard Workload Format traces to simulated jobs."""

__version__ = "0.1.0"

from swf_workload.columns import STANDARD_COLUMNS, SwfColumns
from swf_workload.config import (
    SynthesizerConfig,
    WorkloadConfig,
    load_config_from_env,
)
from swf_workload.errors import (
    InvalidConfiguration,
    MalformedArchive,
    MalformedRecord,
    SourceUnavailable,
    WorkloadError,
)
from swf_workload.models import JobSpec
from swf_workload.reader import ResourceResolver, TraceRecord, TraceSource, TraceStreamReader
from swf_workload.synthesizer import SynthesisStats, SynthesizerState, WorkloadSynthesizer

__all__ = [
    "JobSpec",
    "SwfColumns",
    "STANDARD_COLUMNS",
    "SynthesizerConfig",
    "WorkloadConfig",
    "load_config_from_env",
    "WorkloadError",
    "InvalidConfiguration",
    "SourceUnavailable",
    "MalformedArchive",
    "MalformedRecord",
    "ResourceResolver",
    "TraceRecord",
    "TraceSource",
    "TraceStreamReader",
    "SynthesisStats",
    "SynthesizerState",
    "WorkloadSynthesizer",
]
