"""Pydantic models shared across swf_workload."""

from swf_workload.models.base import ConfigModel
from swf_workload.models.job import DEFAULT_TRANSFER_SIZE, JobSpec

__all__ = [
    "ConfigModel",
    "JobSpec",
    "DEFAULT_TRANSFER_SIZE",
]
