"""Configuration management for trace ingestion.

This module provides:
1. Synthesizer settings (MIPS rate, comment marker, column mapping)
2. Workload configuration loaded from YAML files
3. Loading the configuration path from an environment variable
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator

from swf_workload.columns import SwfColumns
from swf_workload.errors import InvalidConfiguration
from swf_workload.models.base import ConfigModel
from swf_workload.models.job import DEFAULT_TRANSFER_SIZE

# Lines starting with this marker are header or annotation lines in SWF traces
DEFAULT_COMMENT_MARKER = ";"

CONFIG_ENV_VAR = "SWF_CONFIG_FILE"


class SynthesizerConfig(ConfigModel):
    """Settings for turning trace lines into jobs.

    Immutable once built; a synthesizer takes one at construction.
    """

    mips_rate: int = Field(
        ..., description="MIPS of the processing element each job is expected to run on", gt=0
    )
    comment_marker: str = Field(
        default=DEFAULT_COMMENT_MARKER, description="Leading character of comment lines"
    )
    default_transfer_size: int = Field(
        default=DEFAULT_TRANSFER_SIZE, description="Input/output file size of each job", ge=0
    )
    columns: SwfColumns = Field(default_factory=SwfColumns, description="Column mapping")

    class Config:
        frozen = True

    @field_validator("comment_marker")
    @classmethod
    def validate_comment_marker(cls, v: str) -> str:
        """Validate the comment marker is a single visible character."""
        if len(v) != 1 or v.isspace():
            raise ValueError("comment_marker must be a single non-whitespace character")
        return v


class WorkloadConfig(ConfigModel):
    """Workload configuration: which trace to read and how.

    Example YAML:
        trace: LANL-CM5-1994-4.1-cln.swf.gz
        search_paths:
          - ./workloads
        synthesizer:
          mips_rate: 1000
          columns:
            job_id: null
    """

    trace: str = Field(..., description="Trace file path or logical resource name")
    search_paths: list[Path] = Field(
        default_factory=list, description="Directories searched for relative trace names"
    )
    synthesizer: SynthesizerConfig

    @field_validator("trace")
    @classmethod
    def validate_trace(cls, v: str) -> str:
        """Reject blank trace names."""
        if not v.strip():
            raise ValueError("trace name must not be blank")
        return v.strip()

    @classmethod
    def load(cls, path: str | Path) -> "WorkloadConfig":
        """Load configuration from YAML file.

        Relative search paths are resolved against the config file's directory
        and stored as absolute paths, so a saved config reloads unchanged.

        Args:
            path: Path to YAML configuration file

        Returns:
            Loaded WorkloadConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            InvalidConfiguration: If YAML is empty or values are invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f)

        if not data:
            raise InvalidConfiguration(f"Empty or invalid YAML in {config_path}")

        search_paths = data.get("search_paths") or []
        data["search_paths"] = [(config_path.parent / p).resolve() for p in search_paths]

        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Path to save configuration file
        """
        config_path = Path(path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a YAML-safe dictionary."""
        return self.model_dump(mode="json")


def load_config_from_env(env_var: str = CONFIG_ENV_VAR) -> WorkloadConfig:
    """Load configuration from path specified in environment variable.

    Args:
        env_var: Name of environment variable containing config path

    Returns:
        Loaded WorkloadConfig instance

    Raises:
        InvalidConfiguration: If environment variable not set
        FileNotFoundError: If config file doesn't exist
    """
    config_path = os.getenv(env_var)
    if not config_path:
        raise InvalidConfiguration(f"Environment variable {env_var} not set")

    return WorkloadConfig.load(config_path)
