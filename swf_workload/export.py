"""Hand-off helpers writing generated jobs to tabular files."""

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from swf_workload.models import JobSpec

logger = logging.getLogger(__name__)

JOB_COLUMNS = list(JobSpec.model_fields)


def jobs_to_dataframe(jobs: Iterable[JobSpec]) -> pd.DataFrame:
    """Convert jobs to a DataFrame, one row per job in the given order.

    Reserved attributes that are unknown become missing values (nullable Int64).
    """
    df = pd.DataFrame([job.model_dump() for job in jobs], columns=JOB_COLUMNS)
    return df.astype({column: "Int64" for column in JOB_COLUMNS})


def write_jobs(jobs: Iterable[JobSpec], path: str | Path) -> Path:
    """Write jobs to a CSV or Parquet file, chosen by suffix.

    Args:
        jobs: Jobs to write
        path: Output path ending in .csv or .parquet

    Returns:
        Path written

    Raises:
        ValueError: If the suffix is not supported
    """
    output_path = Path(path)
    suffix = output_path.suffix.lower()
    if suffix not in (".csv", ".parquet"):
        raise ValueError(f"Unsupported output format '{suffix}' (use .csv or .parquet)")

    df = jobs_to_dataframe(jobs)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".csv":
        df.to_csv(output_path, index=False)
    else:
        df.to_parquet(output_path, index=False)

    logger.info(f"Wrote {len(df)} jobs to {output_path}")
    return output_path
