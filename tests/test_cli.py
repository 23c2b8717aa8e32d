"""Tests for the swf-workload command line."""

import pandas as pd
import pytest
import yaml
from typer.testing import CliRunner

from swf_workload.cli import app

runner = CliRunner()


@pytest.fixture
def trace_path(write_trace, sample_trace):
    return write_trace(sample_trace, name="sample.swf.gz", compression="gzip")


def test_summary(trace_path):
    """Test the summary table reports job and skip counts."""
    result = runner.invoke(app, ["summary", str(trace_path), "--mips", "100"])

    assert result.exit_code == 0, result.output
    assert "sample.swf.gz" in result.output
    assert "Malformed Records" in result.output
    assert "Jobs" in result.output
    row = next(line for line in result.output.splitlines() if "Processor Seconds" in line)
    assert "527" in row.split()


def test_summary_with_filters(trace_path):
    """Test filters are applied to the generated jobs."""
    result = runner.invoke(
        app, ["summary", str(trace_path), "--mips", "100", "--max-processors", "2"]
    )

    assert result.exit_code == 0, result.output
    assert "Rejected Records" in result.output


def test_summary_requires_mips(trace_path):
    """Test a MIPS rate is required without a config file."""
    result = runner.invoke(app, ["summary", str(trace_path)])
    assert result.exit_code == 1
    assert "--mips is required" in result.output


def test_summary_invalid_mips(trace_path):
    result = runner.invoke(app, ["summary", str(trace_path), "--mips", "0"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_summary_missing_trace(tmp_path):
    result = runner.invoke(app, ["summary", str(tmp_path / "missing.swf"), "--mips", "10"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_summary_with_config(tmp_path, write_trace, sample_trace):
    """Test the trace is resolved through the config's search paths."""
    write_trace(sample_trace, name="sample.swf")
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        yaml.safe_dump(
            {"trace": "sample.swf", "search_paths": ["."], "synthesizer": {"mips_rate": 7}}
        )
    )

    result = runner.invoke(app, ["summary", "sample.swf", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "7" in result.output


def test_convert_to_csv(tmp_path, trace_path):
    """Test converting a trace to CSV."""
    output = tmp_path / "jobs.csv"
    result = runner.invoke(app, ["convert", str(trace_path), str(output), "--mips", "10"])

    assert result.exit_code == 0, result.output
    df = pd.read_csv(output)
    assert df["id"].tolist() == [1, 2, 4]
    assert df["computed_length"].tolist() == [1200, 10, 450]


def test_convert_unsupported_output(tmp_path, trace_path):
    result = runner.invoke(
        app, ["convert", str(trace_path), str(tmp_path / "jobs.txt"), "--mips", "10"]
    )
    assert result.exit_code == 1
    assert "Unsupported output format" in result.output
