"""Tests for the JobSpec model."""

import pytest

from swf_workload.models import DEFAULT_TRANSFER_SIZE, JobSpec


def test_create_derives_length():
    """Test create() computes the length from runtime and MIPS."""
    job = JobSpec.create(
        id=3, runtime_seconds=120, processor_count=4, submit_delay_seconds=30, mips_rate=250
    )

    assert job.computed_length == 30000
    assert job.file_size == job.output_size == DEFAULT_TRANSFER_SIZE
    assert job.total_length == 120000
    assert job.processor_seconds == 480
    assert job.user_id is None


def test_inconsistent_length_is_rejected():
    """Test the length must equal runtime times MIPS."""
    with pytest.raises(Exception):
        JobSpec(
            id=1,
            runtime_seconds=10,
            processor_count=1,
            submit_delay_seconds=0,
            computed_length=99,
            mips_rate=10,
        )


@pytest.mark.parametrize("field", ["runtime_seconds", "processor_count"])
def test_floors_are_enforced(field):
    """Test runtime and processor count must be at least 1."""
    values = {
        "id": 1,
        "runtime_seconds": 1,
        "processor_count": 1,
        "submit_delay_seconds": 0,
        "mips_rate": 10,
    }
    values[field] = 0
    with pytest.raises(Exception):
        JobSpec.create(**values)


def test_job_is_immutable():
    """Test accepted jobs cannot be modified."""
    job = JobSpec.create(
        id=1, runtime_seconds=1, processor_count=1, submit_delay_seconds=0, mips_rate=1
    )
    with pytest.raises(Exception):
        job.runtime_seconds = 5


def test_json_roundtrip_keeps_values():
    """Test serializing a job for hand-off to another process."""
    job = JobSpec.create(
        id=9,
        runtime_seconds=7,
        processor_count=2,
        submit_delay_seconds=12,
        mips_rate=3,
        transfer_size=0,
        user_id=4,
    )
    assert JobSpec.model_validate_json(job.model_dump_json()) == job
