"""Simulated job descriptor synthesized from a trace line."""

from pydantic import BaseModel, Field, model_validator

# Default transfer size (bytes) for a job's input and output files: one network MTU
DEFAULT_TRANSFER_SIZE = 1500


class JobSpec(BaseModel):
    """A job ready to be handed to a simulation engine.

    The runtime recorded in the trace is normalized into a speed-independent
    work unit: ``computed_length = runtime_seconds * mips_rate``, so that on a
    processing element of ``mips_rate`` the job runs for the traced time.

    Fields:
    - id: Job identifier, unique within one synthesis run
    - runtime_seconds: Wall-clock runtime, floored to 1
    - processor_count: max(requested, used, 1)
    - submit_delay_seconds: Submit time copied from the trace
    - computed_length: Work length in millions of instructions
    - mips_rate: Processing speed used to compute the length
    - file_size / output_size: Transfer sizes in and out
    - requested_runtime_seconds / user_id / group_id: Informational, None when unknown
    """

    id: int = Field(..., description="Job identifier")
    runtime_seconds: int = Field(..., description="Wall-clock runtime in seconds", ge=1)
    processor_count: int = Field(..., description="Number of processing elements", ge=1)
    submit_delay_seconds: int = Field(..., description="Submission delay in seconds")
    computed_length: int = Field(..., description="Job length in MI", ge=1)
    mips_rate: int = Field(..., description="MIPS of the target processing element", gt=0)
    file_size: int = Field(default=DEFAULT_TRANSFER_SIZE, description="Input size in bytes", ge=0)
    output_size: int = Field(
        default=DEFAULT_TRANSFER_SIZE, description="Output size in bytes", ge=0
    )
    requested_runtime_seconds: int | None = Field(
        default=None, description="Requested runtime in seconds"
    )
    user_id: int | None = Field(default=None, description="Submitting user id")
    group_id: int | None = Field(default=None, description="Submitting group id")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "runtime_seconds": 1,
                "processor_count": 2,
                "submit_delay_seconds": 0,
                "computed_length": 100,
                "mips_rate": 100,
                "file_size": 1500,
                "output_size": 1500,
                "requested_runtime_seconds": 50,
                "user_id": None,
                "group_id": None,
            }
        }

    @model_validator(mode="after")
    def validate_length(self) -> "JobSpec":
        """Ensure the computed length matches runtime and MIPS exactly."""
        expected = self.runtime_seconds * self.mips_rate
        if self.computed_length != expected:
            raise ValueError(
                f"computed_length {self.computed_length} != "
                f"runtime_seconds * mips_rate ({expected})"
            )
        return self

    @classmethod
    def create(
        cls,
        id: int,
        runtime_seconds: int,
        processor_count: int,
        submit_delay_seconds: int,
        mips_rate: int,
        transfer_size: int = DEFAULT_TRANSFER_SIZE,
        **extra: int | None,
    ) -> "JobSpec":
        """Build a job, deriving its length from runtime and MIPS.

        Args:
            id: Job identifier
            runtime_seconds: Runtime in seconds (already floored)
            processor_count: Number of processing elements (already floored)
            submit_delay_seconds: Submission delay in seconds
            mips_rate: MIPS of the target processing element
            transfer_size: Input and output file size in bytes
            **extra: Informational attributes (requested_runtime_seconds, user_id, group_id)

        Returns:
            New JobSpec instance
        """
        return cls(
            id=id,
            runtime_seconds=runtime_seconds,
            processor_count=processor_count,
            submit_delay_seconds=submit_delay_seconds,
            computed_length=runtime_seconds * mips_rate,
            mips_rate=mips_rate,
            file_size=transfer_size,
            output_size=transfer_size,
            **extra,
        )

    @property
    def total_length(self) -> int:
        """Get the work length summed over all processing elements."""
        return self.computed_length * self.processor_count

    @property
    def processor_seconds(self) -> int:
        """Get the runtime multiplied by the processor count."""
        return self.runtime_seconds * self.processor_count
