"""Declarative column mapping for Standard Workload Format traces.

Each semantic field of a job is bound to a 0-indexed column of a trace line.
Alternate dialects are described by building a different ``SwfColumns``
instance instead of editing parsing code.
"""

from pydantic import Field, model_validator

from swf_workload.models.base import ConfigModel

# Number of columns defined by the Standard Workload Format
SWF_FIELD_COUNT = 18


class SwfColumns(ConfigModel):
    """Column index for each field consumed from a trace line.

    A ``job_id`` of ``None`` marks the job number as not applicable: ids are
    then assigned sequentially to accepted jobs. Reserved columns
    (``requested_run_time``, ``user_id``, ``group_id``) are optional and never
    cause a line to be discarded.
    """

    job_id: int | None = Field(default=0, description="Job number column", ge=0)
    submit_time: int = Field(default=1, description="Submit time in seconds", ge=0)
    run_time: int = Field(default=3, description="Measured wall-clock runtime in seconds", ge=0)
    used_processors: int = Field(default=4, description="Processors actually used", ge=0)
    requested_processors: int = Field(default=7, description="Processors requested", ge=0)
    requested_run_time: int | None = Field(
        default=8, description="Requested runtime or CPU time per processor", ge=0
    )
    user_id: int | None = Field(default=11, description="Submitting user id", ge=0)
    group_id: int | None = Field(default=12, description="Submitting user's group id", ge=0)
    field_count: int = Field(
        default=SWF_FIELD_COUNT, description="Minimum number of fields in a data line", gt=0
    )

    class Config:
        frozen = True

    @model_validator(mode="after")
    def validate_indices(self) -> "SwfColumns":
        """Ensure every mapped column lies inside the required field count."""
        for name, index in self.mapping().items():
            if index >= self.field_count:
                raise ValueError(
                    f"column '{name}' (index {index}) is outside field_count {self.field_count}"
                )
        return self

    def mapping(self) -> dict[str, int]:
        """Get the mapped columns, skipping fields marked not applicable.

        Returns:
            Dict of semantic field name to column index
        """
        fields = self.model_dump(exclude={"field_count"})
        return {name: index for name, index in fields.items() if index is not None}

    @property
    def has_job_id(self) -> bool:
        """Check whether job ids are read from the trace."""
        return self.job_id is not None


STANDARD_COLUMNS = SwfColumns()
