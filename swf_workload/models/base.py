"""Base model for configuration objects."""

from pydantic import BaseModel, ValidationError

from swf_workload.errors import InvalidConfiguration


class ConfigModel(BaseModel):
    """Pydantic model that reports rejected values as ``InvalidConfiguration``.

    Configuration is validated eagerly at construction so that a bad value
    never surfaces in the middle of reading a trace.
    """

    def __init__(self, **data):
        """Validate and initialize, translating pydantic validation errors."""
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid {type(self).__name__}: {e}") from e
