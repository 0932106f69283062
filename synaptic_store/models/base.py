"""Base model classes for Synaptic Store."""

from pydantic import BaseModel, ConfigDict


class StoreBaseModel(BaseModel):
    """Base model with common configuration for all Synaptic Store models."""

    model_config = ConfigDict(
        # Keep enum objects in memory, serialize values only when needed
        use_enum_values=False,
        # Allow population by field name or alias
        populate_by_name=True,
        # Validate assignment after model creation
        validate_assignment=True,
        extra="forbid",
    )
