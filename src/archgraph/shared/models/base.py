"""
Base models for ArchGraph.
"""

from pydantic import BaseModel as PydanticBaseModel


class BaseModel(PydanticBaseModel):
    """
    Base model for all ArchGraph data structures.

    Provides common configuration and utilities.
    """

    class Config:
        # Allow field population by name or alias
        validate_by_name = True
        # Validate assignments after object creation
        validate_assignment = True
        # Use enum values instead of enum names
        use_enum_values = True
        extra = "forbid"

    def to_json_dict(self):
        """Dump with camelCase aliases, ready for a JSON response."""
        return self.model_dump(by_alias=True, mode="json")


class RecordModel(BaseModel):
    """
    Base for records received from the core service.

    Upstream payloads carry many fields this service does not use, so
    unknown keys are ignored instead of rejected.
    """

    class Config:
        extra = "ignore"
