"""
Shared pydantic base: snake_case attributes, camelCase JSON.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_payload(self) -> dict:
        """JSON-ready dict of the fields that were explicitly set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
