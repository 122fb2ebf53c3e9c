"""Shared pydantic configuration for request-scoped value objects"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueModel(BaseModel):
    """Immutable model serialized with camelCase keys"""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """Plain JSON-ready dict using the camelCase field names"""
        return self.model_dump(mode="json", by_alias=True)
