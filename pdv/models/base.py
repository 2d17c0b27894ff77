"""
Base model for persisted records

Records are stored with camelCase keys; Python code works with the
snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """A row of one of the JSON collections"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: int = 0

    def to_document(self) -> dict:
        """Serialize to the on-disk (camelCase, JSON-safe) shape"""
        return self.model_dump(mode="json", by_alias=True)
