"""Shared schema bases."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RowModel(BaseModel):
    """Canonical persisted record, read straight from ORM attributes."""

    model_config = ConfigDict(from_attributes=True)
