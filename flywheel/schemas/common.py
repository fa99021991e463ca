"""Shared schema building blocks: camelCase models and string-rendered ids."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer, PositiveInt
from pydantic.alias_generators import to_camel

# 64-bit ids travel as decimal strings (JSON numbers lose precision past 2**53)
IdStr = Annotated[PositiveInt, PlainSerializer(str, return_type=str)]


class CamelModel(BaseModel):
    """Base for API schemas: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
