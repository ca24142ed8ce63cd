from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel

# Fixed-point currency; rendered as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Surrounding whitespace is stripped before the length check, so "   " is rejected
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class CamelModel(BaseModel):
    """Snake-case fields in Python, camelCase keys on the wire (both accepted on input)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DropdownItem(CamelModel):
    value: int
    label: Optional[str] = None


class MessageResponse(CamelModel):
    message: str
