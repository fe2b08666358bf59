"""Relational person model definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an offset-aware timestamp to naive UTC; naive values pass through."""

    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonPayload(CamelModel):
    """Request body for creating or replacing a relational person."""

    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    created_at: Optional[datetime] = None

    # The people table stores timestamps without a zone.
    @field_validator("created_at")
    def _created_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return naive_utc(value)


class Person(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int = Field(..., description="Store-assigned identifier")
    name: str
    role: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
