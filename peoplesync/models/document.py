"""Document-store person model definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from email_validator import validate_email
from pydantic import Field, field_validator

from peoplesync.models.person import CamelModel, naive_utc


class PersonDocumentPayload(CamelModel):
    """Request body for creating or replacing a person document.

    ``email`` must be a well-formed address but is stored exactly as sent.
    """

    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    email: str
    created_at: Optional[datetime] = None

    @field_validator("name", "role")
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Value must not be blank")
        return value

    @field_validator("email")
    def _well_formed_email(cls, value: str) -> str:
        validate_email(value, check_deliverability=False)
        return value

    @field_validator("created_at")
    def _created_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return naive_utc(value)


class PersonDocument(CamelModel):
    id: Optional[str] = Field(None, description="MongoDB ObjectId rendered as hex")
    name: str
    role: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    legacy_id: Optional[int] = Field(None, description="Relational identifier this document was migrated from")

    @property
    def is_migrated(self) -> bool:
        return self.legacy_id is not None

    @classmethod
    def from_mongo(cls, document: Dict[str, Any]) -> "PersonDocument":
        return cls(
            id=str(document["_id"]) if document.get("_id") is not None else None,
            name=document.get("name", ""),
            role=document.get("role", ""),
            email=document.get("email"),
            created_at=document.get("created_at"),
            legacy_id=document.get("legacy_id"),
        )

    def to_mongo(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "role": self.role,
            "email": self.email,
            "created_at": self.created_at,
        }
        if self.legacy_id is not None:
            payload["legacy_id"] = self.legacy_id
        return payload
