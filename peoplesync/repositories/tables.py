"""SQLAlchemy table mapping for the relational people store."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PersonRecord(Base):
    __tablename__ = "people"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column("email", String(255), nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime, nullable=True, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"PersonRecord(id={self.id!r}, name={self.name!r}, role={self.role!r}, email={self.email!r})"
