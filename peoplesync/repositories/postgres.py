"""PostgreSQL-backed person repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from peoplesync.models.person import Person, PersonPayload
from peoplesync.repositories.tables import PersonRecord

logger = logging.getLogger(__name__)


class PersonRepository:
    """CRUD and simple filters over the ``people`` table.

    Every call runs in its own session and commits independently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_all(self) -> List[Person]:
        return await self._select(select(PersonRecord).order_by(PersonRecord.id))

    async def get(self, person_id: int) -> Optional[Person]:
        async with self._session_factory() as session:
            record = await session.get(PersonRecord, person_id)
            return Person.model_validate(record) if record is not None else None

    async def create(self, payload: PersonPayload) -> Person:
        record = PersonRecord(
            name=payload.name,
            role=payload.role,
            email=payload.email,
            created_at=payload.created_at or datetime.utcnow(),
        )
        async with self._session_factory() as session:
            session.add(record)
            await session.commit()
            await session.refresh(record)
            logger.debug("Created person %s", record.id)
            return Person.model_validate(record)

    async def update(self, person_id: int, payload: PersonPayload) -> Optional[Person]:
        async with self._session_factory() as session:
            record = await session.get(PersonRecord, person_id)
            if record is None:
                return None
            record.name = payload.name
            record.role = payload.role
            record.email = payload.email
            await session.commit()
            await session.refresh(record)
            return Person.model_validate(record)

    async def delete(self, person_id: int) -> bool:
        async with self._session_factory() as session:
            record = await session.get(PersonRecord, person_id)
            if record is None:
                return False
            await session.delete(record)
            await session.commit()
            return True

    async def count(self) -> int:
        return await self._scalar(select(func.count()).select_from(PersonRecord))

    async def find_by_role(self, role: str) -> List[Person]:
        return await self._select(select(PersonRecord).where(PersonRecord.role == role).order_by(PersonRecord.id))

    async def find_by_email(self, email: str) -> Optional[Person]:
        people = await self._select(select(PersonRecord).where(PersonRecord.email == email).limit(1))
        return people[0] if people else None

    async def search_by_name(self, fragment: str) -> List[Person]:
        statement = (
            select(PersonRecord)
            .where(PersonRecord.name.icontains(fragment, autoescape=True))
            .order_by(PersonRecord.id)
        )
        return await self._select(statement)

    async def count_by_role(self, role: str) -> int:
        return await self._scalar(select(func.count()).select_from(PersonRecord).where(PersonRecord.role == role))

    async def created_after(self, start: datetime) -> List[Person]:
        statement = select(PersonRecord).where(PersonRecord.created_at >= start).order_by(PersonRecord.id)
        return await self._select(statement)

    async def _select(self, statement) -> List[Person]:
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return [Person.model_validate(record) for record in result.scalars().all()]

    async def _scalar(self, statement) -> int:
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return int(result.scalar_one())
