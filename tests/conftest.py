"""Shared fixtures: in-memory stand-ins for the two people stores."""

from __future__ import annotations

import itertools
import re
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Set

import pytest
from fastapi.testclient import TestClient

from peoplesync.api.dependencies import get_document_store, get_migration_service, get_person_store
from peoplesync.api.main import app
from peoplesync.core.exceptions import DuplicateEmailError
from peoplesync.models.document import PersonDocument, PersonDocumentPayload
from peoplesync.models.person import Person, PersonPayload
from peoplesync.services.migration import MigrationService


class StubPersonStore:
    def __init__(self) -> None:
        self.rows: Dict[int, Person] = {}
        self._ids = itertools.count(1)
        self.unavailable = False

    def add(self, name: str, role: str, email: Optional[str] = None, created_at: Optional[datetime] = None) -> Person:
        person = Person(id=next(self._ids), name=name, role=role, email=email, created_at=created_at)
        self.rows[person.id] = person
        return person

    def _check(self) -> None:
        if self.unavailable:
            raise ConnectionError("postgres unreachable")

    async def list_all(self) -> List[Person]:
        self._check()
        return list(self.rows.values())

    async def get(self, person_id: int) -> Optional[Person]:
        self._check()
        return self.rows.get(person_id)

    async def create(self, payload: PersonPayload) -> Person:
        return self.add(payload.name, payload.role, payload.email, payload.created_at or datetime.utcnow())

    async def update(self, person_id: int, payload: PersonPayload) -> Optional[Person]:
        if person_id not in self.rows:
            return None
        updated = self.rows[person_id].model_copy(
            update={"name": payload.name, "role": payload.role, "email": payload.email}
        )
        self.rows[person_id] = updated
        return updated

    async def delete(self, person_id: int) -> bool:
        return self.rows.pop(person_id, None) is not None

    async def count(self) -> int:
        self._check()
        return len(self.rows)

    async def find_by_role(self, role: str) -> List[Person]:
        return [p for p in self.rows.values() if p.role == role]

    async def find_by_email(self, email: str) -> Optional[Person]:
        return next((p for p in self.rows.values() if p.email == email), None)

    async def search_by_name(self, fragment: str) -> List[Person]:
        return [p for p in self.rows.values() if fragment.lower() in p.name.lower()]

    async def count_by_role(self, role: str) -> int:
        return len(await self.find_by_role(role))

    async def created_after(self, start: datetime) -> List[Person]:
        return [p for p in self.rows.values() if p.created_at and p.created_at >= start]


class StubDocumentStore:
    def __init__(self) -> None:
        self.rows: Dict[str, PersonDocument] = {}
        self.fail_inserts_for: Set[int] = set()
        self.fail_deletes_for: Set[int] = set()

    def add(self, name: str, role: str, email: Optional[str], legacy_id: Optional[int] = None) -> PersonDocument:
        document = PersonDocument(
            id=uuid.uuid4().hex[:24],
            name=name,
            role=role,
            email=email,
            legacy_id=legacy_id,
            created_at=datetime.utcnow(),
        )
        self.rows[document.id] = document
        return document

    async def list_all(self) -> List[PersonDocument]:
        return list(self.rows.values())

    async def get(self, document_id: str) -> Optional[PersonDocument]:
        return self.rows.get(document_id)

    async def resolve(self, identifier: str) -> Optional[PersonDocument]:
        document = await self.get(identifier)
        if document is None and re.fullmatch(r"\d+", identifier):
            document = await self.find_by_legacy_id(int(identifier))
        return document

    async def insert(self, document: PersonDocument) -> PersonDocument:
        if document.legacy_id in self.fail_inserts_for:
            raise RuntimeError("write concern failed")
        if document.email is not None and any(d.email == document.email for d in self.rows.values()):
            raise DuplicateEmailError(document.email)
        stored = document.model_copy(update={"id": uuid.uuid4().hex[:24]})
        self.rows[stored.id] = stored
        return stored

    async def create(self, payload: PersonDocumentPayload) -> PersonDocument:
        return await self.insert(
            PersonDocument(
                name=payload.name,
                role=payload.role,
                email=str(payload.email),
                created_at=payload.created_at or datetime.utcnow(),
            )
        )

    async def update(self, document_id: str, payload: PersonDocumentPayload) -> Optional[PersonDocument]:
        if document_id not in self.rows:
            return None
        updated = self.rows[document_id].model_copy(
            update={"name": payload.name, "role": payload.role, "email": str(payload.email)}
        )
        self.rows[document_id] = updated
        return updated

    async def delete(self, document_id: str) -> bool:
        document = self.rows.get(document_id)
        if document is not None and document.legacy_id in self.fail_deletes_for:
            raise RuntimeError("delete timed out")
        return self.rows.pop(document_id, None) is not None

    async def count(self) -> int:
        return len(self.rows)

    async def find_by_legacy_id(self, legacy_id: int) -> Optional[PersonDocument]:
        return next((d for d in self.rows.values() if d.legacy_id == legacy_id), None)

    async def list_migrated(self) -> List[PersonDocument]:
        return [d for d in self.rows.values() if d.legacy_id is not None]

    async def count_migrated(self) -> int:
        return len(await self.list_migrated())

    async def find_by_role(self, role: str) -> List[PersonDocument]:
        return [d for d in self.rows.values() if d.role == role]

    async def find_by_email(self, email: str) -> Optional[PersonDocument]:
        return next((d for d in self.rows.values() if d.email == email), None)

    async def search_by_name(self, fragment: str) -> List[PersonDocument]:
        return [d for d in self.rows.values() if fragment.lower() in d.name.lower()]

    async def count_by_role(self, role: str) -> int:
        return len(await self.find_by_role(role))

    async def created_after(self, start: datetime) -> List[PersonDocument]:
        return [d for d in self.rows.values() if d.created_at and d.created_at >= start]

    async def find_by_role_created_after(self, role: str, start: datetime) -> List[PersonDocument]:
        return [d for d in await self.created_after(start) if d.role == role]

    async def search_by_name_and_role(self, fragment: str, role: str) -> List[PersonDocument]:
        return [d for d in await self.search_by_name(fragment) if d.role == role]

    async def distinct_roles(self) -> List[str]:
        return sorted({d.role for d in self.rows.values()})

    async def text_search(self, query: str) -> List[PersonDocument]:
        terms = query.lower().split()
        return [
            d
            for d in self.rows.values()
            if any(term in f"{d.name} {d.role} {d.email or ''}".lower() for term in terms)
        ]


class RecordingAuditor:
    def __init__(self) -> None:
        self.records = []

    def record(self, action, actor, details) -> None:
        self.records.append((action, actor, details))


@pytest.fixture
def people() -> StubPersonStore:
    return StubPersonStore()


@pytest.fixture
def documents() -> StubDocumentStore:
    return StubDocumentStore()


@pytest.fixture
def auditor() -> RecordingAuditor:
    return RecordingAuditor()


@pytest.fixture
def service(people, documents, auditor) -> MigrationService:
    return MigrationService(people, documents, auditor=auditor)


@pytest.fixture
def client(people, documents, service):
    app.dependency_overrides[get_person_store] = lambda: people
    app.dependency_overrides[get_document_store] = lambda: documents
    app.dependency_overrides[get_migration_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
