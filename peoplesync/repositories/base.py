"""Store interfaces the migration workflow and the API are written against."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol

from peoplesync.models.document import PersonDocument, PersonDocumentPayload
from peoplesync.models.person import Person, PersonPayload


class PersonStore(Protocol):
    """Relational source of truth for people."""

    async def list_all(self) -> List[Person]: ...

    async def get(self, person_id: int) -> Optional[Person]: ...

    async def create(self, payload: PersonPayload) -> Person: ...

    async def update(self, person_id: int, payload: PersonPayload) -> Optional[Person]: ...

    async def delete(self, person_id: int) -> bool: ...

    async def count(self) -> int: ...

    async def find_by_role(self, role: str) -> List[Person]: ...

    async def find_by_email(self, email: str) -> Optional[Person]: ...

    async def search_by_name(self, fragment: str) -> List[Person]: ...

    async def count_by_role(self, role: str) -> int: ...

    async def created_after(self, start: datetime) -> List[Person]: ...


class PersonDocumentStore(Protocol):
    """Document-store copy of people, optionally tagged with a legacy id."""

    async def list_all(self) -> List[PersonDocument]: ...

    async def get(self, document_id: str) -> Optional[PersonDocument]: ...

    async def resolve(self, identifier: str) -> Optional[PersonDocument]: ...

    async def insert(self, document: PersonDocument) -> PersonDocument: ...

    async def create(self, payload: PersonDocumentPayload) -> PersonDocument: ...

    async def update(self, document_id: str, payload: PersonDocumentPayload) -> Optional[PersonDocument]: ...

    async def delete(self, document_id: str) -> bool: ...

    async def count(self) -> int: ...

    async def find_by_legacy_id(self, legacy_id: int) -> Optional[PersonDocument]: ...

    async def list_migrated(self) -> List[PersonDocument]: ...

    async def count_migrated(self) -> int: ...

    async def find_by_role(self, role: str) -> List[PersonDocument]: ...

    async def find_by_email(self, email: str) -> Optional[PersonDocument]: ...

    async def search_by_name(self, fragment: str) -> List[PersonDocument]: ...

    async def count_by_role(self, role: str) -> int: ...

    async def created_after(self, start: datetime) -> List[PersonDocument]: ...

    async def find_by_role_created_after(self, role: str, start: datetime) -> List[PersonDocument]: ...

    async def search_by_name_and_role(self, fragment: str, role: str) -> List[PersonDocument]: ...

    async def distinct_roles(self) -> List[str]: ...

    async def text_search(self, query: str) -> List[PersonDocument]: ...
