"""MongoDB-backed person document repository."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, TEXT
from pymongo.errors import DuplicateKeyError

from peoplesync.core.exceptions import DuplicateEmailError
from peoplesync.models.document import PersonDocument, PersonDocumentPayload

logger = logging.getLogger(__name__)

NUMERIC_ID = re.compile(r"^\d+$")
MIGRATED_FILTER: Dict[str, Any] = {"legacy_id": {"$exists": True, "$ne": None}}


class PersonDocumentRepository:
    """CRUD and query helpers over the ``people`` collection."""

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("name", ASCENDING)], name="name")
        await self.collection.create_index([("role", ASCENDING)], name="role")
        await self.collection.create_index([("legacy_id", ASCENDING)], name="legacy_id")
        await self.collection.create_index(
            [("email", ASCENDING)],
            name="email_unique",
            unique=True,
            partialFilterExpression={"email": {"$type": "string"}},
        )
        await self.collection.create_index(
            [("name", TEXT), ("role", TEXT), ("email", TEXT)],
            name="people_text",
        )
        logger.info("Ensured indexes on %s", self.collection.name)

    async def list_all(self) -> List[PersonDocument]:
        return await self._find({})

    async def get(self, document_id: str) -> Optional[PersonDocument]:
        if not ObjectId.is_valid(document_id):
            return None
        return await self._find_one({"_id": ObjectId(document_id)})

    async def resolve(self, identifier: str) -> Optional[PersonDocument]:
        """Look a document up by ObjectId, falling back to the legacy id for numeric input."""

        document = await self.get(identifier)
        if document is None and NUMERIC_ID.match(identifier):
            document = await self.find_by_legacy_id(int(identifier))
        return document

    async def insert(self, document: PersonDocument) -> PersonDocument:
        payload = document.to_mongo()
        if payload.get("created_at") is None:
            payload["created_at"] = datetime.utcnow()
        try:
            result = await self.collection.insert_one(payload)
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(document.email or "") from exc
        return document.model_copy(update={"id": str(result.inserted_id), "created_at": payload["created_at"]})

    async def create(self, payload: PersonDocumentPayload) -> PersonDocument:
        document = PersonDocument(
            name=payload.name,
            role=payload.role,
            email=str(payload.email),
            created_at=payload.created_at or datetime.utcnow(),
        )
        return await self.insert(document)

    async def update(self, document_id: str, payload: PersonDocumentPayload) -> Optional[PersonDocument]:
        if not ObjectId.is_valid(document_id):
            return None
        changes = {"name": payload.name, "role": payload.role, "email": str(payload.email)}
        try:
            result = await self.collection.update_one({"_id": ObjectId(document_id)}, {"$set": changes})
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(str(payload.email)) from exc
        if result.matched_count == 0:
            return None
        return await self.get(document_id)

    async def delete(self, document_id: str) -> bool:
        if not ObjectId.is_valid(document_id):
            return False
        result = await self.collection.delete_one({"_id": ObjectId(document_id)})
        return result.deleted_count > 0

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def find_by_legacy_id(self, legacy_id: int) -> Optional[PersonDocument]:
        return await self._find_one({"legacy_id": legacy_id})

    async def list_migrated(self) -> List[PersonDocument]:
        return await self._find(MIGRATED_FILTER)

    async def count_migrated(self) -> int:
        return await self.collection.count_documents(MIGRATED_FILTER)

    async def find_by_role(self, role: str) -> List[PersonDocument]:
        return await self._find({"role": role})

    async def find_by_email(self, email: str) -> Optional[PersonDocument]:
        return await self._find_one({"email": email})

    async def search_by_name(self, fragment: str) -> List[PersonDocument]:
        return await self._find({"name": _contains(fragment)})

    async def count_by_role(self, role: str) -> int:
        return await self.collection.count_documents({"role": role})

    async def created_after(self, start: datetime) -> List[PersonDocument]:
        return await self._find({"created_at": {"$gte": start}})

    async def find_by_role_created_after(self, role: str, start: datetime) -> List[PersonDocument]:
        return await self._find({"role": role, "created_at": {"$gte": start}})

    async def search_by_name_and_role(self, fragment: str, role: str) -> List[PersonDocument]:
        return await self._find({"name": _contains(fragment), "role": role})

    async def distinct_roles(self) -> List[str]:
        roles = await self.collection.distinct("role")
        return sorted(role for role in roles if role is not None)

    async def text_search(self, query: str) -> List[PersonDocument]:
        return await self._find({"$text": {"$search": query}})

    async def _find(self, query: Dict[str, Any]) -> List[PersonDocument]:
        cursor = self.collection.find(query)
        return [PersonDocument.from_mongo(document) async for document in cursor]

    async def _find_one(self, query: Dict[str, Any]) -> Optional[PersonDocument]:
        document = await self.collection.find_one(query)
        return PersonDocument.from_mongo(document) if document else None


def _contains(fragment: str) -> Dict[str, str]:
    return {"$regex": re.escape(fragment), "$options": "i"}
