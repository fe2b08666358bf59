"""Document-store person endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query, status

from peoplesync.api.dependencies import get_document_store
from peoplesync.core.exceptions import NotFoundError
from peoplesync.models.document import PersonDocument, PersonDocumentPayload
from peoplesync.models.person import naive_utc
from peoplesync.repositories.base import PersonDocumentStore

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=List[PersonDocument])
async def list_documents(store: PersonDocumentStore = Depends(get_document_store)) -> List[PersonDocument]:
    return await store.list_all()


@router.post("", response_model=PersonDocument, status_code=status.HTTP_201_CREATED)
async def create_document(
    payload: PersonDocumentPayload,
    store: PersonDocumentStore = Depends(get_document_store),
) -> PersonDocument:
    """Create an untagged document; ``createdAt`` defaults to now when omitted."""

    return await store.create(payload)


@router.get("/role/{role}", response_model=List[PersonDocument])
async def documents_by_role(role: str, store: PersonDocumentStore = Depends(get_document_store)) -> List[PersonDocument]:
    return await store.find_by_role(role)


@router.get("/email/{email}", response_model=PersonDocument)
async def document_by_email(email: str, store: PersonDocumentStore = Depends(get_document_store)) -> PersonDocument:
    document = await store.find_by_email(email)
    if document is None:
        raise NotFoundError(f"Document with email {email} not found")
    return document


@router.get("/search", response_model=List[PersonDocument])
async def search_documents(
    name: str = Query(..., min_length=1),
    store: PersonDocumentStore = Depends(get_document_store),
) -> List[PersonDocument]:
    return await store.search_by_name(name)


@router.get("/count/role/{role}", response_model=int)
async def count_documents_by_role(role: str, store: PersonDocumentStore = Depends(get_document_store)) -> int:
    return await store.count_by_role(role)


@router.get("/created-after", response_model=List[PersonDocument])
async def documents_created_after(
    start_date: datetime = Query(..., alias="startDate"),
    store: PersonDocumentStore = Depends(get_document_store),
) -> List[PersonDocument]:
    return await store.created_after(naive_utc(start_date))


# Migration helpers


@router.get("/migration/legacy-ids", response_model=List[PersonDocument])
async def migrated_documents(store: PersonDocumentStore = Depends(get_document_store)) -> List[PersonDocument]:
    """List documents that carry a legacy relational id."""

    return await store.list_migrated()


@router.get("/migration/legacy-id/{legacy_id}", response_model=PersonDocument)
async def document_by_legacy_id(
    legacy_id: int,
    store: PersonDocumentStore = Depends(get_document_store),
) -> PersonDocument:
    document = await store.find_by_legacy_id(legacy_id)
    if document is None:
        raise NotFoundError(f"No document migrated from person {legacy_id}")
    return document


# Compound queries


@router.get("/advanced/role/{role}/after", response_model=List[PersonDocument])
async def documents_by_role_created_after(
    role: str,
    start_date: datetime = Query(..., alias="startDate"),
    store: PersonDocumentStore = Depends(get_document_store),
) -> List[PersonDocument]:
    return await store.find_by_role_created_after(role, naive_utc(start_date))


@router.get("/advanced/search", response_model=List[PersonDocument])
async def search_documents_by_name_and_role(
    name: str = Query(..., min_length=1),
    role: str = Query(..., min_length=1),
    store: PersonDocumentStore = Depends(get_document_store),
) -> List[PersonDocument]:
    return await store.search_by_name_and_role(name, role)


@router.get("/roles", response_model=List[str])
async def distinct_roles(store: PersonDocumentStore = Depends(get_document_store)) -> List[str]:
    return await store.distinct_roles()


@router.get("/text-search", response_model=List[PersonDocument])
async def text_search(
    query: str = Query(..., min_length=1),
    store: PersonDocumentStore = Depends(get_document_store),
) -> List[PersonDocument]:
    """Full-text search over name, role and email."""

    return await store.text_search(query)


@router.get("/{document_id}", response_model=PersonDocument)
async def get_document(document_id: str, store: PersonDocumentStore = Depends(get_document_store)) -> PersonDocument:
    """Fetch by ObjectId; purely numeric ids fall back to the legacy relational id."""

    document = await store.resolve(document_id)
    if document is None:
        raise NotFoundError(f"Document {document_id} not found")
    return document


@router.put("/{document_id}", response_model=PersonDocument)
async def update_document(
    document_id: str,
    payload: PersonDocumentPayload,
    store: PersonDocumentStore = Depends(get_document_store),
) -> PersonDocument:
    document = await store.update(document_id, payload)
    if document is None:
        raise NotFoundError(f"Document {document_id} not found")
    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: str, store: PersonDocumentStore = Depends(get_document_store)) -> None:
    if not await store.delete(document_id):
        raise NotFoundError(f"Document {document_id} not found")
