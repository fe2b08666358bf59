"""Relational person endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query, status

from peoplesync.api.dependencies import get_person_store
from peoplesync.core.exceptions import NotFoundError
from peoplesync.models.person import Person, PersonPayload, naive_utc
from peoplesync.repositories.base import PersonStore

router = APIRouter(prefix="/people", tags=["people"])


@router.get("", response_model=List[Person])
async def list_people(store: PersonStore = Depends(get_person_store)) -> List[Person]:
    return await store.list_all()


@router.post("", response_model=Person, status_code=status.HTTP_201_CREATED)
async def create_person(payload: PersonPayload, store: PersonStore = Depends(get_person_store)) -> Person:
    """Create a person; the store assigns the id and defaults ``createdAt`` to now."""

    return await store.create(payload)


@router.get("/role/{role}", response_model=List[Person])
async def people_by_role(role: str, store: PersonStore = Depends(get_person_store)) -> List[Person]:
    return await store.find_by_role(role)


@router.get("/email/{email}", response_model=Person)
async def person_by_email(email: str, store: PersonStore = Depends(get_person_store)) -> Person:
    person = await store.find_by_email(email)
    if person is None:
        raise NotFoundError(f"Person with email {email} not found")
    return person


@router.get("/search", response_model=List[Person])
async def search_people(name: str = Query(..., min_length=1), store: PersonStore = Depends(get_person_store)) -> List[Person]:
    """Case-insensitive substring match on name."""

    return await store.search_by_name(name)


@router.get("/count/role/{role}", response_model=int)
async def count_people_by_role(role: str, store: PersonStore = Depends(get_person_store)) -> int:
    return await store.count_by_role(role)


@router.get("/created-after", response_model=List[Person])
async def people_created_after(
    start_date: datetime = Query(..., alias="startDate"),
    store: PersonStore = Depends(get_person_store),
) -> List[Person]:
    return await store.created_after(naive_utc(start_date))


@router.get("/{person_id}", response_model=Person)
async def get_person(person_id: int, store: PersonStore = Depends(get_person_store)) -> Person:
    person = await store.get(person_id)
    if person is None:
        raise NotFoundError(f"Person {person_id} not found")
    return person


@router.put("/{person_id}", response_model=Person)
async def update_person(
    person_id: int,
    payload: PersonPayload,
    store: PersonStore = Depends(get_person_store),
) -> Person:
    person = await store.update(person_id, payload)
    if person is None:
        raise NotFoundError(f"Person {person_id} not found")
    return person


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(person_id: int, store: PersonStore = Depends(get_person_store)) -> None:
    if not await store.delete(person_id):
        raise NotFoundError(f"Person {person_id} not found")
