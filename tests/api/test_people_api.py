"""Tests for the relational /api/people endpoints."""

from __future__ import annotations

from datetime import datetime


def test_create_and_get_person(client):
    response = client.post("/api/people", json={"name": "Alice", "role": "eng", "email": "a@x.com"})

    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 1
    assert created["createdAt"] is not None

    fetched = client.get(f"/api/people/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Alice"


def test_create_requires_name_and_role(client):
    response = client.post("/api/people", json={"email": "a@x.com"})

    assert response.status_code == 422


def test_get_unknown_person(client):
    response = client.get("/api/people/404")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


def test_update_replaces_fields(client, people):
    person = people.add("Alice", "eng", "a@x.com")

    response = client.put(f"/api/people/{person.id}", json={"name": "Alice B", "role": "lead"})

    assert response.status_code == 200
    assert response.json()["email"] is None
    assert people.rows[person.id].role == "lead"


def test_update_unknown_person(client):
    response = client.put("/api/people/9", json={"name": "X", "role": "Y"})

    assert response.status_code == 404


def test_delete_person(client, people):
    person = people.add("Alice", "eng", "a@x.com")

    assert client.delete(f"/api/people/{person.id}").status_code == 204
    assert client.delete(f"/api/people/{person.id}").status_code == 404


def test_filters(client, people):
    people.add("Alice", "eng", "a@x.com")
    people.add("Bob", "ops", "b@x.com")
    people.add("alicia", "eng", "c@x.com")

    assert len(client.get("/api/people/role/eng").json()) == 2
    assert client.get("/api/people/count/role/eng").json() == 2
    assert [p["name"] for p in client.get("/api/people/search", params={"name": "ALI"}).json()] == ["Alice", "alicia"]
    assert client.get("/api/people/email/b@x.com").json()["name"] == "Bob"
    assert client.get("/api/people/email/nobody@x.com").status_code == 404


def test_create_keeps_supplied_created_at(client):
    response = client.post(
        "/api/people",
        json={"name": "Bob", "role": "ops", "createdAt": "2021-06-01T08:00:00"},
    )

    assert response.status_code == 201
    assert response.json()["createdAt"] == "2021-06-01T08:00:00"


def test_create_normalizes_offset_created_at_to_utc(client, people):
    response = client.post(
        "/api/people",
        json={"name": "Bob", "role": "ops", "createdAt": "2021-06-01T10:00:00+02:00"},
    )

    assert response.status_code == 201
    assert response.json()["createdAt"] == "2021-06-01T08:00:00"
    assert people.rows[response.json()["id"]].created_at.tzinfo is None


def test_created_after_accepts_utc_suffix(client, people):
    people.add("Old", "eng", None, datetime(2020, 1, 1))
    people.add("New", "eng", None, datetime(2024, 1, 1))

    response = client.get("/api/people/created-after", params={"startDate": "2023-01-01T00:00:00Z"})

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["New"]
