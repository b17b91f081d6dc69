"""Unit tests for the in-memory entity store."""

import typing

import pytest

from backend.app.db.inmemory import InMemoryEntityStore
from backend.app.db.repositories import EntityKind, Row


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


async def _org(store: InMemoryEntityStore, name: str = "Acme") -> int:
    row = await store.create(
        EntityKind.organization,
        {"name": name, "business_email": f"{name.lower()}@example.com", "password_hash": "x"},
    )
    return int(row["id"])


@pytest.mark.asyncio
async def test_create_assigns_sequential_ids_per_kind(store: InMemoryEntityStore) -> None:
    first = await _org(store, "Acme")
    second = await _org(store, "Globex")
    client = await store.create(
        EntityKind.client, {"organization_id": first, "client_name": "C", "client_email": "c@x.io"}
    )

    assert (first, second) == (1, 2)
    assert client["id"] == 1
    assert client["created_at"] is not None


@pytest.mark.asyncio
async def test_rows_are_copies(store: InMemoryEntityStore) -> None:
    """Test mutating a returned row does not change the store."""
    org_id = await _org(store)

    row = await store.get(EntityKind.organization, org_id)
    assert row is not None
    row["name"] = "Changed"

    again = await store.get(EntityKind.organization, org_id)
    assert again is not None
    assert again["name"] == "Acme"


@pytest.mark.asyncio
async def test_find_one_and_list_filter_by_columns(store: InMemoryEntityStore) -> None:
    org_a = await _org(store, "Acme")
    org_b = await _org(store, "Globex")
    for org_id, name in [(org_a, "Ann"), (org_b, "Bob"), (org_a, "Cy")]:
        await store.create(
            EntityKind.profile, {"organization_id": org_id, "first_name": name, "last_name": "X"}
        )

    rows = await store.list(EntityKind.profile, organization_id=org_a)
    found = await store.find_one(EntityKind.profile, first_name="Bob")
    missing = await store.find_one(EntityKind.profile, first_name="Zed")

    assert [row["first_name"] for row in rows] == ["Ann", "Cy"]
    assert found is not None and found["organization_id"] == org_b
    assert missing is None


@pytest.mark.asyncio
async def test_update_keeps_primary_key(store: InMemoryEntityStore) -> None:
    org_id = await _org(store)

    updated = await store.update(EntityKind.organization, org_id, {"id": 99, "name": "Renamed"})

    assert updated is not None
    assert updated["id"] == org_id
    assert updated["name"] == "Renamed"
    assert await store.update(EntityKind.organization, 42, {"name": "nope"}) is None


@pytest.mark.asyncio
async def test_delete_organization_cascades_to_owned_rows(store: InMemoryEntityStore) -> None:
    """Test deleting an organization removes profiles, credentials, clients and locations."""
    org_id = await _org(store)
    profile = await store.create(
        EntityKind.profile, {"organization_id": org_id, "first_name": "Jane", "last_name": "Doe"}
    )
    credential = await store.create(
        EntityKind.user_credential,
        {"profile_id": profile["id"], "email": "jane@example.com", "password_hash": "x"},
    )
    client = await store.create(
        EntityKind.client, {"organization_id": org_id, "client_name": "C", "client_email": "c@x.io"}
    )
    location = await store.create(
        EntityKind.location,
        {"organization_id": org_id, "client_id": client["id"], "location_name": "Depot"},
    )

    deleted = await store.delete(EntityKind.organization, org_id)

    assert deleted is not None and deleted["id"] == org_id
    assert await store.get(EntityKind.profile, profile["id"]) is None
    assert await store.get(EntityKind.user_credential, credential["id"]) is None
    assert await store.get(EntityKind.client, client["id"]) is None
    assert await store.get(EntityKind.location, location["id"]) is None
    assert await store.find_user_credential_by_id(credential["id"]) is None


@pytest.mark.asyncio
async def test_delete_client_keeps_locations(store: InMemoryEntityStore) -> None:
    """Test locations outlive their client with client_id cleared."""
    org_id = await _org(store)
    client = await store.create(
        EntityKind.client, {"organization_id": org_id, "client_name": "C", "client_email": "c@x.io"}
    )
    location = await store.create(
        EntityKind.location,
        {"organization_id": org_id, "client_id": client["id"], "location_name": "Depot"},
    )

    await store.delete(EntityKind.client, client["id"])

    kept = await store.get(EntityKind.location, location["id"])
    assert kept is not None
    assert kept["client_id"] is None


@pytest.mark.asyncio
async def test_delete_missing_returns_none(store: InMemoryEntityStore) -> None:
    assert await store.delete(EntityKind.profile, 1) is None


@pytest.mark.asyncio
async def test_find_user_credential_by_id_includes_profile(store: InMemoryEntityStore) -> None:
    org_id = await _org(store)
    profile = await store.create(
        EntityKind.profile, {"organization_id": org_id, "first_name": "Jane", "last_name": "Doe"}
    )
    credential = await store.create(
        EntityKind.user_credential,
        {"profile_id": profile["id"], "email": "jane@example.com", "password_hash": "x"},
    )

    record = await store.find_user_credential_by_id(credential["id"])
    organization = await store.find_organization_by_id(org_id)

    assert record is not None and record.profile is not None
    assert record.email == "jane@example.com"
    assert record.profile.organization_id == org_id
    assert organization is not None and organization.name == "Acme"
    assert await store.find_organization_by_id(404) is None


def test_matching_annotation_resolves_to_builtin_list() -> None:
    """Test the helper's return hint is not shadowed by the list method."""
    hints = typing.get_type_hints(InMemoryEntityStore._matching)

    assert hints["return"] == list[Row]


@pytest.mark.asyncio
async def test_delete_profile_applies_staffing_foreign_keys(store: InMemoryEntityStore) -> None:
    org_id = await _org(store)
    profile = await store.create(
        EntityKind.profile, {"organization_id": org_id, "first_name": "Jane", "last_name": "Doe"}
    )
    writer = await store.create(
        EntityKind.profile, {"organization_id": org_id, "first_name": "Sam", "last_name": "Poe"}
    )
    position = await store.create(
        EntityKind.position,
        {"organization_id": org_id, "position_name": "Guard", "profile_id": profile["id"]},
    )
    absence = await store.create(
        EntityKind.absence,
        {"organization_id": org_id, "profile_id": profile["id"], "absence_type": "sick"},
    )
    note = await store.create(
        EntityKind.internal_note,
        {
            "organization_id": org_id,
            "profile_id": writer["id"],
            "owner_id": profile["id"],
            "description": "Punctual",
        },
    )

    await store.delete(EntityKind.profile, profile["id"])

    kept_position = await store.get(EntityKind.position, position["id"])
    kept_note = await store.get(EntityKind.internal_note, note["id"])
    assert await store.get(EntityKind.absence, absence["id"]) is None
    assert kept_position is not None and kept_position["profile_id"] is None
    assert kept_note is not None and kept_note["owner_id"] is None
