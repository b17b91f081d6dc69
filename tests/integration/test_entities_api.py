"""Integration tests for profile, client and location endpoints."""

from fastapi.testclient import TestClient

from backend.app.db.repositories import EntityKind
from tests.conftest import Collector, HeadersFactory, Seeder


def test_profile_crud(client: TestClient, seed: Seeder, org_headers: HeadersFactory) -> None:
    org = seed.organization()
    headers = org_headers(org["id"])

    created = client.post(
        "/api/profile",
        json={"first_name": "Jane", "last_name": "Doe", "date_of_birth": "1990-04-01"},
        headers=headers,
    )
    assert created.status_code == 201
    profile = created.json()["data"]
    assert profile["organization_id"] == org["id"]
    assert profile["date_of_birth"] == "1990-04-01"
    assert profile["is_active"] is True

    updated = client.put(f"/api/profile/{profile['id']}", json={"city": "Leeds"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["city"] == "Leeds"
    assert updated.json()["data"]["first_name"] == "Jane"

    fetched = client.get(f"/api/profile/{profile['id']}", headers=headers)
    assert fetched.json()["message"] == "Profile found"

    deleted = client.delete(f"/api/profile/{profile['id']}", headers=headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/profile/{profile['id']}", headers=headers).status_code == 404


def test_profile_duplicate_contract_number_returns_400(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    headers = org_headers(org["id"])
    body = {"first_name": "Jane", "last_name": "Doe", "contract_no": 7}

    first = client.post("/api/profile", json=body, headers=headers)
    second = client.post("/api/profile", json=body, headers=headers)

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["message"] == "Profile already exists"


def test_profile_caller_may_only_update_itself(
    client: TestClient, seed: Seeder, user_headers: HeadersFactory
) -> None:
    org = seed.organization()
    me = seed.profile(org["id"], "Jane", "Doe")
    colleague = seed.profile(org["id"], "John", "Roe")
    headers = user_headers(seed.credential(me["id"])["id"])

    own = client.put(f"/api/profile/{me['id']}", json={"mobile_no": "07000"}, headers=headers)
    other = client.put(f"/api/profile/{colleague['id']}", json={"mobile_no": "07000"}, headers=headers)
    create = client.post("/api/profile", json={"first_name": "A", "last_name": "B"}, headers=headers)

    assert own.status_code == 200
    assert other.status_code == 404
    assert create.status_code == 403


def test_client_crud_and_duplicate_email(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory, collector: Collector
) -> None:
    org = seed.organization("Acme")
    headers = org_headers(org["id"])
    body = {"client_name": "Globex", "client_email": "hq@globex.test", "city": "Springfield"}

    created = client.post("/api/client", json=body, headers=headers)
    duplicate = client.post("/api/client", json=body, headers=headers)

    assert created.status_code == 201
    assert created.json()["message"] == "Client created successfully"
    assert duplicate.status_code == 400
    assert duplicate.json() == {"success": False, "message": "Client already Exist"}

    client_id = created.json()["data"]["id"]
    updated = client.put(f"/api/client/{client_id}", json={"vat_no": "GB123"}, headers=headers)
    assert updated.json()["data"]["vat_no"] == "GB123"

    listed = client.get("/api/client", headers=headers)
    assert [row["client_name"] for row in listed.json()["data"]] == ["Globex"]

    assert [entry["message"] for entry in collector.entries] == [
        "Client created successfully",
        "Client updated successfully",
        "All clients retrieved successfully",
    ]


def test_same_client_email_allowed_in_other_organization(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    body = {"client_name": "Initech", "client_email": "hq@initech.test"}

    first = client.post("/api/client", json=body, headers=org_headers(acme["id"]))
    second = client.post("/api/client", json=body, headers=org_headers(globex["id"]))

    assert first.status_code == 201
    assert second.status_code == 201


def test_location_requires_client_of_same_organization(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    foreign_client = seed.create(
        EntityKind.client,
        {"organization_id": globex["id"], "client_name": "G", "client_email": "g@g.test"},
    )

    response = client.post(
        "/api/location",
        json={"location_name": "Depot", "client_id": foreign_client["id"]},
        headers=org_headers(acme["id"]),
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Client not found"


def test_location_name_unique_per_client(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    headers = org_headers(org["id"])
    north = seed.create(
        EntityKind.client, {"organization_id": org["id"], "client_name": "N", "client_email": "n@n.test"}
    )
    south = seed.create(
        EntityKind.client, {"organization_id": org["id"], "client_name": "S", "client_email": "s@s.test"}
    )

    first = client.post(
        "/api/location", json={"location_name": "Depot", "client_id": north["id"]}, headers=headers
    )
    duplicate = client.post(
        "/api/location", json={"location_name": "Depot", "client_id": north["id"]}, headers=headers
    )
    other_client = client.post(
        "/api/location", json={"location_name": "Depot", "client_id": south["id"]}, headers=headers
    )

    assert first.status_code == 201
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Location already Exist"
    assert other_client.status_code == 201

    by_client = client.get(f"/api/location?client_id={south['id']}", headers=headers)
    assert [row["id"] for row in by_client.json()["data"]] == [other_client.json()["data"]["id"]]


def test_deleting_client_keeps_its_locations(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    headers = org_headers(org["id"])
    owner = seed.create(
        EntityKind.client, {"organization_id": org["id"], "client_name": "C", "client_email": "c@c.test"}
    )
    location = client.post(
        "/api/location", json={"location_name": "Depot", "client_id": owner["id"]}, headers=headers
    ).json()["data"]

    client.delete(f"/api/client/{owner['id']}", headers=headers)
    kept = client.get(f"/api/location/{location['id']}", headers=headers)

    assert kept.status_code == 200
    assert kept.json()["data"]["client_id"] is None


def test_entities_are_invisible_across_organizations(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    """Test another organization's rows read as not found and are left untouched."""
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    theirs = seed.create(
        EntityKind.client, {"organization_id": globex["id"], "client_name": "G", "client_email": "g@g.test"}
    )
    headers = org_headers(acme["id"])

    fetched = client.get(f"/api/client/{theirs['id']}", headers=headers)
    updated = client.put(f"/api/client/{theirs['id']}", json={"client_name": "Mine"}, headers=headers)
    deleted = client.delete(f"/api/client/{theirs['id']}", headers=headers)
    listed = client.get("/api/client", headers=headers)

    assert fetched.status_code == 404
    assert updated.status_code == 404
    assert deleted.status_code == 404
    assert listed.json()["data"] == []
    stored = seed.get(EntityKind.client, theirs["id"])
    assert stored is not None and stored["client_name"] == "G"
