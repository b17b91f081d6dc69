"""Integration tests for staffing and scheduling endpoints."""

from fastapi.testclient import TestClient

from backend.app.db.repositories import EntityKind
from tests.conftest import Collector, FakeMailer, HeadersFactory, Seeder


def test_position_crud_and_assign(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory, collector: Collector
) -> None:
    org = seed.organization("Acme")
    profile = seed.profile(org["id"])
    headers = org_headers(org["id"])

    created = client.post("/api/position", json={"position_name": "Guard"}, headers=headers)
    assert created.status_code == 201
    position = created.json()["data"]
    assert position["profile_id"] is None

    assigned = client.put(f"/api/position/{position['id']}/assign/{profile['id']}", headers=headers)
    again = client.put(f"/api/position/{position['id']}/assign/{profile['id']}", headers=headers)

    assert assigned.status_code == 200
    assert assigned.json()["message"] == "Position assigned successfully"
    assert assigned.json()["data"]["profile_id"] == profile["id"]
    assert again.status_code == 400
    assert again.json() == {"success": False, "message": "Position already assigned"}

    renamed = client.put(
        f"/api/position/{position['id']}", json={"position_name": "Supervisor"}, headers=headers
    )
    assert renamed.json()["data"]["position_name"] == "Supervisor"

    deleted = client.delete(f"/api/position/{position['id']}", headers=headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/position/{position['id']}", headers=headers).status_code == 404
    assert collector.entries[0]["message"] == "Position created successfully"


def test_position_for_foreign_profile_returns_404(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    outsider = seed.profile(globex["id"])

    response = client.post(
        "/api/position",
        json={"position_name": "Guard", "profile_id": outsider["id"]},
        headers=org_headers(acme["id"]),
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Profile not found"


def test_role_type_is_unique_per_organization(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")

    first = client.post("/api/role", json={"role_type": "Manager"}, headers=org_headers(acme["id"]))
    duplicate = client.post("/api/role", json={"role_type": "Manager"}, headers=org_headers(acme["id"]))
    elsewhere = client.post(
        "/api/role", json={"role_type": "Manager"}, headers=org_headers(globex["id"])
    )

    assert first.status_code == 201
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Role type already exists"
    assert elsewhere.status_code == 201


def test_role_assign_twice_returns_400(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    profile = seed.profile(org["id"])
    headers = org_headers(org["id"])
    role = client.post("/api/role", json={"role_type": "Driver"}, headers=headers).json()["data"]

    assigned = client.put(f"/api/role/{role['id']}/{profile['id']}", headers=headers)
    again = client.put(f"/api/role/{role['id']}/{profile['id']}", headers=headers)

    assert assigned.status_code == 200
    assert assigned.json()["data"]["profile_id"] == profile["id"]
    assert again.status_code == 400
    assert again.json()["message"] == "Role Already Assigned"


def test_profile_caller_cannot_manage_roles(
    client: TestClient, seed: Seeder, user_headers: HeadersFactory
) -> None:
    org = seed.organization()
    profile = seed.profile(org["id"])
    headers = user_headers(seed.credential(profile["id"])["id"])

    created = client.post("/api/role", json={"role_type": "Manager"}, headers=headers)
    listed = client.get("/api/role", headers=headers)

    assert created.status_code == 403
    assert listed.status_code == 200
    assert listed.json()["data"] == []


def test_geofence_crud_and_filter(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    jane = seed.profile(org["id"], "Jane", "Doe")
    john = seed.profile(org["id"], "John", "Roe")
    headers = org_headers(org["id"])
    body = {"latitude": 53.8, "longitude": -1.55, "radius": 150, "status": "active"}

    created = client.post("/api/geofence", json={**body, "profile_id": jane["id"]}, headers=headers)
    client.post("/api/geofence", json={**body, "profile_id": john["id"]}, headers=headers)
    assert created.status_code == 201
    geofence = created.json()["data"]

    filtered = client.get("/api/geofence", params={"profile_id": jane["id"]}, headers=headers)
    assert [row["id"] for row in filtered.json()["data"]] == [geofence["id"]]

    updated = client.put(f"/api/geofence/{geofence['id']}", json={"radius": 300}, headers=headers)
    assert updated.json()["data"]["radius"] == 300
    assert updated.json()["data"]["profile_id"] == jane["id"]

    bad = client.post(
        "/api/geofence", json={**body, "latitude": 91, "profile_id": jane["id"]}, headers=headers
    )
    assert bad.status_code == 400


def test_shift_pattern_zeroes_counters_of_disabled_modes(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    location = seed.create(
        EntityKind.location, {"organization_id": org["id"], "location_name": "Depot"}
    )
    headers = org_headers(org["id"])

    created = client.post(
        "/api/shiftPatterns",
        json={
            "pattern_name": "Nights",
            "location_id": location["id"],
            "is_weekly": False,
            "repeat_week_num": 3,
            "is_on_and_off": True,
            "length_days": 4,
            "is_last_day_of_month": True,
            "repeat_month": 2,
        },
        headers=headers,
    )

    assert created.status_code == 201
    pattern = created.json()["data"]
    assert pattern["repeat_week_num"] == 0
    assert pattern["length_days"] == 4
    assert pattern["repeat_month"] == 0
    assert pattern["shift_instruction"] == ""

    weekly = client.put(
        f"/api/shiftPatterns/{pattern['id']}",
        json={"is_weekly": True, "repeat_week_num": 2, "is_on_and_off": False},
        headers=headers,
    )
    assert weekly.status_code == 200
    assert weekly.json()["data"]["repeat_week_num"] == 2
    assert weekly.json()["data"]["length_days"] == 0
    assert weekly.json()["data"]["pattern_name"] == "Nights"

    listed = client.get("/api/shiftPatterns", params={"location_id": location["id"]}, headers=headers)
    assert [row["id"] for row in listed.json()["data"]] == [pattern["id"]]


def test_shift_pattern_at_foreign_location_returns_404(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    location = seed.create(
        EntityKind.location, {"organization_id": globex["id"], "location_name": "Yard"}
    )

    response = client.post(
        "/api/shiftPatterns",
        json={"pattern_name": "Days", "location_id": location["id"]},
        headers=org_headers(acme["id"]),
    )

    assert response.status_code == 404


def test_pay_rule_targets_are_checked_and_replaced(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    own_client = seed.create(
        EntityKind.client,
        {"organization_id": acme["id"], "client_name": "A", "client_email": "a@a.test"},
    )
    foreign_client = seed.create(
        EntityKind.client,
        {"organization_id": globex["id"], "client_name": "G", "client_email": "g@g.test"},
    )
    headers = org_headers(acme["id"])

    foreign = client.post(
        "/api/payrule",
        json={"pay_rate": 12.5, "pay_code": "STD", "applies_to": [{"client_id": foreign_client["id"]}]},
        headers=headers,
    )
    assert foreign.status_code == 404
    assert foreign.json()["message"] == "Client not found"

    created = client.post(
        "/api/payrule",
        json={"pay_rate": 12.5, "pay_code": "STD", "applies_to": [{"client_id": own_client["id"]}]},
        headers=headers,
    )
    assert created.status_code == 201
    rule = created.json()["data"]
    assert rule["applies_to"][0]["client_id"] == own_client["id"]

    cleared = client.put(f"/api/payrule/{rule['id']}", json={"applies_to": []}, headers=headers)
    assert cleared.json()["data"]["applies_to"] == []
    assert cleared.json()["data"]["pay_code"] == "STD"


def test_internal_note_owner_rules(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory, user_headers: HeadersFactory
) -> None:
    org = seed.organization()
    subject = seed.profile(org["id"], "Sam", "Poe")
    writer = seed.profile(org["id"], "Jane", "Doe")
    writer_headers = user_headers(seed.credential(writer["id"])["id"])

    created = client.post(
        "/api/internalNotes",
        json={"profile_id": subject["id"], "description": "Reliable", "owner_id": 999},
        headers=writer_headers,
    )
    duplicate = client.post(
        "/api/internalNotes",
        json={"profile_id": subject["id"], "description": "Again"},
        headers=writer_headers,
    )

    assert created.status_code == 201
    note = created.json()["data"]
    assert note["owner_id"] == writer["id"]
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Note already exists"

    org_note = client.post(
        "/api/internalNotes",
        json={"profile_id": subject["id"], "description": "Org view"},
        headers=org_headers(org["id"]),
    ).json()["data"]

    edited = client.patch(
        f"/api/internalNotes/{note['id']}", json={"description": "Very reliable"}, headers=writer_headers
    )
    not_mine = client.patch(
        f"/api/internalNotes/{org_note['id']}", json={"description": "x"}, headers=writer_headers
    )

    assert edited.json()["data"]["description"] == "Very reliable"
    assert not_mine.status_code == 404
    assert client.delete(f"/api/internalNotes/{org_note['id']}", headers=writer_headers).status_code == 404


def test_invite_mails_each_address(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory, mailer: FakeMailer
) -> None:
    org = seed.organization()
    headers = org_headers(org["id"])

    response = client.post(
        "/api/invite", json={"emails": "ann@example.com, bob@example.com"}, headers=headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Invitation sent successfully",
        "data": {"sentEmails": ["ann@example.com", "bob@example.com"]},
    }
    assert [message.to for message in mailer.sent] == ["ann@example.com", "bob@example.com"]
    assert mailer.sent[0].subject == "You're Invited"
    assert 'href="http://localhost:3000/signup"' in mailer.sent[0].html

    listed = client.get("/api/invite", headers=headers).json()["data"]
    assert [row["email"] for row in listed] == ["ann@example.com", "bob@example.com"]
    assert all(row["is_sent"] for row in listed)

    deleted = client.delete(f"/api/invite/{listed[0]['id']}", headers=headers)
    assert deleted.json()["data"] == {"id": listed[0]["id"]}


def test_invite_with_malformed_address_sends_nothing(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory, mailer: FakeMailer
) -> None:
    org = seed.organization()

    response = client.post(
        "/api/invite", json={"emails": "ann@example.com; not-an-email"}, headers=org_headers(org["id"])
    )

    assert response.status_code == 400
    assert response.json()["message"] == (
        "Invalid email format. Use comma to separate email addresses."
    )
    assert mailer.sent == []


def test_absence_crud_and_duplicate(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    profile = seed.profile(org["id"])
    headers = org_headers(org["id"])
    body = {
        "profile_id": profile["id"],
        "absence_type": "holiday",
        "starting_date": "2026-07-01",
        "ending_date": "2026-07-05",
    }

    created = client.post("/api/absence", json=body, headers=headers)
    duplicate = client.post("/api/absence", json=body, headers=headers)

    assert created.status_code == 201
    absence = created.json()["data"]
    assert absence["is_paid"] is False
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Absence already exist"

    updated = client.put(
        f"/api/absence/{absence['id']}", json={"is_paid": True, "comment": "Approved"}, headers=headers
    )
    assert updated.json()["data"]["is_paid"] is True
    assert updated.json()["data"]["starting_date"] == "2026-07-01"

    assert client.delete(f"/api/absence/{absence['id']}", headers=headers).status_code == 200
    assert client.get("/api/absence", headers=headers).json()["data"] == []


def test_profile_caller_books_only_own_absences(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory, user_headers: HeadersFactory
) -> None:
    org = seed.organization()
    me = seed.profile(org["id"], "Jane", "Doe")
    colleague = seed.profile(org["id"], "John", "Roe")
    headers = user_headers(seed.credential(me["id"])["id"])
    dates = {"absence_type": "sick", "starting_date": "2026-03-02", "ending_date": "2026-03-03"}

    own = client.post("/api/absence", json={**dates, "profile_id": me["id"]}, headers=headers)
    other = client.post("/api/absence", json={**dates, "profile_id": colleague["id"]}, headers=headers)
    client.post(
        "/api/absence", json={**dates, "profile_id": colleague["id"]}, headers=org_headers(org["id"])
    )

    assert own.status_code == 201
    assert other.status_code == 404
    listed = client.get("/api/absence", headers=headers).json()["data"]
    assert [row["profile_id"] for row in listed] == [me["id"]]


def test_new_records_are_scoped_to_the_organization(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    acme = seed.organization("Acme")
    globex = seed.organization("Globex")
    position = client.post(
        "/api/position", json={"position_name": "Guard"}, headers=org_headers(acme["id"])
    ).json()["data"]
    rule = client.post(
        "/api/payrule", json={"pay_rate": 10, "pay_code": "STD"}, headers=org_headers(acme["id"])
    ).json()["data"]

    foreign = org_headers(globex["id"])

    assert client.get(f"/api/position/{position['id']}", headers=foreign).status_code == 404
    assert client.delete(f"/api/payrule/{rule['id']}", headers=foreign).status_code == 404
    assert client.get("/api/position", headers=foreign).json()["data"] == []


def test_deleting_profile_removes_its_staffing_records(
    client: TestClient, seed: Seeder, org_headers: HeadersFactory
) -> None:
    org = seed.organization()
    profile = seed.profile(org["id"])
    headers = org_headers(org["id"])
    position = client.post(
        "/api/position", json={"position_name": "Guard", "profile_id": profile["id"]}, headers=headers
    ).json()["data"]
    geofence = client.post(
        "/api/geofence",
        json={
            "profile_id": profile["id"],
            "latitude": 0,
            "longitude": 0,
            "radius": 10,
            "status": "active",
        },
        headers=headers,
    ).json()["data"]

    client.delete(f"/api/profile/{profile['id']}", headers=headers)

    assert seed.get(EntityKind.geofence, geofence["id"]) is None
    kept = seed.get(EntityKind.position, position["id"])
    assert kept is not None and kept["profile_id"] is None
