"""In-memory implementation of the entity store."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any

from backend.app.db.repositories import (
    EntityKind,
    OrganizationRecord,
    Row,
    UserCredentialRecord,
    organization_record,
    profile_record,
)

# (child, column, parent, on_delete) mirroring backend/app/db/models.py
FOREIGN_KEYS: list[tuple[EntityKind, str, EntityKind, str]] = [
    (EntityKind.profile, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.client, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.location, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.user_credential, "profile_id", EntityKind.profile, "CASCADE"),
    (EntityKind.location, "client_id", EntityKind.client, "SET NULL"),
    (EntityKind.position, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.position, "profile_id", EntityKind.profile, "SET NULL"),
    (EntityKind.role, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.role, "profile_id", EntityKind.profile, "SET NULL"),
    (EntityKind.geofence, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.geofence, "profile_id", EntityKind.profile, "CASCADE"),
    (EntityKind.shift_pattern, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.shift_pattern, "location_id", EntityKind.location, "CASCADE"),
    (EntityKind.pay_rule, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.internal_note, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.internal_note, "profile_id", EntityKind.profile, "CASCADE"),
    (EntityKind.internal_note, "owner_id", EntityKind.profile, "SET NULL"),
    (EntityKind.invitation, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.absence, "organization_id", EntityKind.organization, "CASCADE"),
    (EntityKind.absence, "profile_id", EntityKind.profile, "CASCADE"),
]


class InMemoryEntityStore:
    """In-memory implementation of EntityStore.

    Rows are copied on the way in and out so callers never share state
    with the store.
    """

    def __init__(self) -> None:
        self._tables: dict[EntityKind, dict[int, Row]] = {kind: {} for kind in EntityKind}
        self._next_ids: dict[EntityKind, int] = {kind: 1 for kind in EntityKind}

    async def get(self, kind: EntityKind, entity_id: int) -> Row | None:
        """Get a row by primary key."""
        row = self._tables[kind].get(entity_id)
        return copy.deepcopy(row) if row is not None else None

    async def find_one(self, kind: EntityKind, **filters: Any) -> Row | None:
        """Get the first row matching the filters."""
        for row in self._matching(kind, filters):
            return copy.deepcopy(row)
        return None

    async def list(self, kind: EntityKind, **filters: Any) -> list[Row]:
        """List rows matching the filters."""
        return [copy.deepcopy(row) for row in self._matching(kind, filters)]

    async def create(self, kind: EntityKind, values: Row) -> Row:
        """Insert a new row."""
        entity_id = self._next_ids[kind]
        self._next_ids[kind] = entity_id + 1

        row = copy.deepcopy(values)
        row["id"] = entity_id
        row.setdefault("created_at", datetime.now(timezone.utc))
        self._tables[kind][entity_id] = row
        return copy.deepcopy(row)

    async def update(self, kind: EntityKind, entity_id: int, values: Row) -> Row | None:
        """Update an existing row."""
        row = self._tables[kind].get(entity_id)
        if row is None:
            return None

        # Primary key is immutable
        row.update({k: copy.deepcopy(v) for k, v in values.items() if k != "id"})
        return copy.deepcopy(row)

    async def delete(self, kind: EntityKind, entity_id: int) -> Row | None:
        """Delete a row, applying the same ON DELETE rules as the SQL schema."""
        row = self._tables[kind].pop(entity_id, None)
        if row is None:
            return None

        for child_kind, column, parent_kind, on_delete in FOREIGN_KEYS:
            if parent_kind != kind:
                continue
            for child in list(self._tables[child_kind].values()):
                if child.get(column) != entity_id:
                    continue
                if on_delete == "CASCADE":
                    await self.delete(child_kind, child["id"])
                else:
                    child[column] = None

        return row

    async def find_organization_by_id(self, organization_id: int) -> OrganizationRecord | None:
        """Look up an organization."""
        row = self._tables[EntityKind.organization].get(organization_id)
        if row is None:
            return None
        return organization_record(row)

    async def find_user_credential_by_id(self, user_id: int) -> UserCredentialRecord | None:
        """Look up a user credential and its profile."""
        row = self._tables[EntityKind.user_credential].get(user_id)
        if row is None:
            return None

        profile_row = self._tables[EntityKind.profile].get(row["profile_id"])
        return UserCredentialRecord(
            id=row["id"],
            email=row["email"],
            profile_id=row["profile_id"],
            profile=profile_record(profile_row) if profile_row is not None else None,
        )

    def _matching(self, kind: EntityKind, filters: dict[str, Any]) -> list[Row]:
        rows = sorted(self._tables[kind].values(), key=lambda r: r["id"])
        return [row for row in rows if all(row.get(k) == v for k, v in filters.items())]
