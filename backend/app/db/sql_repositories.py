"""SQL implementation of the entity store."""

from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from backend.app.db.models import (
    Absence,
    Base,
    Client,
    Geofence,
    InternalNote,
    Invitation,
    Location,
    Organization,
    PayRule,
    Position,
    Profile,
    Role,
    ShiftPattern,
    UserCredential,
)
from backend.app.db.repositories import (
    EntityKind,
    OrganizationRecord,
    Row,
    UserCredentialRecord,
    organization_record,
    profile_record,
)

MODELS: dict[EntityKind, type[Base]] = {
    EntityKind.organization: Organization,
    EntityKind.user_credential: UserCredential,
    EntityKind.profile: Profile,
    EntityKind.client: Client,
    EntityKind.location: Location,
    EntityKind.position: Position,
    EntityKind.role: Role,
    EntityKind.geofence: Geofence,
    EntityKind.shift_pattern: ShiftPattern,
    EntityKind.pay_rule: PayRule,
    EntityKind.internal_note: InternalNote,
    EntityKind.invitation: Invitation,
    EntityKind.absence: Absence,
}


def row_to_dict(obj: Base) -> Row:
    """Convert an ORM instance to a plain column dict."""
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


class SqlEntityStore:
    """SQL implementation of EntityStore.

    Each operation runs in its own session and commits before returning.
    """

    def __init__(self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._engine = engine
        self._session_factory = session_factory

    @property
    def engine(self) -> AsyncEngine:
        """Engine backing this store."""
        return self._engine

    async def create_all(self) -> None:
        """Create all tables (development and tests)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Release pooled connections."""
        await self._engine.dispose()

    async def get(self, kind: EntityKind, entity_id: int) -> Row | None:
        """Get a row by primary key."""
        async with self._session_factory() as session:
            obj = await session.get(MODELS[kind], entity_id)
            return row_to_dict(obj) if obj is not None else None

    async def find_one(self, kind: EntityKind, **filters: Any) -> Row | None:
        """Get the first row matching the filters."""
        model = MODELS[kind]
        async with self._session_factory() as session:
            result = await session.execute(
                select(model).filter_by(**filters).order_by(model.id).limit(1)  # type: ignore[attr-defined]
            )
            obj = result.scalar_one_or_none()
            return row_to_dict(obj) if obj is not None else None

    async def list(self, kind: EntityKind, **filters: Any) -> list[Row]:
        """List rows matching the filters."""
        model = MODELS[kind]
        async with self._session_factory() as session:
            result = await session.execute(
                select(model).filter_by(**filters).order_by(model.id)  # type: ignore[attr-defined]
            )
            return [row_to_dict(obj) for obj in result.scalars().all()]

    async def create(self, kind: EntityKind, values: Row) -> Row:
        """Insert a new row."""
        obj = MODELS[kind](**values)
        async with self._session_factory() as session:
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
            return row_to_dict(obj)

    async def update(self, kind: EntityKind, entity_id: int, values: Row) -> Row | None:
        """Update an existing row."""
        async with self._session_factory() as session:
            obj = await session.get(MODELS[kind], entity_id)
            if obj is None:
                return None

            for key, value in values.items():
                if key != "id":
                    setattr(obj, key, value)

            await session.commit()
            await session.refresh(obj)
            return row_to_dict(obj)

    async def delete(self, kind: EntityKind, entity_id: int) -> Row | None:
        """Delete a row; dependants follow the schema's ON DELETE rules."""
        async with self._session_factory() as session:
            obj = await session.get(MODELS[kind], entity_id)
            if obj is None:
                return None

            row = row_to_dict(obj)
            await session.delete(obj)
            await session.commit()
            return row

    async def find_organization_by_id(self, organization_id: int) -> OrganizationRecord | None:
        """Look up an organization."""
        row = await self.get(EntityKind.organization, organization_id)
        if row is None:
            return None
        return organization_record(row)

    async def find_user_credential_by_id(self, user_id: int) -> UserCredentialRecord | None:
        """Look up a user credential and its profile in one session."""
        async with self._session_factory() as session:
            credential = await session.get(UserCredential, user_id)
            if credential is None:
                return None

            profile = await session.get(Profile, credential.profile_id)
            return UserCredentialRecord(
                id=credential.id,
                email=credential.email,
                profile_id=credential.profile_id,
                profile=profile_record(row_to_dict(profile)) if profile is not None else None,
            )
