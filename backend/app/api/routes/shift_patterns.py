"""Shift pattern endpoints."""

from collections.abc import Callable
from datetime import date, time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import NotFound
from backend.app.api.lookups import get_owned
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind, Row
from backend.app.models.scheduling import ShiftPattern
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/shiftPatterns", tags=["shift-patterns"])

# (counter, enabled when) - a counter is kept only while its mode is on
RECURRENCE_COUNTERS: list[tuple[str, Callable[[Row], bool]]] = [
    ("repeat_week_num", lambda p: p["is_weekly"]),
    ("length_days", lambda p: p["is_on_and_off"]),
    ("days", lambda p: p["is_specific_month"]),
    ("repeat_month", lambda p: p["is_specific_month"] or not p["is_last_day_of_month"]),
    ("auto_extend_month", lambda p: p["is_auto_extend"]),
    ("auto_extend_days_before_period", lambda p: p["is_auto_extend"]),
]


class ShiftPatternFields(BaseModel):
    pattern_type: str | None = Field(None, max_length=50)
    is_weekly: bool | None = None
    repeat_week_num: int | None = Field(None, ge=0)
    is_on_and_off: bool | None = None
    length_days: int | None = Field(None, ge=0)
    is_specific_month: bool | None = None
    days: int | None = Field(None, ge=0, le=31)
    repeat_month: int | None = Field(None, ge=0)
    is_last_day_of_month: bool | None = None
    period_starting_date: date | None = None
    period_ending_date: date | None = None
    is_applied_on_bank_holidays: bool | None = None
    is_auto_extend: bool | None = None
    auto_extend_month: int | None = Field(None, ge=0)
    auto_extend_days_before_period: int | None = Field(None, ge=0)
    period_starting_time: time | None = None
    period_ending_time: time | None = None
    shift_instruction: str | None = None


class CreateShiftPatternRequest(ShiftPatternFields):
    """Request body for POST /api/shiftPatterns."""

    pattern_name: str = Field(..., min_length=1, max_length=200)
    location_id: int


class UpdateShiftPatternRequest(ShiftPatternFields):
    """Request body for PUT /api/shiftPatterns/{id}."""

    pattern_name: str | None = Field(None, min_length=1, max_length=200)
    location_id: int | None = None


def normalize_recurrence(pattern: Row) -> Row:
    """Fill defaults and zero the counters of disabled recurrence modes."""
    normalized = {
        "is_weekly": False,
        "is_on_and_off": False,
        "is_specific_month": False,
        "is_last_day_of_month": False,
        "is_applied_on_bank_holidays": False,
        "is_auto_extend": False,
        "shift_instruction": "",
        **{key: value for key, value in pattern.items() if value is not None},
    }
    for counter, enabled in RECURRENCE_COUNTERS:
        normalized[counter] = normalized.get(counter, 0) if enabled(normalized) else 0
    return normalized


@router.post("", response_model=SuccessEnvelope[ShiftPattern], status_code=status.HTTP_201_CREATED)
async def create_shift_pattern(
    request: CreateShiftPatternRequest, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a shift pattern at one of the caller's locations.

    Returns:
        201 with the pattern; 404 if the location is not the caller's
    """
    await get_owned(store, EntityKind.location, request.location_id, ctx, ErrorMessages.LOCATION_NOT_FOUND)

    values = normalize_recurrence(request.model_dump())
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.shift_pattern, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.SHIFT_PATTERN_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.SHIFT_PATTERN_CREATE, ShiftPattern.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[ShiftPattern]])
async def list_shift_patterns(
    ctx: CurrentContext, store: StoreDep, audit: AuditDep, location_id: int | None = None
) -> JSONResponse:
    filters = {} if location_id is None else {"location_id": location_id}
    rows = await list_scoped(store, EntityKind.shift_pattern, ctx, **filters)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.SHIFT_PATTERN_ALL_FOUND))

    return envelope.success(
        SuccessMessages.SHIFT_PATTERN_ALL_FOUND, [ShiftPattern.model_validate(row) for row in rows]
    )


@router.get("/{pattern_id}", response_model=SuccessEnvelope[ShiftPattern])
async def get_shift_pattern(
    pattern_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(
        store, EntityKind.shift_pattern, pattern_id, ctx, ErrorMessages.SHIFT_PATTERN_NOT_FOUND
    )

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.SHIFT_PATTERN_FOUND))

    return envelope.success(SuccessMessages.SHIFT_PATTERN_FOUND, ShiftPattern.model_validate(row))


@router.put("/{pattern_id}", response_model=SuccessEnvelope[ShiftPattern])
async def update_shift_pattern(
    pattern_id: int,
    request: UpdateShiftPatternRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    """Update a shift pattern; the merged pattern is normalized again."""
    row = await get_owned(
        store, EntityKind.shift_pattern, pattern_id, ctx, ErrorMessages.SHIFT_PATTERN_NOT_FOUND
    )

    values = request.model_dump(exclude_none=True)
    if "location_id" in values:
        await get_owned(
            store, EntityKind.location, values["location_id"], ctx, ErrorMessages.LOCATION_NOT_FOUND
        )

    merged = normalize_recurrence({**row, **values})
    changes = {key: value for key, value in merged.items() if row.get(key) != value}

    updated = await store.update(EntityKind.shift_pattern, pattern_id, changes)
    if updated is None:
        raise NotFound(ErrorMessages.SHIFT_PATTERN_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.SHIFT_PATTERN_UPDATE))

    return envelope.success(SuccessMessages.SHIFT_PATTERN_UPDATE, ShiftPattern.model_validate(updated))


@router.delete("/{pattern_id}", response_model=SuccessEnvelope[ShiftPattern])
async def delete_shift_pattern(
    pattern_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(
        store, EntityKind.shift_pattern, pattern_id, ctx, ErrorMessages.SHIFT_PATTERN_NOT_FOUND
    )

    await store.delete(EntityKind.shift_pattern, pattern_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.SHIFT_PATTERN_DELETE))

    return envelope.success(SuccessMessages.SHIFT_PATTERN_DELETE, ShiftPattern.model_validate(row))
