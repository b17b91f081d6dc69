"""Pay rule endpoints."""

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
from backend.app.db.context import RequestContext
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind, EntityStore
from backend.app.models.scheduling import PayRule, PayRuleTarget
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/payrule", tags=["pay-rules"])

# Target columns that must reference a row of the caller's organization
TARGET_KINDS = {
    "position_id": (EntityKind.position, ErrorMessages.POSITION_NOT_FOUND),
    "client_id": (EntityKind.client, ErrorMessages.CLIENT_NOT_FOUND),
    "location_id": (EntityKind.location, ErrorMessages.LOCATION_NOT_FOUND),
}


class CreatePayRuleRequest(BaseModel):
    """Request body for POST /api/payrule."""

    pay_rate: float = Field(..., ge=0)
    pay_code: str = Field(..., min_length=1, max_length=50)
    conditions: str | None = None
    applies_to: list[PayRuleTarget] = []


class UpdatePayRuleRequest(BaseModel):
    """Request body for PUT /api/payrule/{id}.

    A given applies_to replaces the previous targets entirely.
    """

    pay_rate: float | None = Field(None, ge=0)
    pay_code: str | None = Field(None, min_length=1, max_length=50)
    conditions: str | None = None
    applies_to: list[PayRuleTarget] | None = None


async def _check_targets(
    store: EntityStore, targets: list[PayRuleTarget], ctx: RequestContext
) -> list[dict[str, int | None]]:
    for target in targets:
        for column, (kind, message) in TARGET_KINDS.items():
            target_id = getattr(target, column)
            if target_id is not None:
                await get_owned(store, kind, target_id, ctx, message)
    return [target.model_dump() for target in targets]


@router.post("", response_model=SuccessEnvelope[PayRule], status_code=status.HTTP_201_CREATED)
async def create_pay_rule(
    request: CreatePayRuleRequest, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a pay rule.

    Returns:
        201 with the rule; 404 if a target position, client or location is
        not the caller's
    """
    values = request.model_dump(exclude={"applies_to"})
    values["applies_to"] = await _check_targets(store, request.applies_to, ctx)
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.pay_rule, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.PAY_RULE_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.PAY_RULE_CREATE, PayRule.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[PayRule]])
async def list_pay_rules(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    rows = await list_scoped(store, EntityKind.pay_rule, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PAY_RULE_ALL_FOUND))

    return envelope.success(
        SuccessMessages.PAY_RULE_ALL_FOUND, [PayRule.model_validate(row) for row in rows]
    )


@router.get("/{rule_id}", response_model=SuccessEnvelope[PayRule])
async def get_pay_rule(
    rule_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.pay_rule, rule_id, ctx, ErrorMessages.PAY_RULE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PAY_RULE_FOUND))

    return envelope.success(SuccessMessages.PAY_RULE_FOUND, PayRule.model_validate(row))


@router.put("/{rule_id}", response_model=SuccessEnvelope[PayRule])
async def update_pay_rule(
    rule_id: int,
    request: UpdatePayRuleRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    await get_owned(store, EntityKind.pay_rule, rule_id, ctx, ErrorMessages.PAY_RULE_NOT_FOUND)

    values = request.model_dump(exclude_none=True, exclude={"applies_to"})
    if request.applies_to is not None:
        values["applies_to"] = await _check_targets(store, request.applies_to, ctx)

    updated = await store.update(EntityKind.pay_rule, rule_id, values)
    if updated is None:
        raise NotFound(ErrorMessages.PAY_RULE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PAY_RULE_UPDATE))

    return envelope.success(SuccessMessages.PAY_RULE_UPDATE, PayRule.model_validate(updated))


@router.delete("/{rule_id}", response_model=SuccessEnvelope[PayRule])
async def delete_pay_rule(
    rule_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.pay_rule, rule_id, ctx, ErrorMessages.PAY_RULE_NOT_FOUND)

    await store.delete(EntityKind.pay_rule, rule_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PAY_RULE_DELETE))

    return envelope.success(SuccessMessages.PAY_RULE_DELETE, PayRule.model_validate(row))
