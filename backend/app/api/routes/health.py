"""Liveness endpoints."""

from typing import Any

from fastapi import APIRouter, Request, Response, status
from sqlalchemy import text

from backend.app.api.messages import SuccessMessages
from backend.app.db.sql_repositories import SqlEntityStore

router = APIRouter()


async def check_db(request: Request) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    store = request.app.state.store
    if not isinstance(store, SqlEntityStore):
        return (True, "in_memory")

    try:
        async with store.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


async def check_audit(request: Request) -> tuple[bool, str]:
    """Report whether the remote audit collector is configured.

    The collector is best-effort, so it never degrades health.
    """
    settings = request.app.state.settings
    return (True, "configured" if settings.logger_url else "not_configured")


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": SuccessMessages.API_RUNNING}


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(request: Request, response: Response) -> dict[str, Any]:
    """Health check with component details.

    Returns:
        200 with component status if the database is reachable, else 503
    """
    db_ok, db_status = await check_db(request)
    _, audit_status = await check_audit(request)

    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ok" if db_ok else "degraded",
        "components": {
            "db": db_status,
            "audit": audit_status,
        },
    }
