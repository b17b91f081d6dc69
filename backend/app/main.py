"""FastAPI application.

Serve with `uvicorn --factory backend.app.main:create_app`.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.errors import register_exception_handlers
from backend.app.api.routes.absences import router as absences_router
from backend.app.api.routes.clients import router as clients_router
from backend.app.api.routes.geofences import router as geofences_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.internal_notes import router as internal_notes_router
from backend.app.api.routes.invitations import router as invitations_router
from backend.app.api.routes.locations import router as locations_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.organizations import router as organizations_router
from backend.app.api.routes.pay_rules import router as pay_rules_router
from backend.app.api.routes.positions import router as positions_router
from backend.app.api.routes.profiles import router as profiles_router
from backend.app.api.routes.roles import router as roles_router
from backend.app.api.routes.shift_patterns import router as shift_patterns_router
from backend.app.api.routes.users import router as users_router
from backend.app.config import Settings, get_settings
from backend.app.db.engine import create_async_engine_from_settings, create_session_factory
from backend.app.db.repositories import EntityStore
from backend.app.db.sql_repositories import SqlEntityStore
from backend.app.notifications.mailer import LoggingMailer, Mailer
from backend.app.security.tokens import TokenService
from backend.app.utils.logging import AuditLogger


def create_app(
    settings: Settings | None = None,
    store: EntityStore | None = None,
    audit_logger: AuditLogger | None = None,
    mailer: Mailer | None = None,
) -> FastAPI:
    """Build the application and its collaborators.

    Args:
        settings: Settings (defaults to environment)
        store: Entity store (defaults to SQL store from DATABASE_URL)
        audit_logger: Audit client (defaults to LOGGER_URL)
        mailer: Outbound mail (defaults to logging only)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    if store is None:
        engine = create_async_engine_from_settings(settings)
        store = SqlEntityStore(engine, create_session_factory(engine))

    if audit_logger is None:
        audit_logger = AuditLogger(settings.logger_url, settings.logger_timeout_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if isinstance(store, SqlEntityStore) and settings.auto_create_tables:
            await store.create_all()
        yield
        await audit_logger.aclose()
        if isinstance(store, SqlEntityStore):
            await store.dispose()

    app = FastAPI(title="Workforce API", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.store = store
    app.state.audit_logger = audit_logger
    app.state.token_service = TokenService(settings.jwt_secret_key, settings.token_ttl_seconds)
    app.state.mailer = mailer or LoggingMailer(settings.mail_sender)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(organizations_router)
    app.include_router(users_router)
    app.include_router(profiles_router)
    app.include_router(clients_router)
    app.include_router(locations_router)
    app.include_router(positions_router)
    app.include_router(roles_router)
    app.include_router(geofences_router)
    app.include_router(shift_patterns_router)
    app.include_router(pay_rules_router)
    app.include_router(internal_notes_router)
    app.include_router(invitations_router)
    app.include_router(absences_router)

    return app
