"""Request-scoped access to the collaborators built at startup."""

from typing import Annotated

from fastapi import Depends, Request

from backend.app.config import Settings
from backend.app.db.repositories import EntityStore
from backend.app.notifications.mailer import Mailer
from backend.app.security.tokens import TokenService
from backend.app.utils.logging import AuditLogger


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings  # type: ignore[no-any-return]


def get_store(request: Request) -> EntityStore:
    """Entity store constructed at process start."""
    return request.app.state.store  # type: ignore[no-any-return]


def get_audit_logger(request: Request) -> AuditLogger:
    """Audit logger constructed at process start."""
    return request.app.state.audit_logger  # type: ignore[no-any-return]


def get_token_service(request: Request) -> TokenService:
    """Token service constructed at process start."""
    return request.app.state.token_service  # type: ignore[no-any-return]


def get_mailer(request: Request) -> Mailer:
    """Mailer constructed at process start."""
    return request.app.state.mailer  # type: ignore[no-any-return]


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
StoreDep = Annotated[EntityStore, Depends(get_store)]
AuditDep = Annotated[AuditLogger, Depends(get_audit_logger)]
TokensDep = Annotated[TokenService, Depends(get_token_service)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
