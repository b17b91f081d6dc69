"""Audit log client - best-effort submission to the remote collector."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.app.db.context import RequestContext
from backend.app.utils.metrics import metrics

logger = logging.getLogger(__name__)


class AuditEntry(BaseModel):
    """Structured record of who did what, with what outcome.

    Fields beyond the known ones pass through to the collector verbatim.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    level: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    success: bool | None = None
    user_type: str | None = Field(None, alias="userType")
    owner: str | None = None
    status: int | None = None

    @classmethod
    def for_context(
        cls,
        ctx: RequestContext,
        message: str,
        *,
        status: int = 200,
        level: str = "info",
        success: bool = True,
    ) -> "AuditEntry":
        """Build the standard entry for an authenticated caller."""
        return cls(
            level=level,
            message=message,
            success=success,
            user_type=ctx.user_type,
            owner=ctx.owner,
            status=status,
        )

    def payload(self) -> dict[str, Any]:
        """Wire form sent to the collector."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


@dataclass(frozen=True)
class AuditResult:
    """Outcome of a submission. Callers may ignore it."""

    delivered: bool
    error: str | None = None


class AuditLogger:
    """Submits audit entries to the remote collector.

    One POST per entry, no retry, no buffering. Failures are logged
    locally and reported through AuditResult, never raised.
    """

    def __init__(
        self,
        url: str | None,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize audit logger.

        Args:
            url: Collector endpoint (LOGGER_URL); None logs locally only
            timeout_seconds: Per-request timeout for the collector
            client: Optional httpx client (for testing with mocks)
        """
        self._url = url
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout_seconds)

    async def submit(self, entry: AuditEntry | Mapping[str, Any]) -> AuditResult:
        """Submit one entry to the collector."""
        if not isinstance(entry, AuditEntry):
            try:
                entry = AuditEntry.model_validate(dict(entry))
            except ValidationError:
                logger.warning(
                    "Audit entry rejected: level and message are required",
                    extra={"structured": {"entry": dict(entry)}},
                )
                metrics.inc_audit_submission("rejected")
                return AuditResult(delivered=False, error="invalid_entry")

        payload = entry.payload()
        logger.info("Audit: %s", entry.message, extra={"structured": payload})

        if not self._url:
            metrics.inc_audit_submission("not_configured")
            return AuditResult(delivered=False, error="not_configured")

        try:
            response = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(
                "Audit submission failed: %s",
                type(e).__name__,
                extra={"structured": {"url": self._url, "error": str(e)}},
            )
            metrics.inc_audit_submission("network_error")
            return AuditResult(delivered=False, error=type(e).__name__)
        except Exception as e:
            logger.exception("Audit submission failed unexpectedly")
            metrics.inc_audit_submission("network_error")
            return AuditResult(delivered=False, error=type(e).__name__)

        if not response.is_success:
            logger.warning(
                "Audit collector answered %s",
                response.status_code,
                extra={"structured": {"url": self._url, "body": response.text[:500]}},
            )
            metrics.inc_audit_submission("rejected_by_collector")
            return AuditResult(delivered=False, error=f"status_{response.status_code}")

        metrics.inc_audit_submission("delivered")
        return AuditResult(delivered=True)

    async def aclose(self) -> None:
        """Close the HTTP client if this logger created it."""
        if self._owns_client:
            await self._client.aclose()
