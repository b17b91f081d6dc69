"""Prometheus metrics for authorization and audit logging."""

from prometheus_client import Counter

auth_failures_total = Counter(
    "auth_failures_total",
    "Total requests rejected by the authorization dependency",
    ["reason"],
)

audit_submissions_total = Counter(
    "audit_submissions_total",
    "Total audit log submissions by outcome",
    ["outcome"],
)


class PrometheusAuditMetrics:
    """Prometheus-based audit/auth metrics implementation."""

    def inc_auth_failure(self, reason: str) -> None:
        """Increment auth failure counter."""
        auth_failures_total.labels(reason=reason).inc()

    def inc_audit_submission(self, outcome: str) -> None:
        """Increment audit submission counter."""
        audit_submissions_total.labels(outcome=outcome).inc()


metrics = PrometheusAuditMetrics()
