"""
Health endpoints for the site settings service.

- /health: option store, schema migrations and field registry, with uptime
- /health/ready: 200 only once startup finished and every check passes
- /health/live: liveness check (process alive)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from site_api.components.site_settings import DEFAULT_REGISTRY, FieldRegistry


@dataclass
class HealthResult:
    """Outcome of one check."""

    name: str
    ok: bool
    message: str = ""
    latency_ms: float = 0.0
    details: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": "healthy" if self.ok else "unhealthy",
            "message": self.message,
            "latency_ms": round(self.latency_ms, 3),
            **self.details,
        }


class SiteHealth:
    """
    Checks for the pieces a settings request depends on.

    The option store and migrator hooks are attached during startup; until
    then their checks report "not configured" and readiness stays false.
    """

    def __init__(self, registry: FieldRegistry | None = None) -> None:
        self._registry = registry or DEFAULT_REGISTRY
        self._store_ping: Callable[[], Any] | None = None
        self._pending_migrations: Callable[[], list[str]] | None = None
        self._started_at: float | None = None

    def attach(
        self,
        store_ping: Callable[[], Any] | None = None,
        pending_migrations: Callable[[], list[str]] | None = None,
    ) -> None:
        """Wire the store and migration hooks, replacing earlier ones."""
        self._store_ping = store_ping
        self._pending_migrations = pending_migrations

    def mark_started(self) -> None:
        """Record that startup has finished."""
        self._started_at = time.time()

    def reset(self) -> None:
        """Forget hooks and startup time."""
        self.attach()
        self._started_at = None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    @property
    def uptime_seconds(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.time() - self._started_at

    def check_option_store(self) -> HealthResult:
        """Query the options table."""
        if self._store_ping is None:
            return HealthResult("option_store", ok=False, message="Option store not configured")

        start = time.time()
        try:
            self._store_ping()
        except Exception as e:
            return HealthResult(
                "option_store",
                ok=False,
                message=f"Option store error: {e!s}",
                latency_ms=(time.time() - start) * 1000,
            )
        return HealthResult(
            "option_store",
            ok=True,
            message="Option store reachable",
            latency_ms=(time.time() - start) * 1000,
        )

    def check_migrations(self) -> HealthResult:
        """Report migrations that have not been applied yet."""
        if self._pending_migrations is None:
            return HealthResult("migrations", ok=False, message="Migrations not configured")

        try:
            pending = self._pending_migrations()
        except Exception as e:
            return HealthResult("migrations", ok=False, message=f"Migration state unknown: {e!s}")
        if pending:
            return HealthResult(
                "migrations",
                ok=False,
                message=f"{len(pending)} pending migration(s)",
                details={"pending": pending},
            )
        return HealthResult("migrations", ok=True, message="Schema up to date")

    def check_fields(self) -> HealthResult:
        """At least one field must be backed by a storage key."""
        mapped = len(self._registry.mapped())
        return HealthResult(
            "fields",
            ok=mapped > 0,
            message=f"{mapped} of {len(self._registry)} fields mapped",
            details={"mapped": mapped, "registered": len(self._registry)},
        )

    def run(self) -> list[HealthResult]:
        return [self.check_option_store(), self.check_migrations(), self.check_fields()]


site_health = SiteHealth()


def create_health_router(version: str = "0.0.0", health: SiteHealth | None = None) -> APIRouter:
    """
    Create FastAPI router for health endpoints.

    Args:
        version: Application version string
        health: Checks to report on (uses the module-level one if None)
    """
    router = APIRouter(tags=["health"])
    checks = health or site_health

    @router.get(
        "/health",
        response_model=None,
        responses={
            200: {"description": "Service is healthy"},
            503: {"description": "Service is unhealthy"},
        },
    )
    def health_check() -> JSONResponse:
        results = checks.run()
        healthy = checks.started and all(r.ok for r in results)
        return JSONResponse(
            content={
                "status": "healthy" if healthy else "unhealthy",
                "version": version,
                "started": checks.started,
                "uptime_seconds": checks.uptime_seconds,
                "checks": [r.as_dict() for r in results],
            },
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    @router.get(
        "/health/ready",
        response_model=None,
        responses={
            200: {"description": "Service is ready to accept traffic"},
            503: {"description": "Service is not ready"},
        },
    )
    def readiness_check() -> JSONResponse:
        """Readiness check: startup done and every check passes."""
        results = checks.run()
        ready = checks.started and all(r.ok for r in results)
        return JSONResponse(
            content={
                "ready": ready,
                "checks": [{"name": r.name, "ok": r.ok, "message": r.message} for r in results],
            },
            status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    @router.get(
        "/health/live",
        response_model=None,
        responses={200: {"description": "Service process is alive"}},
    )
    def liveness_check() -> dict[str, Any]:
        return {"alive": True, "uptime_seconds": checks.uptime_seconds}

    return router
