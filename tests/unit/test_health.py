"""
Tests for health endpoints.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from site_api.adapters.sqlite.migrator import SQLiteMigrator
from site_api.adapters.sqlite.repos import SQLiteOptionStore
from site_api.components.site_settings import FieldDescriptor, FieldRegistry
from site_api.shell.http.health import SiteHealth, create_health_router


def broken_ping() -> None:
    raise RuntimeError("no such table: options")


@pytest.fixture
def health() -> SiteHealth:
    return SiteHealth()


@pytest.fixture
def client(health: SiteHealth) -> TestClient:
    app = FastAPI()
    app.include_router(create_health_router(version="1.2.3", health=health))
    return TestClient(app)


class TestChecks:
    def test_unconfigured_checks_fail(self, health: SiteHealth) -> None:
        assert health.check_option_store().ok is False
        assert health.check_migrations().ok is False

    def test_option_store_failure(self, health: SiteHealth) -> None:
        health.attach(store_ping=broken_ping)

        check = health.check_option_store()

        assert check.ok is False
        assert "no such table" in check.message

    def test_pending_migrations_reported(self, health: SiteHealth) -> None:
        health.attach(pending_migrations=lambda: ["002_extra.sql"])

        check = health.check_migrations()

        assert check.ok is False
        assert check.details == {"pending": ["002_extra.sql"]}

    def test_migrations_against_sqlite(self, health, tmp_path, migrations_dir) -> None:
        migrator = SQLiteMigrator(str(tmp_path / "site.db"), str(migrations_dir))
        health.attach(pending_migrations=migrator.pending_migrations)
        assert health.check_migrations().ok is False

        migrator.run_migrations()

        assert migrator.pending_migrations() == []
        assert health.check_migrations().ok is True

    def test_fields_counts_mapped_descriptors(self) -> None:
        registry = FieldRegistry(
            [
                FieldDescriptor(name="title", storage_key="blogname", value_type="string"),
                FieldDescriptor(name="legacy", storage_key=None, value_type="string"),
            ]
        )

        check = SiteHealth(registry).check_fields()

        assert check.ok is True
        assert check.details == {"mapped": 1, "registered": 2}

    def test_fields_fail_without_mapped_descriptors(self) -> None:
        registry = FieldRegistry(
            [FieldDescriptor(name="legacy", storage_key=None, value_type="string")]
        )
        assert SiteHealth(registry).check_fields().ok is False

    def test_default_registry_is_fully_mapped(self, health: SiteHealth) -> None:
        assert health.check_fields().details == {"mapped": 13, "registered": 13}

    def test_reset_forgets_startup(self, health: SiteHealth) -> None:
        health.mark_started()
        assert health.started is True

        health.reset()

        assert health.started is False
        assert health.uptime_seconds == 0.0


class TestEndpoints:
    def test_health_ok(self, client, health, db_path, migrations_dir) -> None:
        migrator = SQLiteMigrator(db_path, str(migrations_dir))
        health.attach(
            store_ping=SQLiteOptionStore(db_path).ping,
            pending_migrations=migrator.pending_migrations,
        )
        health.mark_started()

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.2.3"
        assert [c["name"] for c in body["checks"]] == ["option_store", "migrations", "fields"]

    def test_health_before_startup(self, client, health) -> None:
        health.attach(store_ping=lambda: None, pending_migrations=lambda: [])

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["started"] is False

    def test_ready_requires_every_check(self, client, health) -> None:
        health.attach(store_ping=broken_ping, pending_migrations=lambda: [])
        health.mark_started()

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["ready"] is False

    def test_ready(self, client, health) -> None:
        health.attach(store_ping=lambda: None, pending_migrations=lambda: [])
        health.mark_started()

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_live(self, client) -> None:
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True
