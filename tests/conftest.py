from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from site_api.adapters.authorizer import PolicyAuthorizer
from site_api.adapters.memory_store import InMemoryOptionStore
from site_api.adapters.sqlite.migrator import SQLiteMigrator
from site_api.api.auth_utils import create_caller_token
from site_api.api.deps import get_option_store, get_rules
from site_api.api.routes import site
from site_api.domain.entities import Caller
from site_api.domain.policy import PolicyEngine
from site_api.rules.loader import load_rules

PROJECT_ROOT = Path(__file__).parent.parent
RULES_PATH = PROJECT_ROOT / "rules.yaml"
MIGRATIONS_DIR = PROJECT_ROOT / "migrations"


@pytest.fixture
def rules():
    """The real rules file shipped with the project."""
    return load_rules(RULES_PATH)


@pytest.fixture
def policy(rules):
    return PolicyEngine(rules)


@pytest.fixture
def admin():
    return Caller(id="1", roles=["administrator"])


@pytest.fixture
def subscriber():
    return Caller(id="2", roles=["subscriber"])


@pytest.fixture
def store():
    return InMemoryOptionStore()


@pytest.fixture
def admin_authorizer(policy, admin):
    return PolicyAuthorizer(policy, admin)


@pytest.fixture
def anonymous_authorizer(policy):
    return PolicyAuthorizer(policy, None)


@pytest.fixture
def migrations_dir():
    return MIGRATIONS_DIR


@pytest.fixture
def db_path(tmp_path):
    """A migrated SQLite database in a temp directory."""
    path = str(tmp_path / "site.db")
    SQLiteMigrator(path, str(MIGRATIONS_DIR)).run_migrations()
    return path


@pytest.fixture
def app(store, rules):
    """Site routes wired to the in-memory store."""
    app = FastAPI()
    app.include_router(site.router, prefix=f"/{site.NAMESPACE}")
    app.dependency_overrides[get_option_store] = lambda: store
    app.dependency_overrides[get_rules] = lambda: rules
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_caller_token(admin)}"}


@pytest.fixture
def subscriber_headers(subscriber):
    return {"Authorization": f"Bearer {create_caller_token(subscriber)}"}
