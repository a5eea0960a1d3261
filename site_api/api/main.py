import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from site_api.adapters.sqlite.migrator import SQLiteMigrator
from site_api.adapters.sqlite.repos import SQLiteOptionStore
from site_api.api.deps import get_settings
from site_api.api.routes import site
from site_api.app_shell.config import configure_logging, prepare_database, validate_ops_rules
from site_api.components.site_settings import StoreFailure
from site_api.rules.loader import load_rules
from site_api.shell.http.health import create_health_router, site_health

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        configure_logging()
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    configure_logging(rules)
    validate_ops_rules(rules)
    logger.info("Rules loaded from %s", settings.rules_path)

    if rules.ops.migrate_on_startup:
        prepare_database(settings.db_path, settings.migrations_dir)

    migrator = SQLiteMigrator(settings.db_path, settings.migrations_dir)
    site_health.attach(
        store_ping=SQLiteOptionStore(settings.db_path).ping,
        pending_migrations=migrator.pending_migrations,
    )
    site_health.mark_started()

    yield


app = FastAPI(
    title="Site Settings API",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "code": "rest_store_failure",
                "message": "The settings store could not complete the request.",
                "data": {"status": 500},
            }
        },
    )


# --- Routers ---
app.include_router(site.router, prefix=f"/{site.NAMESPACE}", tags=["Site Settings"])
app.include_router(create_health_router(version=VERSION))


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", include_in_schema=False)
def index() -> dict[str, Any]:
    """Service index with the namespaces it serves."""
    return {"name": app.title, "version": VERSION, "namespaces": [site.NAMESPACE]}
