import logging
import os
import sys
from pathlib import Path

from site_api.adapters.sqlite.migrator import SQLiteMigrator
from site_api.rules.models import Rules

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(rules: Rules | None = None) -> None:
    """Configure root logging from the ops rules (INFO when none are loaded)."""
    level = rules.ops.log_level if rules is not None else "INFO"
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when required environment variables are missing.
    """
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]

    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    logger.info("Configuration validated.")


def prepare_database(db_path: str, migrations_dir: str) -> list[str]:
    """Create the data directory if needed and apply pending migrations."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return SQLiteMigrator(db_path, migrations_dir).run_migrations()
