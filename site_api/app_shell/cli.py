import argparse
import json
import logging
import sys
from typing import Any

from site_api.adapters.authorizer import PolicyAuthorizer
from site_api.adapters.sqlite.repos import SQLiteOptionStore
from site_api.api.auth_utils import create_caller_token
from site_api.api.deps import Settings
from site_api.app_shell.config import configure_logging, prepare_database
from site_api.app_shell.seed import seed_options
from site_api.components.site_settings import (
    DEFAULT_REGISTRY,
    SiteSettingsError,
    SiteSettingsFacade,
)
from site_api.domain.entities import Caller
from site_api.domain.policy import PolicyEngine
from site_api.rules.loader import load_rules
from site_api.rules.models import Rules

logger = logging.getLogger("cli")

OPERATOR = Caller(id="cli", roles=["administrator"])


def get_rules(settings: Settings) -> Rules:
    try:
        return load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Could not load rules: %s", e)
        sys.exit(1)


def get_facade(settings: Settings, rules: Rules) -> SiteSettingsFacade:
    store = SQLiteOptionStore(settings.db_path)
    authorizer = PolicyAuthorizer(PolicyEngine(rules), OPERATOR)
    return SiteSettingsFacade(store, authorizer, DEFAULT_REGISTRY)


def parse_value(raw: str) -> Any:
    """Accept JSON literals (true, 3, "x"); fall back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    applied = prepare_database(settings.db_path, settings.migrations_dir)
    print(f"Applied {len(applied)} migration(s).")


def handle_seed(settings: Settings, args: argparse.Namespace) -> None:
    prepare_database(settings.db_path, settings.migrations_dir)
    written = seed_options(SQLiteOptionStore(settings.db_path), overwrite=args.overwrite)
    print(f"Seeded {len(written)} option(s).")


def handle_token(rules: Rules, args: argparse.Namespace) -> None:
    unknown = [r for r in args.role if r not in rules.rbac.roles]
    if unknown:
        logger.error("Unknown role(s): %s", ", ".join(unknown))
        sys.exit(1)
    caller = Caller(id=args.subject, roles=args.role)
    ttl = args.ttl or rules.auth.token_ttl_minutes
    print(create_caller_token(caller, ttl, algorithm=rules.auth.token_algorithm))


def handle_get(facade: SiteSettingsFacade, args: argparse.Namespace) -> None:
    if args.name:
        result = {args.name: facade.get_field(args.name, "edit")}
    else:
        result = facade.get_all_fields("edit")
    print(json.dumps(result, indent=2))


def handle_set(facade: SiteSettingsFacade, args: argparse.Namespace) -> None:
    stored = facade.update_field(args.name, parse_value(args.value))
    print(json.dumps({args.name: stored}))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Site Settings CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply pending database migrations")

    seed_parser = subparsers.add_parser("seed", help="Write installation defaults")
    seed_parser.add_argument("--overwrite", action="store_true", help="Replace existing values")

    token_parser = subparsers.add_parser("token", help="Issue a bearer token")
    token_parser.add_argument("subject", help="Caller id (token subject)")
    token_parser.add_argument(
        "--role", action="append", default=[], help="Role to grant (repeatable)"
    )
    token_parser.add_argument("--ttl", type=int, help="Lifetime in minutes")

    get_parser = subparsers.add_parser("get", help="Show one field, or all of them")
    get_parser.add_argument("name", nargs="?", help="Field name")

    set_parser = subparsers.add_parser("set", help="Update a field")
    set_parser.add_argument("name", help="Field name")
    set_parser.add_argument("value", help="New value (JSON literal or plain text)")

    subparsers.add_parser("schema", help="Print the field schema")

    args = parser.parse_args(argv)

    settings = Settings()
    rules = get_rules(settings)
    configure_logging(rules)

    try:
        if args.command == "migrate":
            handle_migrate(settings, args)
        elif args.command == "seed":
            handle_seed(settings, args)
        elif args.command == "token":
            handle_token(rules, args)
        elif args.command == "get":
            handle_get(get_facade(settings, rules), args)
        elif args.command == "set":
            handle_set(get_facade(settings, rules), args)
        elif args.command == "schema":
            print(json.dumps(DEFAULT_REGISTRY.schema(), indent=2))
    except SiteSettingsError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
