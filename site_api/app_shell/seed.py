"""Installation defaults for a fresh option store."""

import logging
from typing import Any

from site_api.components.site_settings import OptionStorePort

logger = logging.getLogger(__name__)

INSTALL_DEFAULTS: dict[str, Any] = {
    "blogname": "My Site",
    "blogdescription": "Just another site",
    "siteurl": "http://localhost:8000",
    "home": "http://localhost:8000",
    "users_can_register": 0,
    "timezone_string": "",
    "date_format": "F j, Y",
    "time_format": "g:i a",
    "start_of_week": 1,
    "WPLANG": "",
    "permalink_structure": "",
    "category_base": "",
    "tag_base": "",
}


def seed_options(
    store: OptionStorePort,
    overrides: dict[str, Any] | None = None,
    overwrite: bool = False,
) -> list[str]:
    """
    Write installation defaults into the store.

    Keys that already hold a value are left alone unless overwrite is set.
    Returns the keys written.
    """
    values = {**INSTALL_DEFAULTS, **(overrides or {})}
    written = []
    for key, value in values.items():
        if not overwrite and store.get(key) is not None:
            continue
        store.set(key, value)
        written.append(key)
    logger.info("Seeded %d option(s)", len(written))
    return written
