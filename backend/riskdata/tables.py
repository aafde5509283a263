"""
"Create if missing" table handling.

The app ships no migrations: a table is created the first time something
needs it and is never altered afterwards.
"""
from __future__ import annotations

import logging

from django.db import connection, models

logger = logging.getLogger(__name__)

# Tables already confirmed during this process, so we only introspect once.
_known_tables: set[str] = set()


def ensure_table(model: type[models.Model]) -> bool:
    """
    Create the table behind ``model`` if the database does not have it.

    Returns True when the table had to be created.
    """
    table = model._meta.db_table
    if table in _known_tables:
        return False

    if table in connection.introspection.table_names():
        _known_tables.add(table)
        return False

    logger.info("Creating missing table %s", table)
    with connection.schema_editor() as editor:
        editor.create_model(model)
    _known_tables.add(table)
    return True


def forget_tables() -> None:
    """Drop the per-process cache (used when tables are removed externally)."""
    _known_tables.clear()
