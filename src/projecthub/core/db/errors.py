"""Classification of database integrity errors."""

from sqlalchemy.exc import IntegrityError


def violates_unique(error: IntegrityError, *markers: str) -> bool:
    """Check whether an IntegrityError comes from one specific unique key.

    Postgres names the violated constraint or index in its message, SQLite
    lists the columns ("UNIQUE constraint failed: table.col, ..."). Callers pass
    markers for both so foreign-key and NOT NULL failures are never mistaken
    for duplicates.
    """
    message = str(error.orig)
    if "unique" not in message.lower():
        return False
    return any(marker in message for marker in markers)
