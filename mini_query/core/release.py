"""Best-effort release of cursor, statement, and connection."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def close_quietly(resource: Any, label: str) -> None:
    """Close one resource, logging and suppressing any failure."""

    if resource is None:
        return
    close = getattr(resource, "close", None)
    if not callable(close):
        return
    try:
        close()
    except Exception:
        logger.debug("Could not close %s", label, exc_info=True)


def release_quietly(cursor: Any, statement: Any, connection: Any) -> None:
    """Close cursor, statement, then connection; `None` entries are skipped.

    A failure on one resource never stops the others from being closed.
    """

    close_quietly(cursor, "cursor")
    close_quietly(statement, "statement")
    close_quietly(connection, "connection")
