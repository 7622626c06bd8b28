from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import InvalidReferenceError, StoreUnavailableError


log = logging.getLogger("prompt_cloud.repositories.store_errors")

_PG_FOREIGN_KEY_VIOLATION = "23503"


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """Return True if the IntegrityError comes from a dangling foreign key."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == _PG_FOREIGN_KEY_VIOLATION:
        return True
    if getattr(orig, "sqlstate", None) == _PG_FOREIGN_KEY_VIOLATION:  # psycopg 3
        return True
    message = str(orig or exc).lower()
    return "foreign key" in message


@contextmanager
def translate_store_errors(session: Session, action: str) -> Iterator[None]:
    """Map SQLAlchemy failures raised inside the block onto the error taxonomy.

    ``action`` reads like "fetch folders" and ends up in the caller-facing
    message ("Failed to fetch folders"); driver details only go to the log.
    """
    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        if is_foreign_key_violation(exc):
            log.info("Foreign key violation while trying to %s: %s", action, getattr(exc, "orig", exc))
            raise InvalidReferenceError("Invalid folderId provided") from exc
        log.error("Integrity error while trying to %s", action, exc_info=True)
        raise StoreUnavailableError(f"Failed to {action}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        log.error("Store failure while trying to %s", action, exc_info=True)
        raise StoreUnavailableError(f"Failed to {action}") from exc
