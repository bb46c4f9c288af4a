from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.orm import Session


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """
    Commit everything done inside the block, or roll all of it back.

    Works whether or not the session has already autobegun a transaction
    (e.g. after the owner lookup at the start of a request).
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def apply_dict_updates(entity: object, update_data: dict[str, Any], excluded_attrs: set[str] | None = None) -> bool:
    """
    Copy key-value pairs from ``update_data`` onto an ORM entity.

    Args:
        entity: The SQLAlchemy ORM object loaded into the session.
        update_data: Dictionary of fields and values to update.
        excluded_attrs: Attribute names to skip (e.g. immutable columns).

    Returns:
        True if at least one attribute was assigned.
    """
    excluded_attrs = excluded_attrs if excluded_attrs else set()
    changed = False
    for key, value in update_data.items():
        if key in excluded_attrs or not hasattr(entity, key):
            continue
        setattr(entity, key, value)
        changed = True
    return changed
