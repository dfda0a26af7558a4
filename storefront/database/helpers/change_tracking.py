"""
Change tracking inspection.

SQLAlchemy keeps every loaded object in the session's identity map and records
attribute history on assignment. At flush time only objects with real column
changes produce an ``UPDATE``, and only for the changed columns. These helpers
expose that bookkeeping so callers (and tests) can see what a flush will write.
"""

from typing import Any, Dict, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import Session


def changed_attributes(obj) -> Dict[str, Tuple[Any, Any]]:
    """
    Return the column attributes of `obj` modified since load or last flush.

    Returns
    -------
    dict[str, tuple]
        ``{attribute: (old_value, new_value)}``. For a pending object the old
        value is always ``None``.
    """
    state = inspect(obj)
    changes = {}
    for attr in state.mapper.column_attrs:
        history = state.attrs[attr.key].history
        if not history.has_changes():
            continue
        old = history.deleted[0] if history.deleted else None
        new = history.added[0] if history.added else None
        changes[attr.key] = (old, new)
    return changes


def pending_changes(session: Session) -> Dict[str, list]:
    """
    Summarize what the next flush of `session` will do.

    ``dirty`` only lists objects with net column changes: assigning an
    attribute its current value marks an object dirty in ``session.dirty``
    but emits nothing.
    """
    return {
        "new": list(session.new),
        "dirty": [obj for obj in session.dirty if session.is_modified(obj)],
        "deleted": list(session.deleted),
    }
