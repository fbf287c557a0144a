# Overview: Row locking and conflict retry helpers for kit allocation.

from __future__ import annotations

import time

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db


class ConcurrentUpdateError(RuntimeError):
    """Raised when a conditional update touched fewer rows than were selected."""


def lock_for_update(query):
    """
    Apply row-level locking for allocation queries.

    NOTE: SQLite ignores SELECT ... FOR UPDATE; the conditional update in the
    caller still detects a lost race there.
    """
    return query.with_for_update()


def run_with_retry(func, *, attempts: int = 3, backoff_base: float = 0.05):
    """
    Execute a DB operation with retry on concurrency-related failures.

    Retries on OperationalError (deadlocks, locks), StaleDataError and
    ConcurrentUpdateError. The session is rolled back before every retry.
    """
    for attempt in range(attempts):
        try:
            return func()
        except (OperationalError, StaleDataError, ConcurrentUpdateError):
            db.session.rollback()
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))
