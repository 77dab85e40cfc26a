"""Shared store plumbing."""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from qr_attendance.errors import InternalError

logger = logging.getLogger(__name__)


class DuplicateError(Exception):
    """A uniqueness constraint rejected a write.

    ``reason`` names the constraint: ``session`` / ``token`` for sessions,
    ``roll_number`` / ``device`` for attendance records.
    """

    def __init__(self, reason: str):
        super().__init__(f'Duplicate {reason}')
        self.reason = reason


class BaseStore:
    """Wraps a SQLAlchemy session; every write commits or rolls back."""

    def __init__(self, db_session):
        self.db_session = db_session

    @contextmanager
    def storage_errors(self, action: str):
        """Roll back and surface infrastructure failures as ``InternalError``."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error('Storage failure while %s: %s', action, e, exc_info=True)
            raise InternalError() from e
