"""Session persistence."""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from qr_attendance.errors import InternalError
from qr_attendance.models.attendance_session import AttendanceSession
from qr_attendance.stores.base import BaseStore, DuplicateError

logger = logging.getLogger(__name__)


class SessionStore(BaseStore):
    """Owns ``AttendanceSession`` rows.

    The ``(teacher, course, date, start time)`` slot and the QR token are
    unique at the database level; ``create_if_absent`` relies on those
    constraints rather than on a read-before-write check.
    """

    def create_if_absent(self, session: AttendanceSession) -> AttendanceSession:
        with self.storage_errors('creating session'):
            self.db_session.add(session)
            try:
                self.db_session.commit()
            except IntegrityError:
                self.db_session.rollback()
                raise DuplicateError(self._conflict_reason(session))
            return session

    def _conflict_reason(self, session: AttendanceSession) -> str:
        slot_taken = self.db_session.execute(
            select(AttendanceSession.id).filter_by(
                teacher_id=session.teacher_id,
                course_code=session.course_code,
                session_date=session.session_date,
                start_time=session.start_time
            )
        ).first()
        if slot_taken:
            return 'session'
        token_taken = self.db_session.execute(
            select(AttendanceSession.id).filter_by(qr_token=session.qr_token)
        ).first()
        if token_taken:
            return 'token'
        logger.error('Session insert rejected by an unknown constraint')
        raise InternalError()

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        with self.storage_errors('loading session'):
            return self.db_session.get(AttendanceSession, session_id)

    def set_active_false(self, session_id: str, ended_at: datetime) -> Optional[AttendanceSession]:
        """Flip the active flag off. A no-op for sessions that are already ended."""
        with self.storage_errors('ending session'):
            self.db_session.execute(
                update(AttendanceSession)
                .where(AttendanceSession.id == session_id, AttendanceSession.is_active.is_(True))
                .values(is_active=False, ended_at=ended_at, updated_at=datetime.utcnow())
                .execution_options(synchronize_session=False)
            )
            self.db_session.commit()
            return self.db_session.get(AttendanceSession, session_id)

    def find_by_teacher(self, teacher_id: str, active_only: bool = False) -> List[AttendanceSession]:
        with self.storage_errors('listing sessions'):
            query = select(AttendanceSession).filter_by(teacher_id=teacher_id)
            if active_only:
                query = query.filter_by(is_active=True)
            query = query.order_by(
                AttendanceSession.session_date.desc(),
                AttendanceSession.start_time.desc()
            )
            return list(self.db_session.execute(query).scalars())
