# backend/qr_attendance/services/session_service.py
"""Session lifecycle: create, end, and the open-for-submission rule."""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from qr_attendance.errors import DuplicateSession, Forbidden, InternalError, SessionNotFound
from qr_attendance.models.attendance_session import AttendanceSession
from qr_attendance.schemas import SessionInput
from qr_attendance.services.clock import Clock
from qr_attendance.stores import DuplicateError, SessionStore

logger = logging.getLogger(__name__)


class SessionService:
    """Service for managing attendance sessions.

    ``teacher_identity`` is an opaque, already-authenticated value; how it was
    established is the request layer's business.
    """

    def __init__(
        self,
        store: SessionStore,
        clock: Optional[Clock] = None,
        token_factory: Optional[Callable[[], str]] = None,
        max_token_attempts: int = 5
    ):
        self.store = store
        self.clock = clock or Clock()
        self.token_factory = token_factory or AttendanceSession.generate_qr_token
        self.max_token_attempts = max_token_attempts

    def create(self, teacher_identity: str, data: SessionInput) -> AttendanceSession:
        """Persist a new active session with a fresh QR token.

        Raises ``DuplicateSession`` when the teacher already has a session for
        the same course, date and start time.
        """
        for attempt in range(1, self.max_token_attempts + 1):
            session = AttendanceSession(
                teacher_id=teacher_identity,
                course_code=data.course_code,
                course_name=data.course_name,
                class_name=data.class_name,
                semester=data.semester,
                shift=data.shift,
                session_type=data.session_type,
                session_date=data.session_date,
                start_time=data.start_time,
                end_time=data.end_time,
                qr_token=self.token_factory(),
                is_active=True
            )
            try:
                created = self.store.create_if_absent(session)
            except DuplicateError as e:
                if e.reason == 'session':
                    raise DuplicateSession()
                logger.warning('QR token collision on attempt %d, regenerating', attempt)
                continue

            logger.info(
                'Session %s created by %s for %s on %s',
                created.id, teacher_identity, created.course_code, created.session_date
            )
            return created

        logger.error('Could not mint a unique QR token after %d attempts', self.max_token_attempts)
        raise InternalError()

    def get_owned(self, session_id: str, teacher_identity: str) -> AttendanceSession:
        """Load a session the teacher owns."""
        session = self.store.get_by_id(session_id)
        if session is None:
            raise SessionNotFound()
        if session.teacher_id != teacher_identity:
            raise Forbidden()
        return session

    def end(self, session_id: str, teacher_identity: str) -> AttendanceSession:
        """Close a session early. Ending an ended session returns it unchanged."""
        session = self.get_owned(session_id, teacher_identity)
        if not session.is_active:
            return session

        ended = self.store.set_active_false(session_id, ended_at=self.clock.now())
        if ended is None:
            raise SessionNotFound()
        logger.info('Session %s ended by %s', session_id, teacher_identity)
        return ended

    def list_for_teacher(
        self,
        teacher_identity: str,
        active_only: bool = False,
        now: Optional[datetime] = None
    ) -> List[AttendanceSession]:
        """The teacher's sessions, newest first.

        ``active_only`` keeps sessions that are still flagged active and whose
        window has not ended yet. Upcoming sessions are included.
        """
        sessions = self.store.find_by_teacher(teacher_identity, active_only=active_only)
        if not active_only:
            return sessions
        now = now or self.clock.now()
        return [s for s in sessions if now <= s.window_end]

    @staticmethod
    def is_open_for_submission(session: AttendanceSession, now: datetime) -> bool:
        """Active and inside the window; either alone is not enough."""
        return bool(session.is_active) and session.is_within_window(now)
