"""Service layer, wired per request against the current app's database."""
from flask import current_app

from qr_attendance import db
from qr_attendance.models.attendance_session import AttendanceSession
from qr_attendance.services.attendance_service import AttendanceService
from qr_attendance.services.clock import Clock
from qr_attendance.services.session_service import SessionService
from qr_attendance.stores import AttendanceStore, SessionStore


def get_clock() -> Clock:
    return current_app.extensions['attendance_clock']


def session_service() -> SessionService:
    """Build a ``SessionService`` bound to the request's database session."""
    token_bytes = current_app.config['QR_TOKEN_BYTES']
    return SessionService(
        SessionStore(db.session),
        clock=get_clock(),
        token_factory=lambda: AttendanceSession.generate_qr_token(token_bytes),
        max_token_attempts=current_app.config['SESSION_TOKEN_MAX_ATTEMPTS']
    )


def attendance_service() -> AttendanceService:
    """Build an ``AttendanceService`` bound to the request's database session."""
    return AttendanceService(
        SessionStore(db.session),
        AttendanceStore(db.session),
        clock=get_clock()
    )
