"""Error kinds raised by the attendance core.

Each kind carries a stable ``code`` so clients can tell "already marked"
from "session expired" without parsing messages, and a ``status_code`` the
HTTP layer uses when rendering it.
"""
from typing import Any, Optional


class AttendanceError(Exception):
    """Base class for every business-rule failure."""

    code = 'ATTENDANCE_ERROR'
    status_code = 400
    default_message = 'Attendance request failed'

    def __init__(self, message: Optional[str] = None, details: Any = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to the response envelope."""
        result = {
            'error': True,
            'code': self.code,
            'message': self.message,
            'status_code': self.status_code
        }
        if self.details:
            result['details'] = self.details
        return result


class ValidationError(AttendanceError):
    """Malformed caller input."""
    code = 'VALIDATION_ERROR'
    default_message = 'Invalid input parameters'


class InvalidToken(ValidationError):
    """Presented QR token does not match the session token."""
    code = 'INVALID_TOKEN'
    default_message = 'Invalid QR token'


class NotFound(AttendanceError):
    code = 'NOT_FOUND'
    status_code = 404
    default_message = 'Resource not found'


class SessionNotFound(NotFound):
    code = 'SESSION_NOT_FOUND'
    default_message = 'Session not found'


class Forbidden(AttendanceError):
    code = 'FORBIDDEN'
    status_code = 403
    default_message = 'You can only manage your own sessions'


class SessionNotOpen(AttendanceError):
    """Session ended by the teacher or outside its window."""
    code = 'SESSION_NOT_OPEN'
    default_message = 'Session is not open for attendance'


class DuplicateRollNumber(AttendanceError):
    code = 'DUPLICATE_ROLL_NUMBER'
    status_code = 409
    default_message = 'Attendance already marked for this roll number'


class DeviceAlreadyUsed(AttendanceError):
    code = 'DEVICE_ALREADY_USED'
    status_code = 403
    default_message = 'Attendance already submitted from this device'


class DuplicateSession(AttendanceError):
    code = 'DUPLICATE_SESSION'
    status_code = 409
    default_message = 'A session already exists for this course, date and start time'


class InternalError(AttendanceError):
    """Storage or infrastructure failure. Details stay in the logs."""
    code = 'INTERNAL_ERROR'
    status_code = 500
    default_message = 'An unexpected error occurred'
