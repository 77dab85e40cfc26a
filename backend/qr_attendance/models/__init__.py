"""Models package with all models."""
from .base import BaseModel
from .teacher import Teacher
from .attendance_session import AttendanceSession, SessionType
from .attendance import AttendanceRecord

__all__ = [
    'BaseModel', 'Teacher',
    'AttendanceSession', 'SessionType',
    'AttendanceRecord'
]
