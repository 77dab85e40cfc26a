"""Persistence for sessions and attendance records."""
from .base import DuplicateError
from .session_store import SessionStore
from .attendance_store import AttendanceStore

__all__ = ['DuplicateError', 'SessionStore', 'AttendanceStore']
