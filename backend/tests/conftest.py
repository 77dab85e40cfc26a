"""Shared fixtures."""
from datetime import date, datetime, time

import pytest

from qr_attendance import create_app, db
from qr_attendance.models.attendance_session import SessionType
from qr_attendance.models.teacher import Teacher
from qr_attendance.schemas import SessionInput
from qr_attendance.services.attendance_service import AttendanceService
from qr_attendance.services.session_service import SessionService
from qr_attendance.stores import AttendanceStore, SessionStore

CLASS_DAY = date(2026, 1, 5)


class FixedClock:
    """Clock whose time the test controls."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current


def at(hour: int, minute: int, second: int = 0) -> datetime:
    """An instant on the class day."""
    return datetime.combine(CLASS_DAY, time(hour, minute, second))


def make_session_input(**overrides) -> SessionInput:
    values = dict(
        course_code='CS101',
        course_name='Intro to Testing',
        session_date=CLASS_DAY,
        session_type=SessionType.THEORY,
        start_time=time(9, 0),
        end_time=time(10, 30),
    )
    values.update(overrides)
    return SessionInput(**values)


@pytest.fixture
def clock():
    return FixedClock(at(9, 15))


@pytest.fixture
def app(clock):
    """Create test app."""
    app = create_app('testing', clock=clock)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def teachers(app):
    """Two registered teachers."""
    Teacher(teacher_id='T-001', name='Teacher A').save()
    Teacher(teacher_id='T-002', name='Teacher B').save()
    return 'T-001', 'T-002'


@pytest.fixture
def session_service(app, clock):
    return SessionService(SessionStore(db.session), clock=clock)


@pytest.fixture
def attendance_service(app, clock):
    return AttendanceService(SessionStore(db.session), AttendanceStore(db.session), clock=clock)


@pytest.fixture
def open_session(session_service):
    """Theory session 09:00-10:30 on the class day."""
    return session_service.create('T-001', make_session_input())
