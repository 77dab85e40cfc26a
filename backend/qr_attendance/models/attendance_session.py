# backend/qr_attendance/models/attendance_session.py
"""Attendance session with QR token."""
import enum
import secrets
import uuid
from datetime import datetime
from qr_attendance import db
from qr_attendance.models.base import BaseModel

class SessionType(enum.Enum):
    """Kind of class the session records."""
    THEORY = 'theory'
    PRACTICAL = 'practical'

class AttendanceSession(BaseModel):
    """Time-boxed attendance event for one course on one date."""

    __tablename__ = 'attendance_sessions'
    __table_args__ = (
        db.UniqueConstraint(
            'teacher_id', 'course_code', 'session_date', 'start_time',
            name='uq_session_slot'
        ),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id = db.Column(db.String(64), nullable=False, index=True)

    # Course
    course_code = db.Column(db.String(20), nullable=False)
    course_name = db.Column(db.String(100), nullable=False)
    class_name = db.Column(db.String(50), nullable=True)
    semester = db.Column(db.Integer, nullable=True)
    shift = db.Column(db.String(20), nullable=True)
    session_type = db.Column(db.Enum(SessionType), nullable=False, default=SessionType.THEORY)

    # Window
    session_date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    qr_token = db.Column(db.String(64), unique=True, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    ended_at = db.Column(db.DateTime, nullable=True)

    # Relationships
    records = db.relationship('AttendanceRecord', backref='session', lazy='dynamic')

    @staticmethod
    def generate_qr_token(nbytes: int = 32) -> str:
        """Generate an unguessable QR token."""
        return secrets.token_urlsafe(nbytes)

    @property
    def window_start(self) -> datetime:
        return datetime.combine(self.session_date, self.start_time)

    @property
    def window_end(self) -> datetime:
        return datetime.combine(self.session_date, self.end_time)

    def is_within_window(self, now: datetime) -> bool:
        """Check if ``now`` falls inside the window, bounds included."""
        return self.window_start <= now <= self.window_end

    def to_dict(self, include_token: bool = False):
        """Convert to dictionary."""
        exclude = [] if include_token else ['qr_token']
        return super().to_dict(exclude=exclude)

    def __repr__(self):
        return f'<AttendanceSession {self.course_code} {self.session_date} {self.start_time}>'
