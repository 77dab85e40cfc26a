# backend/qr_attendance/models/attendance.py
"""Attendance record model."""
from datetime import datetime
from qr_attendance import db
from qr_attendance.models.base import BaseModel

class AttendanceRecord(BaseModel):
    """One student's presence in one session."""

    __tablename__ = 'attendance_records'
    __table_args__ = (
        db.UniqueConstraint('session_id', 'roll_number', name='uq_attendance_roll_number'),
        db.UniqueConstraint('session_id', 'device_fingerprint', name='uq_attendance_device'),
    )

    session_id = db.Column(db.String(36), db.ForeignKey('attendance_sessions.id'), nullable=False, index=True)
    roll_number = db.Column(db.String(32), nullable=False)
    device_fingerprint = db.Column(db.String(64), nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    status = db.Column(db.String(20), nullable=False, default='present')

    def to_dict(self, exclude: list = None) -> dict:
        """Convert to dictionary without the device fingerprint."""
        exclude = (exclude or []) + ['device_fingerprint']
        return super().to_dict(exclude=exclude)

    def __repr__(self):
        return f'<AttendanceRecord {self.session_id}-{self.roll_number}>'
