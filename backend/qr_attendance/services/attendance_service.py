# backend/qr_attendance/services/attendance_service.py
"""Attendance submission protocol."""
import logging
import secrets
from datetime import datetime
from typing import Any, Dict, List, Optional

from qr_attendance.errors import (
    DeviceAlreadyUsed,
    DuplicateRollNumber,
    InvalidToken,
    SessionNotFound,
    SessionNotOpen,
    ValidationError,
)
from qr_attendance.models.attendance import AttendanceRecord
from qr_attendance.services.clock import Clock
from qr_attendance.services.fingerprint_service import FingerprintService, NetworkIdentity
from qr_attendance.services.session_service import SessionService
from qr_attendance.stores import AttendanceStore, DuplicateError, SessionStore
from qr_attendance.utils.validators import Validator

logger = logging.getLogger(__name__)


class AttendanceService:
    """Validates and records student submissions.

    Holds no state of its own; the stores own every row. The duplicate
    checks before the insert only give friendly early errors, the unique
    constraints behind ``insert_if_absent`` decide races.
    """

    def __init__(
        self,
        session_store: SessionStore,
        attendance_store: AttendanceStore,
        clock: Optional[Clock] = None
    ):
        self.session_store = session_store
        self.attendance_store = attendance_store
        self.clock = clock or Clock()

    def submit(
        self,
        session_id: str,
        roll_number: str,
        presented_token: str,
        identity: NetworkIdentity,
        now: Optional[datetime] = None
    ) -> AttendanceRecord:
        """Record attendance, checking cheapest rules first."""
        now = now or self.clock.now()

        roll_check = Validator.validate_roll_number(roll_number)
        if not roll_check['is_valid']:
            raise ValidationError(details=roll_check['errors'])

        if not isinstance(presented_token, str) or not presented_token:
            raise ValidationError(details=["qr_token is required"])

        session = self.session_store.get_by_id(session_id)
        if session is None:
            raise SessionNotFound()

        if not secrets.compare_digest(presented_token.encode('utf-8'), session.qr_token.encode('utf-8')):
            raise InvalidToken()

        fingerprint = FingerprintService.compute(identity, session.id)

        # Checked before the window so reused devices are rejected uniformly.
        device_record = self.attendance_store.find_by_device(session.id, fingerprint)
        if device_record is not None and device_record.roll_number != roll_number:
            raise DeviceAlreadyUsed()

        if not SessionService.is_open_for_submission(session, now):
            raise SessionNotOpen()

        if self.attendance_store.find_by_roll_number(session.id, roll_number) is not None:
            raise DuplicateRollNumber()

        record = AttendanceRecord(
            session_id=session.id,
            roll_number=roll_number,
            device_fingerprint=fingerprint,
            submitted_at=now,
            status='present'
        )
        try:
            record = self.attendance_store.insert_if_absent(record)
        except DuplicateError as e:
            if e.reason == 'roll_number':
                raise DuplicateRollNumber()
            raise DeviceAlreadyUsed()

        logger.info('Attendance recorded for %s in session %s', roll_number, session.id)
        return record

    def check_status(self, session_id: str, roll_number: str) -> Dict[str, Any]:
        """Whether ``roll_number`` is already marked in the session, and when."""
        roll_check = Validator.validate_roll_number(roll_number)
        if not roll_check['is_valid']:
            raise ValidationError(details=roll_check['errors'])

        session = self.session_store.get_by_id(session_id)
        if session is None:
            raise SessionNotFound()

        record = self.attendance_store.find_by_roll_number(session.id, roll_number)
        return {
            'session_id': session.id,
            'roll_number': roll_number,
            'has_marked': record is not None,
            'submitted_at': record.submitted_at.isoformat() if record else None
        }

    def get_by_session(self, session_id: str, since: Optional[datetime] = None,
                       until: Optional[datetime] = None) -> List[AttendanceRecord]:
        """Records in submission order."""
        return self.attendance_store.find_by_session(session_id, since=since, until=until)

    def count_by_session(self, session_id: str) -> int:
        return self.attendance_store.count_by_session(session_id)
