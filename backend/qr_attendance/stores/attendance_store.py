"""Attendance record persistence."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from qr_attendance.models.attendance import AttendanceRecord
from qr_attendance.stores.base import BaseStore, DuplicateError


class AttendanceStore(BaseStore):
    """Owns ``AttendanceRecord`` rows.

    ``(session, roll_number)`` and ``(session, device_fingerprint)`` are unique
    constraints, so the first committed insert wins any race.
    """

    def insert_if_absent(self, record: AttendanceRecord) -> AttendanceRecord:
        with self.storage_errors('recording attendance'):
            self.db_session.add(record)
            try:
                self.db_session.commit()
            except IntegrityError:
                self.db_session.rollback()
                # A record for the same roll number wins over a device clash.
                if self._roll_number_taken(record.session_id, record.roll_number):
                    raise DuplicateError('roll_number')
                raise DuplicateError('device')
            return record

    def _roll_number_taken(self, session_id: str, roll_number: str) -> bool:
        return self.db_session.execute(
            select(AttendanceRecord.id).filter_by(session_id=session_id, roll_number=roll_number)
        ).first() is not None

    def find_by_roll_number(self, session_id: str, roll_number: str) -> Optional[AttendanceRecord]:
        with self.storage_errors('checking roll number'):
            return self.db_session.execute(
                select(AttendanceRecord).filter_by(session_id=session_id, roll_number=roll_number)
            ).scalar_one_or_none()

    def find_by_device(self, session_id: str, device_fingerprint: str) -> Optional[AttendanceRecord]:
        with self.storage_errors('checking device'):
            return self.db_session.execute(
                select(AttendanceRecord).filter_by(
                    session_id=session_id,
                    device_fingerprint=device_fingerprint
                )
            ).scalar_one_or_none()

    def find_by_session(
        self,
        session_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None
    ) -> List[AttendanceRecord]:
        """Records for a session, earliest submission first."""
        with self.storage_errors('listing attendance'):
            query = select(AttendanceRecord).filter_by(session_id=session_id)
            if since is not None:
                query = query.where(AttendanceRecord.submitted_at >= since)
            if until is not None:
                query = query.where(AttendanceRecord.submitted_at <= until)
            query = query.order_by(AttendanceRecord.submitted_at.asc(), AttendanceRecord.id.asc())
            return list(self.db_session.execute(query).scalars())

    def count_by_session(self, session_id: str) -> int:
        with self.storage_errors('counting attendance'):
            return self.db_session.execute(
                select(func.count(AttendanceRecord.id))
                .where(AttendanceRecord.session_id == session_id)
            ).scalar_one()
