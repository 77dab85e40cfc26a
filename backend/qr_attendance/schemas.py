"""Validated input structures, one per core operation."""
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Dict, Optional

from qr_attendance.errors import ValidationError
from qr_attendance.models.attendance_session import SessionType
from qr_attendance.utils.validators import (
    Validator,
    CLASS_NAME_MAX_LENGTH,
    COURSE_CODE_MAX_LENGTH,
    COURSE_NAME_MAX_LENGTH,
    SEMESTER_MAX,
    SEMESTER_MIN,
    SHIFT_MAX_LENGTH,
)


@dataclass(frozen=True)
class SessionInput:
    """Metadata a teacher supplies to open a session."""

    course_code: str
    course_name: str
    session_date: date
    session_type: SessionType
    start_time: time
    end_time: time
    class_name: Optional[str] = None
    semester: Optional[int] = None
    shift: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]]) -> 'SessionInput':
        """Build from a JSON body, collecting every field error before failing."""
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        errors = []
        errors += Validator.validate_text(data.get('course_code'), 'course_code', COURSE_CODE_MAX_LENGTH)
        errors += Validator.validate_text(data.get('course_name'), 'course_name', COURSE_NAME_MAX_LENGTH)
        errors += Validator.validate_text(data.get('class_name'), 'class_name', CLASS_NAME_MAX_LENGTH, required=False)
        errors += Validator.validate_text(data.get('shift'), 'shift', SHIFT_MAX_LENGTH, required=False)

        session_date = Validator.parse_date(data.get('date'))
        if session_date is None:
            errors.append("date must be in YYYY-MM-DD format")

        session_type = None
        try:
            session_type = SessionType(str(data.get('session_type', '')).lower())
        except ValueError:
            errors.append("session_type must be 'theory' or 'practical'")

        start_time = Validator.parse_time(data.get('start_time'))
        end_time = Validator.parse_time(data.get('end_time'))
        if start_time is None:
            errors.append("start_time must be in HH:MM format")
        if end_time is None:
            errors.append("end_time must be in HH:MM format")
        if start_time and end_time and start_time >= end_time:
            errors.append("start_time must be before end_time")

        semester = data.get('semester')
        if semester is not None:
            if isinstance(semester, bool) or not isinstance(semester, int):
                errors.append("semester must be a whole number")
            elif not SEMESTER_MIN <= semester <= SEMESTER_MAX:
                errors.append(f"semester must be between {SEMESTER_MIN} and {SEMESTER_MAX}")

        if errors:
            raise ValidationError(details=errors)

        return cls(
            course_code=data['course_code'].strip(),
            course_name=data['course_name'].strip(),
            session_date=session_date,
            session_type=session_type,
            start_time=start_time,
            end_time=end_time,
            class_name=_strip_or_none(data.get('class_name')),
            semester=semester,
            shift=_strip_or_none(data.get('shift'))
        )


@dataclass(frozen=True)
class SubmissionInput:
    """What a student presents when marking attendance."""

    roll_number: str
    qr_token: str

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]]) -> 'SubmissionInput':
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        # Shape only; the service applies the format rules in order.
        roll_number = data.get('roll_number')
        qr_token = data.get('qr_token')
        return cls(
            roll_number=roll_number.strip() if isinstance(roll_number, str) else '',
            qr_token=qr_token if isinstance(qr_token, str) else ''
        )


def _strip_or_none(value):
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
