"""Validation utilities for the application."""
import re
from datetime import date, datetime, time
from typing import Dict, List, Any, Optional

ROLL_NUMBER_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')
ROLL_NUMBER_MAX_LENGTH = 32
COURSE_CODE_MAX_LENGTH = 20
COURSE_NAME_MAX_LENGTH = 100
CLASS_NAME_MAX_LENGTH = 50
SHIFT_MAX_LENGTH = 20
SEMESTER_MIN = 1
SEMESTER_MAX = 12

class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_roll_number(roll_number: Any) -> Dict[str, Any]:
        """Validate roll number format (letters, digits, dash, underscore)."""
        errors = []

        if not isinstance(roll_number, str) or not roll_number:
            errors.append("Roll number is required")
        elif len(roll_number) > ROLL_NUMBER_MAX_LENGTH:
            errors.append(f"Roll number must be {ROLL_NUMBER_MAX_LENGTH} characters or less")
        elif not ROLL_NUMBER_PATTERN.fullmatch(roll_number):
            errors.append("Roll number may only contain letters, digits, '-' and '_'")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_text(value: Any, label: str, max_length: int, required: bool = True) -> List[str]:
        """Validate a free-text field."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return [f"{label} is required"] if required else []
        if not isinstance(value, str):
            return [f"{label} must be a string"]
        if len(value.strip()) > max_length:
            return [f"{label} must be {max_length} characters or less"]
        return []

    @staticmethod
    def parse_date(value: Any) -> Optional[date]:
        """Parse YYYY-MM-DD, returning None when malformed."""
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            return None
        try:
            return datetime.strptime(value, '%Y-%m-%d').date()
        except ValueError:
            return None

    @staticmethod
    def parse_time(value: Any) -> Optional[time]:
        """Parse HH:MM (or HH:MM:SS), returning None when malformed."""
        if isinstance(value, time):
            return value
        if not isinstance(value, str):
            return None
        for fmt in ('%H:%M', '%H:%M:%S'):
            try:
                return datetime.strptime(value, fmt).time()
            except ValueError:
                continue
        return None

    @staticmethod
    def parse_instant(value: Any) -> Optional[datetime]:
        """Parse an ISO-8601 instant, returning None when malformed."""
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not value:
            return None
        if value.endswith(('Z', 'z')):
            value = value[:-1] + '+00:00'
        try:
            instant = datetime.fromisoformat(value)
        except ValueError:
            return None
        # Stored instants are local wall-clock time
        if instant.tzinfo is not None:
            instant = instant.astimezone().replace(tzinfo=None)
        return instant
