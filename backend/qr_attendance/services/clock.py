"""Time source for expiry and window checks."""
from datetime import datetime


class Clock:
    """Local wall-clock time, the frame session dates and windows use."""

    def now(self) -> datetime:
        return datetime.now()
