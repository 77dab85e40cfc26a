# backend/qr_attendance/services/qr_service.py
"""QR Code rendering service."""
import base64
import io
import json

import qrcode

from qr_attendance.models.attendance_session import AttendanceSession

class QRService:
    """Service for QR code operations."""

    @staticmethod
    def build_payload(session: AttendanceSession) -> str:
        """Compact JSON the student app reads after scanning."""
        qr_data = {
            'session_id': session.id,
            'qr_token': session.qr_token
        }
        return json.dumps(qr_data, separators=(',', ':'))

    @staticmethod
    def render(session: AttendanceSession) -> str:
        """
        Render the session's QR code.
        Returns: PNG image as a base64 data URI
        """
        qr = qrcode.QRCode(
            version=None,  # Auto-determine size
            error_correction=qrcode.constants.ERROR_CORRECT_H,  # High error correction
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.build_payload(session))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffered = io.BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"
