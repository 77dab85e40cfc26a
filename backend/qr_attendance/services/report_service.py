# backend/qr_attendance/services/report_service.py
"""Attendance report rendering (CSV and PDF)."""
import io
from typing import List, Tuple

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from qr_attendance.errors import ValidationError
from qr_attendance.models.attendance import AttendanceRecord
from qr_attendance.models.attendance_session import AttendanceSession

CSV_COLUMNS = ['Roll Number', 'Submitted At', 'Status']

MIMETYPES = {
    'csv': 'text/csv',
    'pdf': 'application/pdf'
}

PAGE_MARGIN = 50
ROW_HEIGHT = 16


class ReportService:
    """Renders committed attendance for a session."""

    @staticmethod
    def build(session: AttendanceSession, records: List[AttendanceRecord], fmt: str) -> Tuple[bytes, str, str]:
        """
        Render a report.
        Returns: (content, mimetype, download_name)
        """
        fmt = (fmt or '').lower()
        if fmt == 'csv':
            content = ReportService.render_csv(records)
        elif fmt == 'pdf':
            content = ReportService.render_pdf(session, records)
        else:
            raise ValidationError("Report format must be csv or pdf")

        download_name = f"attendance_{session.course_code}_{session.session_date.isoformat()}.{fmt}"
        return content, MIMETYPES[fmt], download_name

    @staticmethod
    def render_csv(records: List[AttendanceRecord]) -> bytes:
        df = pd.DataFrame(
            [
                {
                    'Roll Number': record.roll_number,
                    'Submitted At': record.submitted_at.isoformat(timespec='seconds'),
                    'Status': record.status
                }
                for record in records
            ],
            columns=CSV_COLUMNS
        )
        return df.to_csv(index=False).encode('utf-8')

    @staticmethod
    def render_pdf(session: AttendanceSession, records: List[AttendanceRecord]) -> bytes:
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4

        c.setTitle(f"Attendance {session.course_code} {session.session_date.isoformat()}")
        c.setFont("Helvetica-Bold", 18)
        c.drawCentredString(width / 2, height - PAGE_MARGIN, "Attendance Report")

        header = [
            f"Course: {session.course_code} - {session.course_name}",
            f"Type: {session.session_type.value.title()}",
            f"Date: {session.session_date.isoformat()}",
            f"Window: {session.start_time.strftime('%H:%M')} - {session.end_time.strftime('%H:%M')}",
            f"Total Attendance: {len(records)}",
        ]
        if session.class_name:
            header.insert(1, f"Class: {session.class_name}")

        c.setFont("Helvetica", 11)
        y = height - PAGE_MARGIN - 30
        for line in header:
            c.drawString(PAGE_MARGIN, y, line)
            y -= ROW_HEIGHT

        y = ReportService._draw_table_header(c, y - ROW_HEIGHT, width)
        for index, record in enumerate(records, start=1):
            if y < PAGE_MARGIN:
                c.showPage()
                y = ReportService._draw_table_header(c, height - PAGE_MARGIN, width)
            c.drawString(PAGE_MARGIN, y, str(index))
            c.drawString(PAGE_MARGIN + 40, y, record.roll_number)
            c.drawString(PAGE_MARGIN + 200, y, record.submitted_at.strftime('%Y-%m-%d %H:%M:%S'))
            c.drawString(PAGE_MARGIN + 380, y, record.status)
            y -= ROW_HEIGHT

        c.showPage()
        c.save()
        return buffer.getvalue()

    @staticmethod
    def _draw_table_header(c: canvas.Canvas, y: float, width: float) -> float:
        c.setFont("Helvetica-Bold", 10)
        c.drawString(PAGE_MARGIN, y, "#")
        c.drawString(PAGE_MARGIN + 40, y, "Roll Number")
        c.drawString(PAGE_MARGIN + 200, y, "Submitted At")
        c.drawString(PAGE_MARGIN + 380, y, "Status")
        c.line(PAGE_MARGIN, y - 4, width - PAGE_MARGIN, y - 4)
        c.setFont("Helvetica", 10)
        return y - ROW_HEIGHT
