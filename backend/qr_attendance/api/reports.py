# backend/qr_attendance/api/reports.py
"""Report download endpoints."""
import io
from flask import Blueprint, g, request, send_file
from qr_attendance.errors import ValidationError
from qr_attendance.services import attendance_service, session_service
from qr_attendance.services.report_service import ReportService
from qr_attendance.utils.decorators import teacher_required
from qr_attendance.utils.helpers import success_response
from qr_attendance.utils.validators import Validator

reports_bp = Blueprint('reports', __name__)

@reports_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Reports service is running')

def _parse_range():
    """Optional ``since``/``until`` query parameters as instants."""
    bounds = {}
    errors = []
    for name in ('since', 'until'):
        raw = request.args.get(name)
        if not raw:
            bounds[name] = None
            continue
        bounds[name] = Validator.parse_instant(raw)
        if bounds[name] is None:
            errors.append(f"{name} must be an ISO-8601 date-time")
    if errors:
        raise ValidationError(details=errors)
    if bounds['since'] and bounds['until'] and bounds['since'] > bounds['until']:
        raise ValidationError(details=["since must not be after until"])
    return bounds['since'], bounds['until']

@reports_bp.route('/session/<session_id>/<fmt>', methods=['GET'])
@teacher_required
def download_report(session_id, fmt):
    """Download the session's attendance as CSV or PDF."""
    session = session_service().get_owned(session_id, g.teacher_identity)
    since, until = _parse_range()
    records = attendance_service().get_by_session(session.id, since=since, until=until)

    content, mimetype, download_name = ReportService.build(session, records, fmt)

    return send_file(
        io.BytesIO(content),
        as_attachment=True,
        download_name=download_name,
        mimetype=mimetype
    )
