# File: backend/qr_attendance/api/attendance.py
"""Attendance API endpoints (public, QR token authorised)."""
from flask import Blueprint, current_app, request
from qr_attendance import limiter
from qr_attendance.errors import AttendanceError
from qr_attendance.schemas import SubmissionInput
from qr_attendance.services import attendance_service
from qr_attendance.utils.helpers import network_identity_from_request, success_response

attendance_bp = Blueprint('attendance', __name__)

@attendance_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Attendance service is running')

@attendance_bp.route('/session/<session_id>/mark', methods=['POST'])
@limiter.limit(lambda: current_app.config['ATTENDANCE_SUBMIT_RATE_LIMIT'])
def mark_attendance(session_id):
    """Mark a student present using the session's QR token."""
    data = SubmissionInput.from_payload(request.get_json(silent=True))
    identity = network_identity_from_request()

    try:
        record = attendance_service().submit(
            session_id=session_id,
            roll_number=data.roll_number,
            presented_token=data.qr_token,
            identity=identity
        )
    except AttendanceError as e:
        current_app.logger.info(
            'Attendance rejected for session %s (%s): %s', session_id, e.code, e.message
        )
        raise

    return success_response(
        data={'attendance_record': record.to_dict()},
        message="Attendance marked successfully",
        status_code=201
    )

@attendance_bp.route('/session/<session_id>/check', methods=['GET'])
@limiter.limit(lambda: current_app.config['ATTENDANCE_SUBMIT_RATE_LIMIT'])
def check_attendance(session_id):
    """Let a student see whether their roll number is already marked."""
    roll_number = (request.args.get('roll_number') or '').strip()
    status = attendance_service().check_status(session_id, roll_number)

    return success_response(
        data=status,
        message="Attendance already marked" if status['has_marked'] else "Attendance not marked yet"
    )
