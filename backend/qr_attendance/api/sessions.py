# backend/qr_attendance/api/sessions.py
"""Session management API endpoints (teacher only)."""
from flask import Blueprint, request, g
from qr_attendance.schemas import SessionInput
from qr_attendance.services import attendance_service, get_clock, session_service
from qr_attendance.services.qr_service import QRService
from qr_attendance.services.session_service import SessionService
from qr_attendance.utils.decorators import teacher_required
from qr_attendance.utils.helpers import success_response

sessions_bp = Blueprint('sessions', __name__)

def _session_payload(session, attendance_count=None, include_token=False):
    data = session.to_dict(include_token=include_token)
    data['is_open'] = SessionService.is_open_for_submission(session, get_clock().now())
    if attendance_count is not None:
        data['attendance_count'] = attendance_count
    return data

@sessions_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Session service is running')

@sessions_bp.route('', methods=['POST'])
@teacher_required
def create_session():
    """Open a new attendance session."""
    data = SessionInput.from_payload(request.get_json(silent=True))
    session = session_service().create(g.teacher_identity, data)

    return success_response(
        data=_session_payload(session, attendance_count=0, include_token=True),
        message="Session created successfully",
        status_code=201
    )

@sessions_bp.route('', methods=['GET'])
@teacher_required
def list_sessions():
    """List the teacher's sessions, newest first."""
    active_only = request.args.get('active', '').lower() in ('1', 'true', 'yes')
    sessions = session_service().list_for_teacher(g.teacher_identity, active_only=active_only)

    return success_response(data=[_session_payload(s) for s in sessions])

@sessions_bp.route('/<session_id>', methods=['GET'])
@teacher_required
def get_session(session_id):
    """Session details with the current attendance count."""
    session = session_service().get_owned(session_id, g.teacher_identity)
    count = attendance_service().count_by_session(session.id)

    return success_response(data=_session_payload(session, attendance_count=count, include_token=True))

@sessions_bp.route('/<session_id>/end', methods=['POST'])
@teacher_required
def end_session(session_id):
    """End a session early. Safe to call more than once."""
    service = session_service()
    already_ended = not service.get_owned(session_id, g.teacher_identity).is_active
    session = service.end(session_id, g.teacher_identity)
    count = attendance_service().count_by_session(session.id)

    return success_response(
        data=_session_payload(session, attendance_count=count),
        message="Session was already ended" if already_ended else "Session ended successfully"
    )

@sessions_bp.route('/<session_id>/qrcode', methods=['GET'])
@teacher_required
def session_qrcode(session_id):
    """QR token and a scannable image of it."""
    session = session_service().get_owned(session_id, g.teacher_identity)

    return success_response(
        data={
            'session_id': session.id,
            'qr_token': session.qr_token,
            'qr_image': QRService.render(session)
        },
        message="QR code generated successfully"
    )

@sessions_bp.route('/<session_id>/attendance', methods=['GET'])
@teacher_required
def session_attendance(session_id):
    """Attendance records in submission order."""
    session = session_service().get_owned(session_id, g.teacher_identity)
    records = attendance_service().get_by_session(session.id)

    return success_response(data={
        'session_id': session.id,
        'total': len(records),
        'records': [record.to_dict() for record in records]
    })
