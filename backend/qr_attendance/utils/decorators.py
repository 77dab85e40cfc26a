# backend/qr_attendance/utils/decorators.py
"""Custom decorators for teacher identification."""
from functools import wraps
from flask import current_app, g, request
from qr_attendance.models.teacher import Teacher
from qr_attendance.utils.helpers import error_response

def teacher_required(f):
    """Decorator to require a known teacher in the Teacher-Id header.

    The authenticated identity is exposed to the view as ``g.teacher_identity``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = current_app.config['TEACHER_ID_HEADER']
        teacher_id = (request.headers.get(header) or '').strip()
        
        if not teacher_id:
            return error_response(f"{header} header is required", 401, code='UNAUTHORIZED')
        
        teacher = Teacher.find_by_teacher_id(teacher_id)
        if not teacher:
            return error_response(f"Invalid {header}", 403, code='FORBIDDEN')
        
        g.teacher_identity = teacher.teacher_id
        return f(*args, **kwargs)
    return decorated_function
