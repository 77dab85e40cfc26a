"""Helper functions for the application."""
from flask import jsonify, request
from typing import Any

from qr_attendance.services.fingerprint_service import NetworkIdentity

def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    return jsonify({
        'error': True,
        'message': getattr(error, 'description', None) or str(error),
        'status_code': status_code
    }), status_code

def success_response(data: Any = None, message: str = "Success", status_code: int = 200):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }
    
    if data is not None:
        response['data'] = data
    
    return jsonify(response), status_code

def error_response(message: str, status_code: int = 400, code: str = None):
    """Return consistent error response."""
    body = {
        'error': True,
        'message': message,
        'status_code': status_code
    }
    if code:
        body['code'] = code
    return jsonify(body), status_code

def network_identity_from_request() -> NetworkIdentity:
    """Identity signals of the current caller: agent string and first forwarded hop."""
    forwarded_for = request.headers.get('X-Forwarded-For', '')
    address = forwarded_for.split(',')[0].strip() if forwarded_for else (request.remote_addr or '')
    return NetworkIdentity(
        user_agent=request.headers.get('User-Agent', ''),
        address=address
    )
