# backend/qr_attendance/utils/swagger.py
"""Swagger/OpenAPI configuration for the application."""
from flask_swagger_ui import get_swaggerui_blueprint

# Swagger UI configuration
SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

def get_swagger_blueprint():
    """Create and return swagger UI blueprint."""
    return get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            'app_name': "QR Attendance API",
            'defaultModelsExpandDepth': -1,
            'docExpansion': 'list',
            'validatorUrl': None,
        }
    )

def _json_response(description, schema_ref='Success'):
    return {
        "description": description,
        "content": {"application/json": {"schema": {"$ref": f"#/components/schemas/{schema_ref}"}}}
    }

def _session_id_param():
    return {"name": "session_id", "in": "path", "required": True, "schema": {"type": "string", "format": "uuid"}}

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    teacher = [{"teacherId": []}]
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "QR Attendance API",
            "description": "Timed attendance sessions with QR tokens and per-device duplicate protection",
            "version": "1.0.0"
        },
        "servers": [
            {"url": "http://127.0.0.1:5000/api", "description": "Development server"}
        ],
        "components": {
            "securitySchemes": {
                "teacherId": {"type": "apiKey", "in": "header", "name": "Teacher-Id"}
            },
            "schemas": {
                "Session": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string", "format": "uuid"},
                        "teacher_id": {"type": "string"},
                        "course_code": {"type": "string"},
                        "course_name": {"type": "string"},
                        "class_name": {"type": "string", "nullable": True},
                        "semester": {"type": "integer", "nullable": True},
                        "shift": {"type": "string", "nullable": True},
                        "session_type": {"type": "string", "enum": ["theory", "practical"]},
                        "session_date": {"type": "string", "format": "date"},
                        "start_time": {"type": "string", "example": "09:00"},
                        "end_time": {"type": "string", "example": "10:30"},
                        "qr_token": {"type": "string"},
                        "is_active": {"type": "boolean"},
                        "is_open": {"type": "boolean"},
                        "attendance_count": {"type": "integer"}
                    }
                },
                "SessionInput": {
                    "type": "object",
                    "required": ["course_code", "course_name", "date", "session_type", "start_time", "end_time"],
                    "properties": {
                        "course_code": {"type": "string", "maxLength": 20},
                        "course_name": {"type": "string", "maxLength": 100},
                        "class_name": {"type": "string", "maxLength": 50},
                        "semester": {"type": "integer", "minimum": 1, "maximum": 12},
                        "shift": {"type": "string", "maxLength": 20},
                        "date": {"type": "string", "format": "date"},
                        "session_type": {"type": "string", "enum": ["theory", "practical"]},
                        "start_time": {"type": "string", "example": "09:00"},
                        "end_time": {"type": "string", "example": "10:30"}
                    }
                },
                "AttendanceRecord": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "session_id": {"type": "string"},
                        "roll_number": {"type": "string"},
                        "submitted_at": {"type": "string", "format": "date-time"},
                        "status": {"type": "string"}
                    }
                },
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "code": {"type": "string"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"},
                        "details": {"type": "array", "items": {"type": "string"}}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": {"type": "string"},
                        "data": {"type": "object"}
                    }
                }
            }
        },
        "paths": {
            "/sessions": {
                "post": {
                    "tags": ["Sessions"],
                    "summary": "Create attendance session",
                    "security": teacher,
                    "requestBody": {
                        "required": True,
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/SessionInput"}}}
                    },
                    "responses": {
                        "201": _json_response("Session created"),
                        "400": _json_response("Validation error", "Error"),
                        "409": _json_response("Session already exists for this slot", "Error")
                    }
                },
                "get": {
                    "tags": ["Sessions"],
                    "summary": "List own sessions",
                    "security": teacher,
                    "parameters": [{"name": "active", "in": "query", "schema": {"type": "boolean"}}],
                    "responses": {"200": _json_response("Sessions")}
                }
            },
            "/sessions/{session_id}": {
                "get": {
                    "tags": ["Sessions"],
                    "summary": "Session details",
                    "security": teacher,
                    "parameters": [_session_id_param()],
                    "responses": {
                        "200": _json_response("Session"),
                        "403": _json_response("Not the owner", "Error"),
                        "404": _json_response("Session not found", "Error")
                    }
                }
            },
            "/sessions/{session_id}/end": {
                "post": {
                    "tags": ["Sessions"],
                    "summary": "End session (idempotent)",
                    "security": teacher,
                    "parameters": [_session_id_param()],
                    "responses": {
                        "200": _json_response("Session ended"),
                        "403": _json_response("Not the owner", "Error"),
                        "404": _json_response("Session not found", "Error")
                    }
                }
            },
            "/sessions/{session_id}/qrcode": {
                "get": {
                    "tags": ["Sessions"],
                    "summary": "QR token and image",
                    "security": teacher,
                    "parameters": [_session_id_param()],
                    "responses": {"200": _json_response("QR code")}
                }
            },
            "/sessions/{session_id}/attendance": {
                "get": {
                    "tags": ["Sessions"],
                    "summary": "Attendance records in submission order",
                    "security": teacher,
                    "parameters": [_session_id_param()],
                    "responses": {"200": _json_response("Records")}
                }
            },
            "/attendance/session/{session_id}/mark": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Mark attendance with QR token",
                    "parameters": [_session_id_param()],
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "required": ["roll_number", "qr_token"],
                                    "properties": {
                                        "roll_number": {"type": "string", "pattern": "^[A-Za-z0-9_-]+$"},
                                        "qr_token": {"type": "string"}
                                    }
                                }
                            }
                        }
                    },
                    "responses": {
                        "201": _json_response("Attendance marked"),
                        "400": _json_response("Validation error, invalid token or session not open", "Error"),
                        "403": _json_response("Device already used", "Error"),
                        "404": _json_response("Session not found", "Error"),
                        "409": _json_response("Roll number already marked", "Error")
                    }
                }
            },
            "/attendance/session/{session_id}/check": {
                "get": {
                    "tags": ["Attendance"],
                    "summary": "Check whether a roll number is already marked",
                    "parameters": [
                        _session_id_param(),
                        {"name": "roll_number", "in": "query", "required": True, "schema": {"type": "string"}}
                    ],
                    "responses": {
                        "200": _json_response("Attendance status"),
                        "400": _json_response("Invalid roll number", "Error"),
                        "404": _json_response("Session not found", "Error")
                    }
                }
            },
            "/reports/session/{session_id}/{format}": {
                "get": {
                    "tags": ["Reports"],
                    "summary": "Download attendance report",
                    "security": teacher,
                    "parameters": [
                        _session_id_param(),
                        {"name": "format", "in": "path", "required": True,
                         "schema": {"type": "string", "enum": ["csv", "pdf"]}},
                        {"name": "since", "in": "query", "schema": {"type": "string", "format": "date-time"}},
                        {"name": "until", "in": "query", "schema": {"type": "string", "format": "date-time"}}
                    ],
                    "responses": {
                        "200": {"description": "Report file"},
                        "400": _json_response("Unsupported format or bad range", "Error")
                    }
                }
            }
        }
    }
