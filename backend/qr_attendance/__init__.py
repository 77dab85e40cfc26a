# File: backend/qr_attendance/__init__.py
"""QR Attendance - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

def create_app(config_name: str = None, test_config: dict = None, clock=None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    from qr_attendance.services.clock import Clock
    app.extensions['attendance_clock'] = clock or Clock()

    # Configure CORS
    CORS(
        app,
        origins=app.config.get('CORS_ORIGINS', ["*"]),
        allow_headers=['Content-Type', app.config['TEACHER_ID_HEADER']],
        expose_headers=['Content-Disposition']
    )

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'QR Attendance',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from qr_attendance.api.sessions import sessions_bp
    from qr_attendance.api.attendance import attendance_bp
    from qr_attendance.api.reports import reports_bp
    from qr_attendance.utils.swagger import API_URL, SWAGGER_URL, generate_swagger_spec, get_swagger_blueprint

    app.register_blueprint(sessions_bp, url_prefix='/api/sessions')
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')

    # Swagger UI
    @app.route(API_URL)
    def swagger_spec():
        """Serve Swagger/OpenAPI specification."""
        return jsonify(generate_swagger_spec())

    app.register_blueprint(get_swagger_blueprint(), url_prefix=SWAGGER_URL)

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from qr_attendance.errors import AttendanceError
    from qr_attendance.utils.helpers import handle_error
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(AttendanceError)
    def attendance_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    @app.errorhandler(Exception)
    def unexpected_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', error)
        return jsonify({
            'error': True,
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        # Service and store loggers share the app's handler
        logging.getLogger('qr_attendance').addHandler(file_handler)
        logging.getLogger('qr_attendance').setLevel(level)

        app.logger.setLevel(level)
        app.logger.info('QR Attendance startup')
    else:
        logging.getLogger('qr_attendance').setLevel(level)

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models
        from qr_attendance.models import Teacher, AttendanceSession, AttendanceRecord

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('create-teacher')
    @click.option('--teacher-id', prompt='Teacher ID', help='Value sent in the Teacher-Id header')
    @click.option('--name', prompt='Teacher name', default='', help='Display name')
    def create_teacher(teacher_id, name):
        """Register a teacher."""
        from qr_attendance.models.teacher import Teacher

        teacher_id = teacher_id.strip()
        if Teacher.find_by_teacher_id(teacher_id):
            click.echo(f'Teacher already exists: {teacher_id}')
            return

        Teacher(teacher_id=teacher_id, name=name.strip() or None).save()
        click.echo(f'Teacher created: {teacher_id}')

    @app.cli.command('list-teachers')
    def list_teachers():
        """List registered teachers."""
        from qr_attendance.models.teacher import Teacher

        for teacher in Teacher.query.order_by(Teacher.teacher_id).all():
            click.echo(f'{teacher.teacher_id}\t{teacher.name or ""}')
