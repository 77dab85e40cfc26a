"""Settings shared by every environment."""
import os


class BaseConfig:
    """Base configuration class."""
    
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # CORS
    CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
    
    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL') or 'memory://'
    ATTENDANCE_SUBMIT_RATE_LIMIT = "30 per minute"
    
    # Teacher identification
    TEACHER_ID_HEADER = 'Teacher-Id'
    
    # Sessions
    QR_TOKEN_BYTES = 32  # 256 bits
    SESSION_TOKEN_MAX_ATTEMPTS = 5
    
    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = 'logs/app.log'
