"""Environment configurations for the QR Attendance backend."""
import os
from typing import Optional, Type

from .base import BaseConfig
from .development import DevelopmentConfig
from .production import ProductionConfig
from .testing import TestingConfig

DEFAULT_ENV = 'development'

config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}

def get_config(config_name: Optional[str] = None) -> Type[BaseConfig]:
    """Resolve a config class by name, falling back to ``FLASK_ENV``.

    Unknown names get the development settings.
    """
    name = (config_name or os.getenv('FLASK_ENV') or DEFAULT_ENV).strip().lower()
    return config_map.get(name, config_map[DEFAULT_ENV])
