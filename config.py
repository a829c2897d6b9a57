import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Flask application configuration."""

    # Flask core
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-key-change-in-production')

    # Authentication
    API_KEY = os.environ.get('API_KEY')  # None means no key required

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Where the CLI writes program files
    OUTPUT_DIR = os.environ.get('OUTPUT_DIR', 'output')

    # Default machine profile, used when a request carries no 'machine' object
    MACHINE_DIALECT = os.environ.get('MACHINE_DIALECT', 'generic')
    MACHINE_SAFE_HEIGHT = float(os.environ.get('MACHINE_SAFE_HEIGHT', 10))
    MACHINE_SPINDLE_SPEED = float(os.environ.get('MACHINE_SPINDLE_SPEED', 18000))
    MACHINE_FEED_RATE = float(os.environ.get('MACHINE_FEED_RATE', 800))
    MACHINE_PLUNGE_RATE = float(os.environ.get('MACHINE_PLUNGE_RATE', 300))
    MACHINE_USE_TOOL_COMPENSATION = os.environ.get('MACHINE_USE_TOOL_COMPENSATION', 'false')
    MACHINE_USE_TOOL_RATES = os.environ.get('MACHINE_USE_TOOL_RATES', 'true')

    # Request size guard for generation payloads
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 2 * 1024 * 1024))
