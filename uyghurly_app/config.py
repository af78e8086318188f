# File: uyghurly_app/config.py
# Application configuration, read from the environment (and a .env file).

import os

from dotenv import load_dotenv

load_dotenv()

# Project root: uyghurly_app/ lives one level below it.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "uyghurly.db")

# Bundled lesson JSON ships inside the package.
DEFAULT_CONTENT_DIR = os.path.join(os.path.dirname(__file__), 'content')


def _split_emails(raw):
    return tuple(e.strip().lower() for e in (raw or '').split(',') if e.strip())


class Config:
    """Uyghurly application settings."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "ios" produces the static-export build: no accounts, read-only content.
    BUILD_TARGET = os.environ.get('BUILD_TARGET', 'web')
    STATIC_EXPORT = BUILD_TARGET == 'ios'

    CONTENT_DIR = os.environ.get('CONTENT_DIR') or DEFAULT_CONTENT_DIR
    # Seed for exercise/quiz shuffling. None means a fresh seed per process.
    CONTENT_SEED = int(os.environ['CONTENT_SEED']) if os.environ.get('CONTENT_SEED') else None

    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    GOOGLE_TOKENINFO_URL = 'https://oauth2.googleapis.com/tokeninfo'
    GOOGLE_TIMEOUT_SECONDS = 10

    ADMIN_EMAILS = _split_emails(os.environ.get('ADMIN_EMAILS'))

    # Failed password logins per email before further attempts are refused.
    LOGIN_MAX_FAILURES = 5
    LOGIN_LOCKOUT_SECONDS = 15 * 60

    SESSION_COOKIE_NAME = 'uyghurly_session'

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')

    @classmethod
    def init_app(cls, app):
        """Create the directories the app writes to."""
        if app.config['SQLALCHEMY_DATABASE_URI'] == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if app.config.get('LOG_DIR'):
            os.makedirs(app.config['LOG_DIR'], exist_ok=True)
