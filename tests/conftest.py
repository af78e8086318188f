import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from uyghurly_app import create_app, db
from uyghurly_app.config import Config
from uyghurly_app.modules.auth.services import AuthService
from uyghurly_app.modules.progress.services import DeviceStorage


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    CONTENT_SEED = 1234
    LOG_DIR = None
    GOOGLE_CLIENT_ID = 'test-client-id'
    ADMIN_EMAILS = ('admin@example.com',)


class StaticExportConfig(TestConfig):
    BUILD_TARGET = 'ios'
    STATIC_EXPORT = True


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def static_app():
    app = create_app(StaticExportConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    return DeviceStorage('test-device')


@pytest.fixture
def registered_user(app):
    """A password account created through the normal sign-up path."""
    with app.test_request_context():
        user = AuthService.sign_up('Aynur', 'aynur', 'aynur@example.com', 'Passw0rd')
    return user
