from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

module_metadata = {
    'name': 'Authentication',
    'icon': 'lock',
    'category': 'Account',
    'url_prefix': '/auth',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
