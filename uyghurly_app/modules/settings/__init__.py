from flask import Blueprint

settings_bp = Blueprint('settings', __name__)

module_metadata = {
    'name': 'Settings',
    'icon': 'cog',
    'category': 'Account',
    'url_prefix': '/settings',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
