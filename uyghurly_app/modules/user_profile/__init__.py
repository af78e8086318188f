from flask import Blueprint

user_profile_bp = Blueprint('user_profile', __name__)

module_metadata = {
    'name': 'Profile',
    'icon': 'user',
    'category': 'Account',
    'url_prefix': '/profile',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
