from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

module_metadata = {
    'name': 'Admin Panel',
    'icon': 'shield',
    'category': 'System',
    'url_prefix': '/admin',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
