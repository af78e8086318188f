# File: uyghurly_app/modules/quiz/__init__.py
from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__)

module_metadata = {
    'name': 'Unit Quiz',
    'icon': 'check-square',
    'category': 'Learning',
    'url_prefix': '',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
