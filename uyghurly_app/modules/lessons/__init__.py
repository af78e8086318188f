# File: uyghurly_app/modules/lessons/__init__.py
from flask import Blueprint

lessons_bp = Blueprint('lessons', __name__)

module_metadata = {
    'name': 'Lessons',
    'icon': 'book',
    'category': 'Learning',
    'url_prefix': '',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
