from flask import Blueprint

progress_bp = Blueprint('progress', __name__)

module_metadata = {
    'name': 'Progress',
    'icon': 'chart-line',
    'category': 'Learning',
    'url_prefix': '/progress',
    'enabled': True
}

from . import events  # noqa: E402,F401
from .routes import api  # noqa: E402,F401
