# File: uyghurly_app/modules/settings/routes/api.py
from flask import request

from uyghurly_app.core.error_handlers import ValidationError, success_response
from uyghurly_app.modules.progress.services import get_device_storage
from .. import settings_bp as blueprint
from ..services import PreferencesService


@blueprint.route('/api/preferences', methods=['GET', 'POST'])
def manage_preferences():
    service = PreferencesService(get_device_storage())

    if request.method == 'POST':
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data:
            raise ValidationError('No data provided')
        return success_response(service.update_preferences(data), 'Preferences saved successfully')

    return success_response(service.get_preferences())
