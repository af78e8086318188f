# File: uyghurly_app/modules/user_profile/routes/api.py
from flask import request
from flask_login import current_user, login_required

from uyghurly_app.core.error_handlers import success_response
from uyghurly_app.modules.progress.services import get_progress_tracker
from .. import user_profile_bp as blueprint
from ..services import AccountService


@blueprint.route('/api/me', methods=['GET'])
@login_required
def get_profile():
    data = current_user.to_dict()
    data['stats'] = get_progress_tracker().profile_stats()
    return success_response(data)


@blueprint.route('/api/account', methods=['POST', 'PATCH'])
@login_required
def update_account():
    payload = request.get_json(silent=True) or {}
    user = AccountService.update_account(current_user, payload.get('name'), payload.get('username'))
    return success_response(user.to_dict(), 'Profile updated')


@blueprint.route('/api/account', methods=['DELETE'])
@login_required
def delete_account():
    AccountService.delete_account(current_user._get_current_object())
    return success_response(message='Account deleted')
