# File: uyghurly_app/modules/admin/routes/api.py
# Testing shortcuts over the caller's own device progress.
from flask import current_app
from flask_login import current_user, login_required

from uyghurly_app.core.error_handlers import AuthorizationError, success_response
from uyghurly_app.modules.progress.services import get_progress_tracker
from .. import admin_bp as blueprint


def is_admin(user):
    if not user or not user.is_authenticated:
        return False
    return (user.email or '').lower() in current_app.config.get('ADMIN_EMAILS', ())


def admin_required():
    if not is_admin(current_user):
        raise AuthorizationError('Admin access required.')


@blueprint.route('/api/status', methods=['GET'])
@login_required
def api_admin_status():
    return success_response({'is_admin': is_admin(current_user), 'email': current_user.email})


@blueprint.route('/api/complete-lessons', methods=['POST'])
@login_required
def api_complete_all_lessons():
    admin_required()
    count = get_progress_tracker().complete_all_lessons()
    current_app.logger.info(f"[Admin] {current_user.email} completed {count} lessons")
    return success_response({'count': count}, 'All lessons marked as completed.')


@blueprint.route('/api/complete-quizzes', methods=['POST'])
@login_required
def api_complete_all_quizzes():
    admin_required()
    count = get_progress_tracker().complete_all_quizzes()
    current_app.logger.info(f"[Admin] {current_user.email} completed {count} quizzes")
    return success_response({'count': count}, 'All quizzes marked as completed.')


@blueprint.route('/api/clear-progress', methods=['POST'])
@login_required
def api_clear_progress():
    admin_required()
    count = get_progress_tracker().clear_all()
    current_app.logger.info(f"[Admin] {current_user.email} cleared {count} progress records")
    return success_response({'count': count}, 'All progress cleared.')
