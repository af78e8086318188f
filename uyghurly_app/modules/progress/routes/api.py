# File: uyghurly_app/modules/progress/routes/api.py
from flask import request

from uyghurly_app.core.error_handlers import NotFoundError, ValidationError, success_response
from uyghurly_app.modules.lessons.services import get_lesson_loader
from .. import progress_bp as blueprint
from ..services import get_progress_tracker


@blueprint.route('/api/overview', methods=['GET'])
def overview():
    """Every unit with its lesson counts, quiz status and lock state."""
    units = get_lesson_loader().get_units()
    return success_response(get_progress_tracker().overview(units))


@blueprint.route('/api/stats', methods=['GET'])
def stats():
    return success_response(get_progress_tracker().profile_stats())


@blueprint.route('/api/lessons/<slug>', methods=['GET'])
def lesson_status(slug):
    status = get_progress_tracker().get_lesson_status(slug)
    return success_response(status or {'completed': False})


@blueprint.route('/api/lessons/<slug>', methods=['POST'])
def save_lesson(slug):
    if get_lesson_loader().get_lesson_by_slug(slug) is None:
        raise NotFoundError(f'Lesson {slug} not found', resource='lesson')

    payload = request.get_json(silent=True) or {}
    try:
        score = int(payload['score'])
        total = int(payload['total_questions'])
    except (KeyError, TypeError, ValueError):
        raise ValidationError('score and total_questions must be integers.')

    record = get_progress_tracker().save_lesson_result(slug, score, total)
    return success_response(record, 'Lesson saved')


@blueprint.route('/api/quizzes/<unit_id>', methods=['GET'])
def quiz_status(unit_id):
    tracker = get_progress_tracker()
    data = tracker.quiz_status(unit_id)
    data['result'] = tracker.get_quiz_result(unit_id)
    return success_response(data)
