"""
Event Handlers for the Progress Module.

Device storage always receives the result first (see ``ProgressTracker``).
These handlers copy it into the registered user's ``progress`` map so the
account carries the learner's state between devices. Guests have no
``user_id`` and are skipped.
"""
from flask import current_app

from uyghurly_app.core.error_handlers import NotFoundError
from uyghurly_app.core.signals import lesson_completed, quiz_completed
from uyghurly_app.modules.user_profile.services import UserService


@lesson_completed.connect
def on_lesson_completed(sender, **kwargs):
    """
    Expected kwargs:
        - user_id: str | None
        - unit_id: str | None
        - slug: str
        - record: dict
        - unit_completed: bool
    """
    user_id = kwargs.get('user_id')
    unit_id = kwargs.get('unit_id')
    if not user_id or not unit_id or not kwargs.get('unit_completed'):
        return

    try:
        UserService.update_user_progress(user_id, unit_id, {
            'lesson_completed': True,
            'completed_at': kwargs['record'].get('completed_at'),
        })
    except NotFoundError:
        current_app.logger.warning(f"[Progress] Lesson result for unknown user {user_id} not synced")


@quiz_completed.connect
def on_quiz_completed(sender, **kwargs):
    """
    Expected kwargs:
        - user_id: str | None
        - unit_id: str
        - result: dict (QuizResult.to_dict())
    """
    user_id = kwargs.get('user_id')
    result = kwargs.get('result') or {}
    if not user_id or not result.get('passed'):
        return

    try:
        UserService.update_user_progress(user_id, kwargs['unit_id'], {
            'quiz_completed': True,
            'quiz_score': result.get('score'),
            'completed_at': result.get('completed_at'),
        })
    except NotFoundError:
        current_app.logger.warning(f"[Progress] Quiz result for unknown user {user_id} not synced")
    else:
        current_app.logger.debug(f"[Progress] Quiz {kwargs['unit_id']} synced for user {user_id}")
