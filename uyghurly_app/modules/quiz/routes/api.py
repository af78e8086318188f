# File: uyghurly_app/modules/quiz/routes/api.py
from flask import request

from uyghurly_app.core.error_handlers import NotFoundError, ValidationError, success_response
from uyghurly_app.modules.lessons.services import get_lesson_loader
from uyghurly_app.modules.progress.services import get_progress_tracker
from .. import quiz_bp as blueprint
from ..logics.answers import is_correct_answer
from ..logics.grading import grade_quiz, score_lesson_attempt
from ..services import get_quiz_service


def _get_lesson_or_404(slug):
    lesson = get_lesson_loader().get_lesson_by_slug(slug)
    if lesson is None:
        raise NotFoundError(f'Lesson {slug} not found', resource='lesson')
    return lesson


@blueprint.route('/api/quiz/<unit_id>', methods=['GET'])
def get_unit_quiz(unit_id):
    """The unit's quiz, without correct answers."""
    quiz = get_quiz_service().get_or_generate_unit_quiz(unit_id)
    data = quiz.to_dict(include_answers=False)
    data['status'] = get_progress_tracker().quiz_status(unit_id, quiz.passing_score)
    return success_response(data)


@blueprint.route('/api/quiz/<unit_id>/submit', methods=['POST'])
def submit_unit_quiz(unit_id):
    payload = request.get_json(silent=True) or {}
    selected = payload.get('answers')
    if not isinstance(selected, dict):
        raise ValidationError('answers must map question ids to the chosen option.')

    quiz = get_quiz_service().get_or_generate_unit_quiz(unit_id)
    result = grade_quiz(quiz, selected)
    get_progress_tracker().save_quiz_result(result)

    data = result.to_dict()
    data['explanations'] = {q.id: q.explanation for q in quiz.questions}
    data['correct_answers_by_id'] = {q.id: q.correct_answer for q in quiz.questions}
    return success_response(data, 'Quiz passed!' if result.passed else 'Keep practicing and try again.')


@blueprint.route('/api/typing/check', methods=['POST'])
def check_typing_answer():
    payload = request.get_json(silent=True) or {}
    lesson = _get_lesson_or_404(payload.get('slug'))

    index = payload.get('index')
    if not isinstance(index, int) or not 0 <= index < len(lesson.typing_questions):
        raise ValidationError(f'Invalid typing question index {index!r}')

    answer = payload.get('answer') or ''
    if not isinstance(answer, str):
        raise ValidationError('answer must be a string.')

    question = lesson.typing_questions[index]
    correct = is_correct_answer(answer, question.correct_answer)
    return success_response({
        'correct': correct,
        'correct_answer': question.correct_answer,
    })


@blueprint.route('/api/lessons/<slug>/attempt', methods=['POST'])
def submit_lesson_attempt(slug):
    """Score a run through the lesson; a finished or lost run is saved as progress."""
    lesson = _get_lesson_or_404(slug)
    payload = request.get_json(silent=True) or {}
    responses = payload.get('responses')
    if not isinstance(responses, list) or not all(isinstance(r, dict) for r in responses):
        raise ValidationError('responses must be a list of objects.')

    attempt = score_lesson_attempt(lesson, responses)
    data = attempt.to_dict()
    data['saved'] = False
    if attempt.finished:
        get_progress_tracker().save_lesson_result(slug, attempt.score, attempt.total_questions)
        data['saved'] = True
    return success_response(data)
