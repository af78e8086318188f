"""
Scoring of quiz submissions and lesson attempts.
Pure logic, no Database access.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from uyghurly_app.core.error_handlers import ValidationError
from uyghurly_app.modules.lessons.schemas import LessonContent
from ..schemas import LessonAttempt, QuizResult, UnitQuiz
from .answers import is_correct_answer

DEFAULT_LIVES = 3

MULTIPLE_CHOICE = 'multiple-choice'
TYPING = 'typing'


def percent(correct: int, total: int) -> int:
    """Whole percentage, halves rounded up."""
    if total <= 0:
        return 0
    return int(correct * 100 / total + 0.5)


def grade_quiz(quiz: UnitQuiz, selected_answers: Mapping[str, str],
               completed_at: Optional[datetime] = None) -> QuizResult:
    """Grade a submission keyed by question id; unanswered questions count as wrong."""
    answers = []
    correct = 0
    for question in quiz.questions:
        selected = selected_answers.get(question.id)
        is_correct = selected is not None and selected == question.correct_answer
        correct += int(is_correct)
        answers.append({
            'question_id': question.id,
            'selected_answer': selected,
            'is_correct': is_correct,
        })

    score = percent(correct, len(quiz.questions))
    completed_at = completed_at or datetime.now(timezone.utc)
    return QuizResult(
        quiz_id=quiz.unit_id,
        score=score,
        total_questions=len(quiz.questions),
        correct_answers=correct,
        completed_at=completed_at.isoformat(),
        passed=score >= quiz.passing_score,
        answers=answers,
    )


def score_lesson_attempt(lesson: LessonContent, responses: Iterable[Mapping],
                         lives: int = DEFAULT_LIVES) -> LessonAttempt:
    """Replay a learner's responses in the order they were given.

    Each response is ``{'type': 'multiple-choice' | 'typing', 'index': int,
    'answer': str}``. A correct answer scores a point, a wrong one costs a
    life; the attempt stops when the lives run out.

    Raises:
        ValidationError: a response names an unknown type or index, or its
            answer is not a string.
    """
    score = 0
    answered = 0
    game_over = False

    for position, response in enumerate(responses):
        kind = response.get('type')
        index = response.get('index')
        answer = response.get('answer') or ''
        if not isinstance(answer, str):
            raise ValidationError(f'Response {position} answer must be a string')

        if kind == MULTIPLE_CHOICE:
            pool = lesson.exercises
        elif kind == TYPING:
            pool = lesson.typing_questions
        else:
            raise ValidationError(f'Response {position} has unknown type {kind!r}')
        if not isinstance(index, int) or not 0 <= index < len(pool):
            raise ValidationError(f'Response {position} has an invalid index {index!r}')

        expected = pool[index].correct_answer
        if kind == MULTIPLE_CHOICE:
            is_correct = answer == expected
        else:
            is_correct = is_correct_answer(answer, expected)

        answered += 1
        if is_correct:
            score += 1
        else:
            lives -= 1
            if lives <= 0:
                game_over = True
                break

    return LessonAttempt(
        slug=lesson.slug,
        score=score,
        total_questions=len(lesson.exercises) + len(lesson.typing_questions),
        lives_remaining=max(lives, 0),
        answered=answered,
        game_over=game_over,
    )
