"""
Progress Tracker - the one place lesson and quiz results are written.

Every result lands in device storage (``lesson-<slug>``, ``quiz-<unit_id>``)
so guests and signed-in learners behave the same offline. For a registered
user the tracker also fires ``lesson_completed`` / ``quiz_completed``; the
handlers in ``events.py`` merge the result into the user's ``progress``
map. Reads fall back to that map when the device has no record, so a
second device sees what the first one finished.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from flask import current_app
from flask_login import current_user

from uyghurly_app.core.error_handlers import ValidationError
from uyghurly_app.core.signals import lesson_completed, quiz_completed
from uyghurly_app.models import User
from uyghurly_app.modules.lessons.logics.text import unit_id_for
from uyghurly_app.modules.lessons.schemas import Unit
from uyghurly_app.modules.lessons.services import LessonLoader, get_lesson_loader
from .device_storage import DeviceStorage, get_device_storage

LESSON_PREFIX = 'lesson-'
QUIZ_PREFIX = 'quiz-'
DEFAULT_PASSING_SCORE = 70


def _parse_date(value) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00')).date()
    except ValueError:
        return None


class ProgressTracker:
    def __init__(self, storage: DeviceStorage, user: Optional[User] = None,
                 loader: Optional[LessonLoader] = None):
        self.storage = storage
        self.user = user
        self.loader = loader

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user is not None else None

    def _remote_progress(self, unit_id: str) -> dict:
        if self.user is None:
            return {}
        return dict((self.user.progress or {}).get(unit_id) or {})

    # ------------------------------------------------------------------ #
    #  Lessons                                                             #
    # ------------------------------------------------------------------ #

    def save_lesson_result(self, slug: str, score: int, total_questions: int,
                           completed_at: Optional[datetime] = None) -> dict:
        if score < 0 or total_questions < 0 or score > total_questions:
            raise ValidationError('Score must be between 0 and the number of questions.')

        record = {
            'completed': True,
            'score': score,
            'total_questions': total_questions,
            'completed_at': (completed_at or datetime.now(timezone.utc)).isoformat(),
        }
        self.storage.set_json(f'{LESSON_PREFIX}{slug}', record)

        unit_id = None
        unit_completed = False
        if self.loader is not None:
            lesson = self.loader.get_lesson_by_slug(slug)
            if lesson is not None:
                unit_id = unit_id_for(lesson.unit)
                unit = self.loader.get_unit(unit_id)
                unit_completed = unit is not None and self.unit_status(unit)['completed']

        lesson_completed.send(
            current_app._get_current_object(),
            user_id=self.user_id,
            unit_id=unit_id,
            slug=slug,
            record=record,
            unit_completed=unit_completed,
        )
        return record

    def get_lesson_status(self, slug: str) -> Optional[dict]:
        record = self.storage.get_json(f'{LESSON_PREFIX}{slug}')
        return record if isinstance(record, dict) else None

    def is_lesson_completed(self, slug: str) -> bool:
        status = self.get_lesson_status(slug)
        return bool(status and status.get('completed'))

    # ------------------------------------------------------------------ #
    #  Quizzes                                                             #
    # ------------------------------------------------------------------ #

    def save_quiz_result(self, result) -> dict:
        record = result.to_dict() if hasattr(result, 'to_dict') else dict(result)
        self.storage.set_json(f'{QUIZ_PREFIX}{record["quiz_id"]}', record)

        quiz_completed.send(
            current_app._get_current_object(),
            user_id=self.user_id,
            unit_id=record['quiz_id'],
            result=record,
        )
        return record

    def get_quiz_result(self, unit_id: str) -> Optional[dict]:
        record = self.storage.get_json(f'{QUIZ_PREFIX}{unit_id}')
        return record if isinstance(record, dict) else None

    def quiz_status(self, unit_id: str, passing_score: int = DEFAULT_PASSING_SCORE) -> dict:
        result = self.get_quiz_result(unit_id)
        if result is not None:
            score = result.get('score', 0)
            return {'completed': True, 'passed': score >= passing_score, 'score': score}

        remote = self._remote_progress(unit_id)
        if remote.get('quiz_completed'):
            return {'completed': True, 'passed': True, 'score': remote.get('quiz_score')}
        return {'completed': False, 'passed': False, 'score': None}

    def is_quiz_completed(self, unit_id: str) -> bool:
        return self.quiz_status(unit_id)['passed']

    # ------------------------------------------------------------------ #
    #  Units                                                               #
    # ------------------------------------------------------------------ #

    def unit_status(self, unit: Unit) -> dict:
        total = len(unit.lessons)
        done = sum(1 for slug in unit.lessons if self.is_lesson_completed(slug))
        if done < total and self._remote_progress(unit.id).get('lesson_completed'):
            done = total
        return {
            'completed': total > 0 and done == total,
            'lessons_completed': done,
            'total_lessons': total,
        }

    def is_unit_locked(self, units: List[Unit], index: int) -> bool:
        """The first unit is open; each later one needs the previous quiz passed."""
        if index <= 0:
            return False
        return not self.is_quiz_completed(units[index - 1].id)

    def overview(self, units: List[Unit]) -> List[dict]:
        return [
            {
                'unit': unit.to_dict(),
                'status': self.unit_status(unit),
                'quiz': self.quiz_status(unit.id),
                'locked': self.is_unit_locked(units, index),
            }
            for index, unit in enumerate(units)
        ]

    # ------------------------------------------------------------------ #
    #  Profile statistics                                                  #
    # ------------------------------------------------------------------ #

    def profile_stats(self, today: Optional[date] = None) -> Dict[str, int]:
        today = today or datetime.now(timezone.utc).date()
        lessons = self.loader.get_all_lessons() if self.loader else []
        units = self.loader.get_units() if self.loader else []

        lessons_completed = 0
        words_learned = 0
        lessons_today = 0
        for lesson in lessons:
            status = self.get_lesson_status(lesson.slug)
            if status and status.get('completed'):
                lessons_completed += 1
                words_learned += len(lesson.vocabulary)
                if _parse_date(status.get('completed_at')) == today:
                    lessons_today += 1

        quiz_scores = []
        for unit in units:
            status = self.quiz_status(unit.id)
            if status['passed']:
                quiz_scores.append(status['score'] or 0)

        quiz_average = int(sum(quiz_scores) / len(quiz_scores) + 0.5) if quiz_scores else 0

        return {
            'lessons_completed': lessons_completed,
            'total_lessons': len(lessons),
            'units_completed': len(quiz_scores),
            'total_units': len(units),
            'words_learned': words_learned,
            'quiz_average': quiz_average,
            'lessons_today': lessons_today,
        }

    # ------------------------------------------------------------------ #
    #  Bulk operations (admin tools)                                       #
    # ------------------------------------------------------------------ #

    def clear_all(self) -> int:
        keys = self.storage.keys(LESSON_PREFIX) + self.storage.keys(QUIZ_PREFIX)
        for key in keys:
            self.storage.remove_item(key)
        return len(keys)

    def complete_all_lessons(self) -> int:
        lessons = self.loader.get_all_lessons() if self.loader else []
        now = datetime.now(timezone.utc).isoformat()
        for lesson in lessons:
            total = len(lesson.exercises) + len(lesson.typing_questions)
            self.storage.set_json(f'{LESSON_PREFIX}{lesson.slug}', {
                'completed': True,
                'score': total,
                'total_questions': total,
                'completed_at': now,
            })
        return len(lessons)

    def complete_all_quizzes(self) -> int:
        units = self.loader.get_units() if self.loader else []
        now = datetime.now(timezone.utc).isoformat()
        for unit in units:
            self.storage.set_json(f'{QUIZ_PREFIX}{unit.id}', {
                'quiz_id': unit.id,
                'score': 100,
                'total_questions': 0,
                'correct_answers': 0,
                'completed_at': now,
                'passed': True,
                'answers': [],
            })
        return len(units)


def get_progress_tracker() -> ProgressTracker:
    """Tracker for the calling device and, when signed in, its user."""
    user = current_user if current_user.is_authenticated else None
    return ProgressTracker(get_device_storage(), user=user, loader=get_lesson_loader())
