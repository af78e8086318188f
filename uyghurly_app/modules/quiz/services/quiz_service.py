"""
Quiz Service - binds the quiz engine to the lesson catalog and caches one
quiz per unit for the lifetime of the app.
"""

from __future__ import annotations

import random
import threading
from typing import Dict, Optional

from flask import current_app

from uyghurly_app.core.error_handlers import NotFoundError
from uyghurly_app.modules.lessons.services import LessonLoader, get_lesson_loader
from ..engine.quiz_generator import QuizGenerator
from ..schemas import UnitQuiz

EXTENSION_KEY = 'uyghurly.quiz_service'


class QuizService:
    def __init__(self, loader: LessonLoader, seed: Optional[int] = None):
        self.loader = loader
        self.seed = seed
        self._cache: Dict[str, UnitQuiz] = {}
        self._lock = threading.Lock()

    def _generator_for(self, unit_id: str) -> QuizGenerator:
        if self.seed is None:
            return QuizGenerator(random.Random())
        return QuizGenerator(random.Random(f'{self.seed}:quiz:{unit_id}'))

    def resolve_unit_title(self, unit_id: str) -> str:
        unit = self.loader.get_unit(unit_id)
        if unit is None:
            raise NotFoundError(f'Unit {unit_id} not found', resource='unit')
        return unit.title

    def generate_unit_quiz(self, unit_id: str, unit_title: str) -> UnitQuiz:
        """Build a fresh quiz, bypassing the cache."""
        generator = self._generator_for(unit_id)
        return generator.generate_unit_quiz(unit_id, unit_title, self.loader.get_all_lessons())

    def get_or_generate_unit_quiz(self, unit_id: str, unit_title: Optional[str] = None) -> UnitQuiz:
        cached = self._cache.get(unit_id)
        if cached is not None:
            return cached

        unit_title = unit_title or self.resolve_unit_title(unit_id)
        # Held across generation so concurrent first requests build the quiz once.
        with self._lock:
            cached = self._cache.get(unit_id)
            if cached is None:
                cached = self.generate_unit_quiz(unit_id, unit_title)
                self._cache[unit_id] = cached
                current_app.logger.info("Cached quiz for unit %s (%d questions)", unit_id, len(cached.questions))
            return cached

    def clear_quiz_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def quiz_cache_size(self) -> int:
        return len(self._cache)


def get_quiz_service() -> QuizService:
    app = current_app._get_current_object()
    service = app.extensions.get(EXTENSION_KEY)
    if service is None:
        service = app.extensions.setdefault(
            EXTENSION_KEY,
            QuizService(get_lesson_loader(), seed=app.config.get('CONTENT_SEED')),
        )
    return service
