"""
Unit Quiz Engine.
Pure logic, no Database access.

Builds multiple-choice questions from lesson vocabulary. Randomness comes
from the injected ``random.Random``; the same seed over the same lessons
yields the same quiz.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from uyghurly_app.core.error_handlers import NotFoundError
from uyghurly_app.modules.lessons.schemas import LessonContent, VocabularyItem
from ..schemas import QuizQuestion, UnitQuiz

logger = logging.getLogger(__name__)

QUIZ_SIZE = 20
OPTIONS_PER_QUESTION = 4
DISTRACTORS_PER_QUESTION = OPTIONS_PER_QUESTION - 1
PASSING_SCORE = 70
TIME_LIMIT_MINUTES = 20

ENGLISH_FILLERS = ("I don't know", "Not sure", "Maybe", "Different word")
UYGHUR_FILLERS = ("يوق", "بىلمەيمەن", "شەكلى", "باشقا")


class QuizGenerator:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _wrong_answers(self, vocabulary: Sequence[VocabularyItem], correct: str, field: str) -> List[str]:
        pool = []
        for item in vocabulary:
            value = getattr(item, field)
            if value != correct and value not in pool:
                pool.append(value)
        self.rng.shuffle(pool)
        return pool[:DISTRACTORS_PER_QUESTION]

    def _build_options(self, correct: str, wrong: Iterable[str], fillers: Sequence[str]) -> tuple:
        options = list(dict.fromkeys([correct, *wrong]))
        if len(options) < OPTIONS_PER_QUESTION:
            padding = [filler for filler in fillers if filler not in options]
            self.rng.shuffle(padding)
            options.extend(padding[:OPTIONS_PER_QUESTION - len(options)])
        self.rng.shuffle(options)
        return tuple(options)

    def questions_for_lesson(self, lesson: LessonContent) -> List[QuizQuestion]:
        """Both translation directions for every word in the lesson."""
        vocabulary = lesson.vocabulary
        questions = []

        for index, item in enumerate(vocabulary):
            wrong = self._wrong_answers(vocabulary, item.english, 'english')
            questions.append(QuizQuestion(
                id=f'{lesson.slug}_uyghur_to_english_{index}',
                question=f'What does "{item.uyghur}" mean in English?',
                options=self._build_options(item.english, wrong, ENGLISH_FILLERS),
                correct_answer=item.english,
                explanation=f'"{item.uyghur}" means "{item.english}" in Uyghur.',
            ))

        for index, item in enumerate(vocabulary):
            wrong = self._wrong_answers(vocabulary, item.uyghur, 'uyghur')
            questions.append(QuizQuestion(
                id=f'{lesson.slug}_english_to_uyghur_{index}',
                question=f'What is the Uyghur word for "{item.english}"?',
                options=self._build_options(item.uyghur, wrong, UYGHUR_FILLERS),
                correct_answer=item.uyghur,
                explanation=f'"{item.english}" is "{item.uyghur}" in Uyghur.',
            ))

        return questions

    def generate_unit_quiz(self, unit_id: str, unit_title: str, lessons: Iterable[LessonContent]) -> UnitQuiz:
        """Pick up to ``QUIZ_SIZE`` questions, covering every lesson of the unit.

        Raises:
            NotFoundError: no lesson belongs to ``unit_title``.
        """
        unit_lessons = [lesson for lesson in lessons if lesson.unit.lower() == unit_title.lower()]
        if not unit_lessons:
            raise NotFoundError(f'No lessons found for unit: {unit_title}', resource='unit')

        per_lesson = max(1, QUIZ_SIZE // len(unit_lessons))
        by_lesson = [self.questions_for_lesson(lesson) for lesson in unit_lessons]

        selected: List[QuizQuestion] = []
        for questions in by_lesson:
            if questions:
                shuffled = list(questions)
                self.rng.shuffle(shuffled)
                selected.extend(shuffled[:per_lesson])

        remaining = QUIZ_SIZE - len(selected)
        if remaining > 0:
            chosen = {question.id for question in selected}
            leftovers = [q for questions in by_lesson for q in questions if q.id not in chosen]
            self.rng.shuffle(leftovers)
            selected.extend(leftovers[:remaining])

        unique = list({question.id: question for question in selected}.values())
        self.rng.shuffle(unique)
        unique = unique[:QUIZ_SIZE]

        logger.debug("Generated %d questions for unit %s from %d lessons", len(unique), unit_id, len(unit_lessons))

        return UnitQuiz(
            unit_id=unit_id,
            unit_title=unit_title,
            title=f'{unit_title} Unit Quiz',
            description=f'Test your knowledge of {unit_title.lower()} vocabulary and phrases',
            questions=tuple(unique),
            passing_score=PASSING_SCORE,
            time_limit=TIME_LIMIT_MINUTES,
        )
