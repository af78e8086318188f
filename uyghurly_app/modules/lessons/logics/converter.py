"""
Pure logic turning raw bundle rows into structured lessons.
No Database access, no Flask.

Raw rows look like::

    {"Unit": "Food", "Lesson Title": "Fruits", "Uyghur": "Alma",
     "English": "Apple", "Definition": "A round fruit, red or green"}

Every random choice goes through the ``rng`` argument so a seeded
``random.Random`` reproduces the same exercises.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Mapping, Optional, Sequence

from ..schemas import Exercise, LessonContent, TypingQuestion, VocabularyItem
from .text import clean_text, slugify

REQUIRED_FIELDS = ('Unit', 'Lesson Title', 'Uyghur', 'English')
DISTRACTORS_PER_EXERCISE = 3


def _check_row(row: Mapping, position: int) -> None:
    if not isinstance(row, Mapping):
        raise ValueError(f"Row {position} is not an object: {row!r}")
    missing = [name for name in REQUIRED_FIELDS if not row.get(name)]
    if missing:
        raise ValueError(f"Row {position} is missing {', '.join(missing)}")


def group_rows(rows: Iterable[Mapping]) -> List[dict]:
    """Group rows by (unit, lesson title), keeping first-seen order."""
    groups = {}
    for position, row in enumerate(rows):
        _check_row(row, position)
        key = (row['Unit'], row['Lesson Title'])
        group = groups.setdefault(key, {
            'unit': row['Unit'],
            'lesson_title': row['Lesson Title'],
            'vocabulary': [],
        })
        group['vocabulary'].append(VocabularyItem(
            uyghur=row['Uyghur'],
            english=row['English'],
            definition=row.get('Definition') or '',
        ))
    return list(groups.values())


def generate_exercises(vocabulary: Sequence[VocabularyItem], rng: random.Random) -> List[Exercise]:
    """One multiple-choice exercise per word, direction picked at random."""
    exercises = []
    for index, item in enumerate(vocabulary):
        others = [other for i, other in enumerate(vocabulary) if i != index]
        rng.shuffle(others)
        picked = others[:DISTRACTORS_PER_EXERCISE]

        if rng.random() < 0.5:
            correct = clean_text(item.english)
            question = f'What is the English translation of "{clean_text(item.uyghur)}"?'
            options = [correct] + [clean_text(other.english) for other in picked]
        else:
            correct = clean_text(item.uyghur)
            question = f'What is the Uyghur translation of "{clean_text(item.english)}"?'
            options = [correct] + [clean_text(other.uyghur) for other in picked]

        rng.shuffle(options)
        exercises.append(Exercise(question=question, options=tuple(options), correct_answer=correct))
    return exercises


def generate_typing_questions(vocabulary: Sequence[VocabularyItem], rng: random.Random) -> List[TypingQuestion]:
    """One free-text question per word; answers are cleaned and lower-cased."""
    questions = []
    for item in vocabulary:
        if rng.random() < 0.5:
            questions.append(TypingQuestion(
                question=f'Type the English translation of "{clean_text(item.uyghur)}":',
                correct_answer=clean_text(item.english).lower(),
                type=TypingQuestion.UYGHUR_TO_ENGLISH,
                hint=item.definition or None,
            ))
        else:
            questions.append(TypingQuestion(
                question=f'Type the Uyghur translation of "{clean_text(item.english)}":',
                correct_answer=clean_text(item.uyghur).lower(),
                type=TypingQuestion.ENGLISH_TO_UYGHUR,
                hint=item.definition or None,
            ))
    return questions


def convert_raw_lessons(rows: Iterable[Mapping], rng: Optional[random.Random] = None) -> List[LessonContent]:
    """Convert raw bundle rows to :class:`LessonContent` records.

    Raises:
        ValueError: a row is not an object or lacks a required field.
    """
    rng = rng or random.Random()
    lessons = []
    for group in group_rows(rows):
        vocabulary = tuple(group['vocabulary'])
        title = group['lesson_title']
        lessons.append(LessonContent(
            title=title,
            slug=slugify(title),
            description=f'Learn {title.lower()} in Uyghur',
            unit=group['unit'],
            vocabulary=vocabulary,
            exercises=tuple(generate_exercises(vocabulary, rng)),
            typing_questions=tuple(generate_typing_questions(vocabulary, rng)),
        ))
    return lessons
