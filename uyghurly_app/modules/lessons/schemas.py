"""Lesson content records.

All of these are built once from the bundled JSON and never mutated, so
they are frozen and hold tuples rather than lists.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional, Tuple

from .logics.text import normalize_text


@dataclass(frozen=True)
class VocabularyItem:
    uyghur: str
    english: str
    definition: str = ''


@dataclass(frozen=True)
class Exercise:
    question: str
    options: Tuple[str, ...]
    correct_answer: str


@dataclass(frozen=True)
class TypingQuestion:
    UYGHUR_TO_ENGLISH = 'uyghur-to-english'
    ENGLISH_TO_UYGHUR = 'english-to-uyghur'

    question: str
    correct_answer: str
    type: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class LessonContent:
    title: str
    slug: str
    description: str
    unit: str
    vocabulary: Tuple[VocabularyItem, ...] = field(default_factory=tuple)
    exercises: Tuple[Exercise, ...] = field(default_factory=tuple)
    typing_questions: Tuple[TypingQuestion, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return asdict(self)

    def summary(self) -> dict:
        """Metadata only, for listings."""
        return {
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'unit': self.unit,
            'word_count': len(self.vocabulary),
        }


@dataclass(frozen=True)
class Unit:
    id: str
    title: str
    lessons: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {'id': self.id, 'title': self.title, 'lessons': list(self.lessons)}


@dataclass(frozen=True)
class DictionaryEntry:
    uyghur: str
    english: str
    definition: str
    unit: str

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match; diacritics are ignored too."""
        values = (self.uyghur, self.english, self.definition, self.unit)
        lowered = term.lower()
        if any(lowered in value.lower() for value in values):
            return True
        folded = normalize_text(term)
        return bool(folded) and any(folded in normalize_text(value) for value in values)
