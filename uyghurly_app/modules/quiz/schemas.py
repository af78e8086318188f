"""Quiz records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class QuizQuestion:
    id: str
    question: str
    options: tuple
    correct_answer: str
    explanation: Optional[str] = None
    type: str = 'multiple-choice'


@dataclass(frozen=True)
class UnitQuiz:
    unit_id: str
    unit_title: str
    title: str
    description: str
    questions: tuple
    passing_score: int = 70
    time_limit: Optional[int] = 20  # minutes

    def to_dict(self, include_answers: bool = True) -> dict:
        data = asdict(self)
        if not include_answers:
            for question in data['questions']:
                question.pop('correct_answer', None)
                question.pop('explanation', None)
        return data

    def question_by_id(self, question_id: str) -> Optional[QuizQuestion]:
        return next((q for q in self.questions if q.id == question_id), None)


@dataclass
class QuizResult:
    quiz_id: str
    score: int
    total_questions: int
    correct_answers: int
    completed_at: str
    passed: bool
    answers: List[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LessonAttempt:
    """Outcome of one run through a lesson's exercises."""

    slug: str
    score: int
    total_questions: int
    lives_remaining: int
    answered: int
    game_over: bool

    @property
    def finished(self) -> bool:
        return self.game_over or self.answered >= self.total_questions

    def to_dict(self) -> dict:
        data = asdict(self)
        data['finished'] = self.finished
        return data
