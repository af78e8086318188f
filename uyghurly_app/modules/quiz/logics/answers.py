"""
Free-text answer checking for typing questions.
Pure functions, no Flask.
"""

import re

from uyghurly_app.modules.lessons.logics.text import clean_text

_BRACKET_CHARS = re.compile(r'[()\[\]]')


def normalize_answer(answer: str) -> str:
    """Lower-case, trim and drop bracketed groups: ``'Go (away)'`` -> ``'go'``."""
    return clean_text((answer or '').lower().strip())


def _strip_bracket_chars(answer: str) -> str:
    return re.sub(r'\s+', ' ', _BRACKET_CHARS.sub('', (answer or '').lower())).strip()


def is_correct_answer(user_answer: str, correct_answer: str) -> bool:
    """Case-insensitive comparison that tolerates bracketed extras.

    Three readings are accepted, any one is enough:

    * both sides with ``(...)`` / ``[...]`` groups removed,
    * both sides verbatim (lower-cased, trimmed),
    * both sides with only the bracket characters removed, so ``go(od)``
      matches ``good``.
    """
    if normalize_answer(user_answer) == normalize_answer(correct_answer):
        return True
    if (user_answer or '').lower().strip() == (correct_answer or '').lower().strip():
        return True
    return _strip_bracket_chars(user_answer) == _strip_bracket_chars(correct_answer)
