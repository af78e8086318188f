"""
Pure text helpers shared by the lesson converter and the answer checker.
No Database access, no Flask.
"""

import re
import unicodedata

_PAREN_GROUP = re.compile(r'\([^)]*\)')
_BRACKET_GROUP = re.compile(r'\[[^\]]*\]')
_WHITESPACE = re.compile(r'\s+')


def clean_text(text: str) -> str:
    """Drop ``(...)`` and ``[...]`` groups and collapse whitespace.

    >>> clean_text('Good (fine)')
    'Good'
    """
    text = _PAREN_GROUP.sub('', text or '')
    text = _BRACKET_GROUP.sub('', text)
    return _WHITESPACE.sub(' ', text).strip()


def slugify(title: str) -> str:
    """URL slug for a lesson title: ``'Numbers (1-5)'`` -> ``'numbers-1-5'``."""
    slug = title.lower()
    slug = re.sub(r'[^a-z0-9\s\-_]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def unit_id_for(unit_title: str) -> str:
    """Unit id as used in storage keys: ``'Daily Life'`` -> ``'daily_life'``."""
    return unit_title.lower().replace(' ', '_')


def normalize_text(text: str) -> str:
    """Lower-case, strip diacritics and anything that is not ``[a-z0-9 ]``."""
    text = unicodedata.normalize('NFD', text.lower().strip())
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r'[^a-z0-9\s]', '', text)
