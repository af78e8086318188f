"""
Lesson Loader - content catalog over the bundled JSON files.

Each unit file is re-read and re-converted on a cache miss; lessons are
memoized by slug after the first hit, so the catalog stays consistent for
the lifetime of the process.
"""

from __future__ import annotations

import json
import logging
import os
import random
import threading
from typing import Dict, List, Optional

from flask import current_app

from ..logics.converter import convert_raw_lessons
from ..schemas import DictionaryEntry, LessonContent, Unit

logger = logging.getLogger(__name__)

UNITS_MANIFEST = 'units.json'
EXTENSION_KEY = 'uyghurly.lesson_loader'


class LessonLoader:
    """Look up lessons and units from a content directory."""

    def __init__(self, content_dir: str, seed: Optional[int] = None):
        self.content_dir = content_dir
        self.seed = seed
        self._lesson_cache: Dict[str, LessonContent] = {}
        self._unit_cache: Dict[str, Unit] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    #  Raw data                                                            #
    # ------------------------------------------------------------------ #

    def _read_json(self, filename: str):
        with open(os.path.join(self.content_dir, filename), encoding='utf-8') as handle:
            return json.load(handle)

    def unit_files(self) -> List[str]:
        return sorted(
            name for name in os.listdir(self.content_dir)
            if name.endswith('.json') and name != UNITS_MANIFEST
        )

    def _rng_for(self, filename: str) -> random.Random:
        # Per-file seed so adding a unit file does not reshuffle the others.
        if self.seed is None:
            return random.Random()
        return random.Random(f'{self.seed}:{filename}')

    def convert_all_lesson_data(self) -> List[LessonContent]:
        """Convert every unit file; a broken file is logged and skipped."""
        lessons: List[LessonContent] = []
        for filename in self.unit_files():
            try:
                rows = self._read_json(filename)
                if not isinstance(rows, list):
                    raise ValueError('expected a JSON array of rows')
                lessons.extend(convert_raw_lessons(rows, self._rng_for(filename)))
            except (OSError, ValueError) as exc:
                logger.error("Error converting lessons for unit file %s: %s", filename, exc)
        return lessons

    # ------------------------------------------------------------------ #
    #  Lessons                                                             #
    # ------------------------------------------------------------------ #

    def get_lesson_by_slug(self, slug: str) -> Optional[LessonContent]:
        cached = self._lesson_cache.get(slug)
        if cached:
            return cached

        lesson = next((l for l in self.convert_all_lesson_data() if l.slug == slug), None)
        if lesson is None:
            return None
        with self._lock:
            return self._lesson_cache.setdefault(slug, lesson)

    def get_all_lessons(self) -> List[LessonContent]:
        """All valid lessons, in bundle order."""
        valid = []
        for lesson in self.convert_all_lesson_data():
            if not lesson.slug or not lesson.title or not lesson.vocabulary:
                logger.warning("Skipping invalid lesson: %r", lesson.title or lesson.slug)
                continue
            valid.append(lesson)

        with self._lock:
            return [self._lesson_cache.setdefault(lesson.slug, lesson) for lesson in valid]

    # ------------------------------------------------------------------ #
    #  Units                                                               #
    # ------------------------------------------------------------------ #

    def _load_units(self) -> Dict[str, Unit]:
        if self._unit_cache:
            return self._unit_cache

        data = self._read_json(UNITS_MANIFEST)
        if not isinstance(data, dict) or not isinstance(data.get('units'), list):
            raise ValueError('Invalid units data structure')

        units: Dict[str, Unit] = {}
        for raw in data['units']:
            if not isinstance(raw, dict) or not raw.get('id') or not raw.get('title') \
                    or not isinstance(raw.get('lessons'), list):
                raise ValueError(f'Invalid unit structure: {json.dumps(raw)}')
            units.setdefault(raw['id'], Unit(id=raw['id'], title=raw['title'], lessons=tuple(raw['lessons'])))

        with self._lock:
            if not self._unit_cache:
                self._unit_cache.update(units)
        return self._unit_cache

    def get_units(self) -> List[Unit]:
        try:
            return list(self._load_units().values())
        except (OSError, ValueError) as exc:
            logger.error("Error loading units: %s", exc)
            return []

    def get_all_units(self) -> List[str]:
        """Unit titles in manifest order, without duplicates."""
        titles = []
        for unit in self.get_units():
            if unit.title not in titles:
                titles.append(unit.title)
        return titles

    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return next((unit for unit in self.get_units() if unit.id == unit_id), None)

    def get_lessons_by_unit(self, unit_id: str) -> List[LessonContent]:
        unit = self.get_unit(unit_id)
        if unit is None:
            logger.error("Unit %s not found", unit_id)
            return []

        lessons = []
        for slug in unit.lessons:
            lesson = self.get_lesson_by_slug(slug)
            if lesson:
                lessons.append(lesson)
            else:
                logger.warning("Unit %s lists unknown lesson %s", unit_id, slug)
        return lessons

    # ------------------------------------------------------------------ #
    #  Dictionary                                                          #
    # ------------------------------------------------------------------ #

    def search_dictionary(self, term: str = '') -> List[DictionaryEntry]:
        entries = [
            DictionaryEntry(uyghur=item.uyghur, english=item.english, definition=item.definition, unit=lesson.unit)
            for lesson in self.get_all_lessons()
            for item in lesson.vocabulary
        ]
        entries.sort(key=lambda entry: entry.uyghur.lower())

        term = (term or '').strip()
        if not term:
            return entries
        return [entry for entry in entries if entry.matches(term)]

    def clear_cache(self) -> None:
        with self._lock:
            self._lesson_cache.clear()
            self._unit_cache.clear()


def get_lesson_loader() -> LessonLoader:
    """The loader bound to the current app, created on first use."""
    app = current_app._get_current_object()
    loader = app.extensions.get(EXTENSION_KEY)
    if loader is None:
        loader = app.extensions.setdefault(
            EXTENSION_KEY,
            LessonLoader(app.config['CONTENT_DIR'], seed=app.config.get('CONTENT_SEED')),
        )
    return loader
