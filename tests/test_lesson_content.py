"""
Tests for lesson conversion and the lesson loader.
"""

import json
import random

import pytest

from uyghurly_app.config import DEFAULT_CONTENT_DIR
from uyghurly_app.modules.lessons.logics.converter import convert_raw_lessons, group_rows
from uyghurly_app.modules.lessons.logics.text import clean_text, normalize_text, slugify, unit_id_for
from uyghurly_app.modules.lessons.schemas import TypingQuestion
from uyghurly_app.modules.lessons.services import LessonLoader


ROWS = [
    {'Unit': 'Food', 'Lesson Title': 'Fruits', 'Uyghur': 'Alma', 'English': 'Apple', 'Definition': 'Round fruit'},
    {'Unit': 'Food', 'Lesson Title': 'Fruits', 'Uyghur': 'Üzüm', 'English': 'Grape', 'Definition': ''},
    {'Unit': 'Food', 'Lesson Title': 'Fruits', 'Uyghur': 'Anar', 'English': 'Pomegranate (fruit)'},
    {'Unit': 'Food', 'Lesson Title': 'Drinks', 'Uyghur': 'Chay', 'English': 'Tea', 'Definition': 'Hot drink'},
]


class TestTextHelpers:

    def test_clean_text_drops_bracket_groups(self):
        assert clean_text('Good (fine)') == 'Good'
        assert clean_text('Hello [informal]  friend') == 'Hello friend'
        assert clean_text('') == ''

    def test_slugify(self):
        assert slugify('Numbers (1-5)') == 'numbers-1-5'
        assert slugify('Meals and Drinks') == 'meals-and-drinks'
        assert slugify('  Where?  ') == 'where'

    def test_unit_id_for(self):
        assert unit_id_for('Daily Life') == 'daily_life'
        assert unit_id_for('Food') == 'food'

    def test_normalize_text_folds_diacritics(self):
        assert normalize_text('Üzüm') == 'uzum'
        assert normalize_text('Yéqin!') == 'yeqin'


class TestConverter:

    def test_groups_rows_in_first_seen_order(self):
        groups = group_rows(ROWS)
        assert [g['lesson_title'] for g in groups] == ['Fruits', 'Drinks']
        assert len(groups[0]['vocabulary']) == 3

    def test_missing_field_is_rejected(self):
        with pytest.raises(ValueError):
            group_rows([{'Unit': 'Food', 'Lesson Title': 'Fruits', 'Uyghur': 'Alma'}])

    def test_non_object_row_is_rejected(self):
        with pytest.raises(ValueError):
            group_rows(['Alma'])

    def test_convert_builds_lessons(self):
        lessons = convert_raw_lessons(ROWS, random.Random(3))
        fruits = lessons[0]

        assert fruits.slug == 'fruits'
        assert fruits.description == 'Learn fruits in Uyghur'
        assert fruits.unit == 'Food'
        assert len(fruits.exercises) == 3
        assert len(fruits.typing_questions) == 3

    def test_exercise_options_hold_the_answer(self):
        for lesson in convert_raw_lessons(ROWS, random.Random(11)):
            for exercise in lesson.exercises:
                assert exercise.options.count(exercise.correct_answer) == 1
                assert len(exercise.options) == min(4, len(lesson.vocabulary))

    def test_typing_answers_are_cleaned_and_lowercased(self):
        lesson = convert_raw_lessons(ROWS, random.Random(0))[0]
        pomegranate = lesson.typing_questions[2]
        if pomegranate.type == TypingQuestion.UYGHUR_TO_ENGLISH:
            assert pomegranate.correct_answer == 'pomegranate'
        else:
            assert pomegranate.correct_answer == 'anar'

    def test_same_seed_same_exercises(self):
        first = convert_raw_lessons(ROWS, random.Random(42))
        second = convert_raw_lessons(ROWS, random.Random(42))
        assert first == second


class TestLessonLoader:

    @pytest.fixture
    def loader(self):
        return LessonLoader(DEFAULT_CONTENT_DIR, seed=7)

    def test_all_lessons_in_bundle_order(self, loader):
        slugs = [lesson.slug for lesson in loader.get_all_lessons()]
        assert slugs == [
            'greetings', 'numbers-1-5', 'family', 'fruits',
            'meals-and-drinks', 'transport', 'directions',
        ]

    def test_get_lesson_by_slug(self, loader):
        lesson = loader.get_lesson_by_slug('numbers-1-5')
        assert lesson.title == 'Numbers (1-5)'
        assert len(lesson.vocabulary) == 5
        assert loader.get_lesson_by_slug('no-such-lesson') is None

    def test_every_bundled_lesson_resolves_by_slug(self, loader):
        lessons = loader.get_all_lessons()
        assert lessons
        for lesson in lessons:
            resolved = loader.get_lesson_by_slug(lesson.slug)
            assert resolved is not None, lesson.slug
            assert resolved.vocabulary, lesson.slug

    def test_lesson_is_memoized(self, loader):
        assert loader.get_lesson_by_slug('fruits') is loader.get_lesson_by_slug('fruits')

    def test_unit_titles(self, loader):
        assert loader.get_all_units() == ['Basics', 'Daily Life', 'Food', 'Travel']

    def test_lessons_by_unit_without_loading_units_first(self, loader):
        lessons = loader.get_lessons_by_unit('food')
        assert [lesson.slug for lesson in lessons] == ['fruits', 'meals-and-drinks']

    def test_unknown_unit_has_no_lessons(self, loader):
        assert loader.get_lessons_by_unit('space') == []

    def test_dictionary_search(self, loader):
        everything = loader.search_dictionary('')
        assert len(everything) == 41
        assert [e.uyghur.lower() for e in everything] == sorted(e.uyghur.lower() for e in everything)

        assert [e.uyghur for e in loader.search_dictionary('apple')] == ['Alma']
        assert [e.uyghur for e in loader.search_dictionary('uzum')] == ['Üzüm']

    def test_seeded_loaders_agree(self):
        first = LessonLoader(DEFAULT_CONTENT_DIR, seed=99).get_lesson_by_slug('greetings')
        second = LessonLoader(DEFAULT_CONTENT_DIR, seed=99).get_lesson_by_slug('greetings')
        assert first.exercises == second.exercises

    def test_broken_unit_file_is_skipped(self, tmp_path):
        (tmp_path / 'units.json').write_text(json.dumps({
            'units': [{'id': 'food', 'title': 'Food', 'lessons': ['drinks']}],
        }), encoding='utf-8')
        (tmp_path / 'Broken.json').write_text('{ not json', encoding='utf-8')
        (tmp_path / 'Wrong.json').write_text(json.dumps({'rows': []}), encoding='utf-8')
        (tmp_path / 'Food.json').write_text(json.dumps(ROWS[3:]), encoding='utf-8')

        loader = LessonLoader(str(tmp_path), seed=1)
        assert [lesson.slug for lesson in loader.get_all_lessons()] == ['drinks']

    def test_invalid_manifest_gives_no_units(self, tmp_path):
        (tmp_path / 'units.json').write_text(json.dumps({'units': [{'id': 'food'}]}), encoding='utf-8')
        loader = LessonLoader(str(tmp_path))
        assert loader.get_units() == []
        assert loader.get_all_units() == []

    def test_clear_cache_rereads_content(self, tmp_path):
        drinks = dict(ROWS[3])
        (tmp_path / 'units.json').write_text(json.dumps({
            'units': [{'id': 'food', 'title': 'Food', 'lessons': ['drinks']}],
        }), encoding='utf-8')
        (tmp_path / 'Food.json').write_text(json.dumps([drinks]), encoding='utf-8')

        loader = LessonLoader(str(tmp_path), seed=1)
        assert loader.get_lesson_by_slug('drinks').vocabulary[0].english == 'Tea'
        assert loader.get_all_units() == ['Food']

        drinks['English'] = 'Green tea'
        (tmp_path / 'Food.json').write_text(json.dumps([drinks]), encoding='utf-8')
        (tmp_path / 'units.json').write_text(json.dumps({
            'units': [{'id': 'food', 'title': 'Food and Drink', 'lessons': ['drinks']}],
        }), encoding='utf-8')
        assert loader.get_lesson_by_slug('drinks').vocabulary[0].english == 'Tea'

        loader.clear_cache()
        assert loader.get_lesson_by_slug('drinks').vocabulary[0].english == 'Green tea'
        assert loader.get_all_units() == ['Food and Drink']
