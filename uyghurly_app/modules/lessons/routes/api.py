# File: uyghurly_app/modules/lessons/routes/api.py
from dataclasses import asdict

from flask import request

from uyghurly_app.core.error_handlers import NotFoundError, success_response
from .. import lessons_bp as blueprint
from ..services import get_lesson_loader


@blueprint.route('/api/units', methods=['GET'])
def list_units():
    units = get_lesson_loader().get_units()
    return success_response([unit.to_dict() for unit in units])


@blueprint.route('/api/units/<unit_id>/lessons', methods=['GET'])
def list_unit_lessons(unit_id):
    loader = get_lesson_loader()
    if loader.get_unit(unit_id) is None:
        raise NotFoundError(f'Unit {unit_id} not found', resource='unit')
    return success_response([lesson.summary() for lesson in loader.get_lessons_by_unit(unit_id)])


@blueprint.route('/api/lessons', methods=['GET'])
def list_lessons():
    lessons = get_lesson_loader().get_all_lessons()
    return success_response([lesson.summary() for lesson in lessons])


@blueprint.route('/api/lessons/<slug>', methods=['GET'])
def get_lesson(slug):
    lesson = get_lesson_loader().get_lesson_by_slug(slug)
    if lesson is None:
        raise NotFoundError('Lesson not found. Please check the URL and try again.', resource='lesson')
    return success_response(lesson.to_dict())


@blueprint.route('/api/dictionary', methods=['GET'])
def search_dictionary():
    term = request.args.get('q', '')
    entries = get_lesson_loader().search_dictionary(term)
    return success_response({
        'query': term,
        'count': len(entries),
        'entries': [asdict(entry) for entry in entries],
    })
