"""
HTTP tests through the Flask test client.
"""

import pytest

from uyghurly_app.modules.lessons.services import get_lesson_loader
from uyghurly_app.modules.quiz.services import get_quiz_service

SIGNUP = {
    'name': 'Aynur',
    'username': 'aynur',
    'email': 'aynur@example.com',
    'password': 'Passw0rd',
    'confirm_password': 'Passw0rd',
}


def _signup(client, **overrides):
    return client.post('/auth/api/signup', json=dict(SIGNUP, **overrides))


class TestLessonsApi:

    def test_units(self, client):
        response = client.get('/api/units')
        assert response.status_code == 200
        assert [u['id'] for u in response.get_json()['data']] == ['basics', 'daily_life', 'food', 'travel']

    def test_unit_lessons(self, client):
        data = client.get('/api/units/food/lessons').get_json()['data']
        assert [lesson['slug'] for lesson in data] == ['fruits', 'meals-and-drinks']
        assert data[0]['word_count'] == 6

    def test_unknown_unit(self, client):
        response = client.get('/api/units/space/lessons')
        assert response.status_code == 404
        assert response.get_json()['code'] == 'NOT_FOUND'

    def test_lesson_detail(self, client):
        data = client.get('/api/lessons/greetings').get_json()['data']
        assert data['title'] == 'Greetings'
        assert len(data['vocabulary']) == 7
        assert len(data['exercises']) == 7

    def test_unknown_lesson(self, client):
        response = client.get('/api/lessons/nope')
        assert response.status_code == 404
        assert response.get_json()['message'] == 'Lesson not found. Please check the URL and try again.'

    def test_dictionary(self, client):
        data = client.get('/api/dictionary?q=uzum').get_json()['data']
        assert data['count'] == 1
        assert data['entries'][0]['english'] == 'Grape'

    def test_unknown_api_route(self, client):
        response = client.get('/api/does-not-exist')
        assert response.status_code == 404
        assert response.get_json()['success'] is False


class TestQuizApi:

    def test_quiz_hides_answers(self, client):
        data = client.get('/api/quiz/food').get_json()['data']
        assert data['title'] == 'Food Unit Quiz'
        assert len(data['questions']) == 20
        assert all('correct_answer' not in q for q in data['questions'])
        assert data['status']['completed'] is False

    def test_submit_and_unlock_next_unit(self, client):
        quiz = get_quiz_service().get_or_generate_unit_quiz('basics')
        answers = {q.id: q.correct_answer for q in quiz.questions}

        response = client.post('/api/quiz/basics/submit', json={'answers': answers})
        result = response.get_json()['data']
        assert result['score'] == 100
        assert result['passed'] is True

        status = client.get('/progress/api/quizzes/basics').get_json()['data']
        assert status['passed'] is True

        overview = client.get('/progress/api/overview').get_json()['data']
        assert [row['locked'] for row in overview] == [False, False, True, True]

    def test_submit_requires_answers(self, client):
        response = client.post('/api/quiz/basics/submit', json={'answers': ['a']})
        assert response.status_code == 400
        assert response.get_json()['code'] == 'VALIDATION_ERROR'

    def test_unknown_unit_quiz(self, client):
        assert client.get('/api/quiz/space').status_code == 404

    def test_typing_check(self, client):
        lesson = get_lesson_loader().get_lesson_by_slug('greetings')
        expected = lesson.typing_questions[0].correct_answer

        good = client.post('/api/typing/check', json={'slug': 'greetings', 'index': 0, 'answer': expected.upper()})
        assert good.get_json()['data']['correct'] is True

        bad = client.post('/api/typing/check', json={'slug': 'greetings', 'index': 0, 'answer': 'zzz'})
        assert bad.get_json()['data']['correct'] is False

    def test_finished_lesson_attempt_is_saved(self, client):
        lesson = get_lesson_loader().get_lesson_by_slug('family')
        responses = [
            {'type': 'multiple-choice', 'index': i, 'answer': e.correct_answer}
            for i, e in enumerate(lesson.exercises)
        ] + [
            {'type': 'typing', 'index': i, 'answer': q.correct_answer}
            for i, q in enumerate(lesson.typing_questions)
        ]

        data = client.post('/api/lessons/family/attempt', json={'responses': responses}).get_json()['data']
        assert data['saved'] is True
        assert data['score'] == 10

        status = client.get('/progress/api/lessons/family').get_json()['data']
        assert status['completed'] is True

    def test_game_over_attempt_is_saved(self, client):
        wrong = [{'type': 'multiple-choice', 'index': i, 'answer': 'nope'} for i in range(3)]
        data = client.post('/api/lessons/family/attempt', json={'responses': wrong}).get_json()['data']
        assert data['game_over'] is True
        assert data['saved'] is True

        status = client.get('/progress/api/lessons/family').get_json()['data']
        assert status['completed'] is True
        assert status['score'] == 0
        assert status['total_questions'] == 10

    def test_unfinished_attempt_is_not_saved(self, client):
        partial = [{'type': 'multiple-choice', 'index': 0, 'answer': 'nope'}]
        data = client.post('/api/lessons/family/attempt', json={'responses': partial}).get_json()['data']
        assert data['saved'] is False
        assert client.get('/progress/api/lessons/family').get_json()['data'] == {'completed': False}

    def test_non_string_answers_rejected(self, client):
        typing = client.post('/api/typing/check', json={'slug': 'family', 'index': 0, 'answer': 5})
        assert typing.status_code == 400
        assert typing.get_json()['code'] == 'VALIDATION_ERROR'

        attempt = client.post('/api/lessons/family/attempt', json={
            'responses': [{'type': 'typing', 'index': 0, 'answer': 5}],
        })
        assert attempt.status_code == 400


class TestProgressApi:

    def test_save_lesson(self, client):
        response = client.post('/progress/api/lessons/fruits', json={'score': 11, 'total_questions': 12})
        assert response.status_code == 200

        stats = client.get('/progress/api/stats').get_json()['data']
        assert stats['lessons_completed'] == 1
        assert stats['words_learned'] == 6

    def test_save_lesson_validation(self, client):
        assert client.post('/progress/api/lessons/fruits', json={'score': 'x'}).status_code == 400
        assert client.post('/progress/api/lessons/nope', json={'score': 1, 'total_questions': 1}).status_code == 404


class TestAuthApi:

    def test_signup_me_logout(self, client):
        response = _signup(client)
        assert response.status_code == 201
        user_id = response.get_json()['data']['id']

        assert client.get('/auth/api/me').get_json()['data']['user']['id'] == user_id

        client.post('/auth/api/logout')
        assert client.get('/auth/api/me').get_json()['data']['user'] is None

    def test_signup_form_errors(self, client):
        response = _signup(client, password='abc', confirm_password='abc')
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Password must be at least 8 characters long'

    def test_duplicate_email(self, client):
        _signup(client)
        client.post('/auth/api/logout')
        response = _signup(client, username='someone_else')
        assert response.status_code == 409
        assert response.get_json()['code'] == 'auth/email-already-in-use'

    def test_login(self, client):
        _signup(client)
        client.post('/auth/api/logout')

        bad = client.post('/auth/api/login', json={'email': 'aynur@example.com', 'password': 'Wr0ngPass'})
        assert bad.status_code == 401
        assert bad.get_json()['message'] == 'Incorrect password. Please try again.'

        good = client.post('/auth/api/login', json={'email': 'aynur@example.com', 'password': 'Passw0rd'})
        assert good.status_code == 200
        assert good.get_json()['data']['username'] == 'aynur'

    def test_guest(self, client):
        guest = client.post('/auth/api/guest').get_json()['data']
        assert guest['is_guest'] is True
        assert client.get('/auth/api/me').get_json()['data']['user']['id'] == guest['id']

    def test_google_without_token(self, client):
        response = client.post('/auth/api/google', json={})
        assert response.get_json()['message'] == 'Sign in was cancelled.'

    def test_csrf_token(self, client):
        assert client.get('/auth/api/csrf-token').get_json()['data']['csrf_token']

    def test_password_strength(self, client):
        data = client.post('/auth/api/password-strength', json={'password': 'Passw0rd'}).get_json()['data']
        assert data == {'score': 4, 'label': 'Strong', 'problem': None}


class TestProfileApi:

    def test_requires_sign_in(self, client):
        response = client.get('/profile/api/me')
        assert response.status_code == 401
        assert response.get_json()['code'] == 'UNAUTHENTICATED'

    def test_profile_and_update(self, client):
        _signup(client)
        data = client.get('/profile/api/me').get_json()['data']
        assert data['username'] == 'aynur'
        assert data['stats']['total_lessons'] == 7

        updated = client.patch('/profile/api/account', json={'name': 'Aynur T', 'username': 'aynur_t'})
        assert updated.get_json()['data']['username'] == 'aynur_t'

    def test_delete_account(self, client):
        _signup(client)
        assert client.delete('/profile/api/account').status_code == 200
        assert client.get('/auth/api/me').get_json()['data']['user'] is None


class TestSettingsApi:

    def test_preferences_round_trip(self, client):
        assert client.get('/settings/api/preferences').get_json()['data']['theme'] == 'light'

        client.post('/settings/api/preferences', json={'theme': 'dark', 'font_size': 'small'})
        data = client.get('/settings/api/preferences').get_json()['data']
        assert data['theme'] == 'dark'
        assert data['font_size_class'] == 'text-sm'

    def test_invalid_preferences(self, client):
        response = client.post('/settings/api/preferences', json={'theme': 'neon'})
        assert response.status_code == 400


class TestAdminApi:

    def test_non_admin_forbidden(self, client):
        _signup(client)
        response = client.post('/admin/api/complete-lessons')
        assert response.status_code == 403

    def test_admin_tools(self, client):
        _signup(client, email='admin@example.com', username='admin')

        assert client.get('/admin/api/status').get_json()['data']['is_admin'] is True
        assert client.post('/admin/api/complete-lessons').get_json()['data']['count'] == 7
        assert client.post('/admin/api/complete-quizzes').get_json()['data']['count'] == 4

        overview = client.get('/progress/api/overview').get_json()['data']
        assert not any(row['locked'] for row in overview)

        assert client.post('/admin/api/clear-progress').get_json()['data']['count'] == 11


class TestStaticExportApi:

    @pytest.fixture
    def static_client(self, static_app):
        return static_app.test_client()

    def test_login_unavailable(self, static_client):
        response = static_client.post('/auth/api/login', json={'email': 'a@example.com', 'password': 'Passw0rd'})
        assert response.status_code == 503
        assert response.get_json()['code'] == 'FEATURE_UNAVAILABLE'

    def test_empty_body_gets_unavailable_message(self, static_client):
        for path in ('/auth/api/login', '/auth/api/signup'):
            response = static_client.post(path, json={})
            assert response.status_code == 503
            assert response.get_json()['message'].startswith('Authentication is not available in this version.')

    def test_content_still_served(self, static_client):
        assert static_client.get('/api/units').status_code == 200
