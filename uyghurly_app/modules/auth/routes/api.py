# File: uyghurly_app/modules/auth/routes/api.py
from flask import request
from flask_wtf.csrf import generate_csrf
from werkzeug.datastructures import MultiDict

from uyghurly_app.core.error_handlers import ValidationError, success_response
from uyghurly_app.modules.progress.services import get_device_storage
from .. import auth_bp as blueprint
from ..forms import LoginForm, SignUpForm, password_strength, validate_password
from ..services import AuthService, ensure_accounts_available


def _payload():
    return request.get_json(silent=True) or {}


def _validated(form_class, payload):
    """Bind a JSON body to a form; CSRF is already enforced app-wide."""
    form = form_class(formdata=MultiDict(payload), meta={'csrf': False})
    if not form.validate():
        first = next(iter(form.errors.values()))[0]
        raise ValidationError(first, errors=form.errors)
    return form


@blueprint.route('/api/csrf-token', methods=['GET'])
def csrf_token():
    return success_response({'csrf_token': generate_csrf()})


@blueprint.route('/api/login', methods=['POST'])
def login():
    ensure_accounts_available()
    form = _validated(LoginForm, _payload())
    user = AuthService.sign_in(form.email.data, form.password.data, storage=get_device_storage())
    return success_response(user.to_dict(), 'Signed in')


@blueprint.route('/api/signup', methods=['POST'])
def signup():
    ensure_accounts_available()
    form = _validated(SignUpForm, _payload())
    user = AuthService.sign_up(
        form.name.data,
        form.username.data,
        form.email.data,
        form.password.data,
        storage=get_device_storage(),
    )
    return success_response(user.to_dict(), 'Account created'), 201


@blueprint.route('/api/google', methods=['POST'])
def google():
    user = AuthService.sign_in_with_google(_payload().get('id_token'), storage=get_device_storage())
    return success_response(user.to_dict(), 'Signed in with Google')


@blueprint.route('/api/guest', methods=['POST'])
def guest():
    return success_response(AuthService.login_as_guest(get_device_storage()), 'Continuing as guest')


@blueprint.route('/api/logout', methods=['POST'])
def logout():
    AuthService.logout(get_device_storage())
    return success_response(message='Signed out')


@blueprint.route('/api/me', methods=['GET'])
def me():
    return success_response({'user': AuthService.current_identity(get_device_storage())})


@blueprint.route('/api/password-strength', methods=['POST'])
def check_password_strength():
    password = _payload().get('password') or ''
    score, label = password_strength(password)
    return success_response({'score': score, 'label': label, 'problem': validate_password(password)})
