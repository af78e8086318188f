"""
Auth Service - Core authentication logic.

Email/password and Google accounts are rows in ``users`` and ride on the
flask-login session. Guests never touch the database: their identity lives
only in device storage under ``uyghurly_guest_user``.
"""
import time

from flask import current_app
from flask_login import current_user, login_user, logout_user

from uyghurly_app.core.error_handlers import FeatureUnavailableError, ValidationError
from uyghurly_app.core.signals import user_logged_in, user_registered
from uyghurly_app.models import User
from uyghurly_app.modules.user_profile.services import UserService
from .. import errors
from ..errors import AuthError
from ..forms import validate_password
from .google_verifier import GoogleTokenVerifier
from .login_throttle import LoginThrottle

GUEST_STORAGE_KEY = 'uyghurly_guest_user'

UNAVAILABLE_MESSAGE = ('Authentication is not available in this version. '
                       'Please use the web version for full functionality.')
GOOGLE_UNAVAILABLE_MESSAGE = ('Google authentication is not available in this version. '
                              'Please use the web version for full functionality.')

THROTTLE_KEY = 'uyghurly.login_throttle'


def ensure_accounts_available(message=UNAVAILABLE_MESSAGE):
    if current_app.config.get('STATIC_EXPORT'):
        raise FeatureUnavailableError(message)


def get_login_throttle():
    app = current_app._get_current_object()
    throttle = app.extensions.get(THROTTLE_KEY)
    if throttle is None:
        throttle = app.extensions.setdefault(THROTTLE_KEY, LoginThrottle(
            max_failures=app.config.get('LOGIN_MAX_FAILURES', 5),
            window_seconds=app.config.get('LOGIN_LOCKOUT_SECONDS', 900),
        ))
    return throttle


def get_google_verifier():
    config = current_app.config
    return GoogleTokenVerifier(
        client_id=config.get('GOOGLE_CLIENT_ID'),
        tokeninfo_url=config['GOOGLE_TOKENINFO_URL'],
        timeout=config.get('GOOGLE_TIMEOUT_SECONDS', 10),
    )


class AuthService:
    """Service for Authentication related operations."""

    @staticmethod
    def _start_session(user, provider, storage=None):
        login_user(user, remember=True)
        if storage is not None:
            storage.remove_item(GUEST_STORAGE_KEY)
        user_logged_in.send(current_app._get_current_object(), user=user, provider=provider)
        return user

    @staticmethod
    def sign_in(email, password, storage=None):
        """
        Verify credentials and start a session.

        Raises:
            FeatureUnavailableError: static export build.
            ValidationError: input is not an email address.
            AuthError: unknown email, wrong password or too many failures.
        """
        ensure_accounts_available()
        email = (email or '').strip()
        if '@' not in email:
            raise ValidationError('Please enter a valid email address.')

        throttle = get_login_throttle()
        key = email.lower()
        if throttle.is_blocked(key):
            raise AuthError(errors.TOO_MANY_REQUESTS)

        user = UserService.get_user_by_email(email)
        if user is None:
            raise AuthError(errors.USER_NOT_FOUND)
        if not user.password_hash:
            raise AuthError(errors.ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL)
        if not user.check_password(password or ''):
            throttle.record_failure(key)
            current_app.logger.info(f"Failed login for {key}")
            raise AuthError(errors.WRONG_PASSWORD)

        throttle.reset(key)
        UserService.update_last_login(user)
        return AuthService._start_session(user, User.PROVIDER_PASSWORD, storage)

    @staticmethod
    def sign_up(name, username, email, password, storage=None):
        """
        Register a new user, sign them in, and emit signal.

        Raises:
            FeatureUnavailableError: static export build.
            AuthError: invalid email, weak password, email or username taken.
        """
        ensure_accounts_available()
        email = (email or '').strip()
        username = (username or '').strip()

        if '@' not in email:
            raise AuthError(errors.INVALID_EMAIL, errors.SIGNUP)
        if validate_password(password):
            raise AuthError(errors.WEAK_PASSWORD, errors.SIGNUP)
        if UserService.email_exists(email):
            raise AuthError(errors.EMAIL_ALREADY_IN_USE, errors.SIGNUP)
        if UserService.username_exists(username):
            raise AuthError(errors.USERNAME_TAKEN, errors.SIGNUP)

        user = UserService.create_user(name=name, username=username, email=email, password=password)
        user_registered.send(current_app._get_current_object(), user=user)
        return AuthService._start_session(user, User.PROVIDER_PASSWORD, storage)

    @staticmethod
    def _unique_username(base):
        base = base.strip() or 'learner'
        candidate, suffix = base, 1
        while UserService.username_exists(candidate):
            suffix += 1
            candidate = f'{base}{suffix}'
        return candidate

    @staticmethod
    def sign_in_with_google(id_token, storage=None, verifier=None):
        """
        Sign in with a Google ID token, creating the account on first use.

        Raises:
            FeatureUnavailableError: static export build.
            AuthError: no token (sign-in cancelled) or verification failed.
        """
        ensure_accounts_available(GOOGLE_UNAVAILABLE_MESSAGE)
        if not id_token:
            raise AuthError(errors.POPUP_CLOSED_BY_USER, errors.GOOGLE)

        claims = (verifier or get_google_verifier()).verify(id_token)
        email = claims['email']

        user = UserService.get_user_by_email(email)
        if user is None:
            display_name = claims.get('name') or email.split('@')[0]
            user = UserService.create_user(
                name=display_name,
                username=AuthService._unique_username(display_name),
                email=email,
                auth_provider=User.PROVIDER_GOOGLE,
            )
            user_registered.send(current_app._get_current_object(), user=user)
        else:
            UserService.update_last_login(user)

        return AuthService._start_session(user, User.PROVIDER_GOOGLE, storage)

    @staticmethod
    def login_as_guest(storage):
        """Create a throwaway guest identity on this device."""
        if current_user.is_authenticated:
            logout_user()

        guest = {
            'id': f'guest_{int(time.time() * 1000)}',
            'name': 'Guest User',
            'username': 'guest',
            'email': 'guest@uyghurly.com',
            'is_guest': True,
        }
        storage.set_json(GUEST_STORAGE_KEY, guest)
        current_app.logger.info(f"Guest session started: {guest['id']}")
        return guest

    @staticmethod
    def logout(storage):
        if current_user.is_authenticated:
            logout_user()
        storage.remove_item(GUEST_STORAGE_KEY)

    @staticmethod
    def current_identity(storage):
        """The signed-in user, else this device's guest, else None."""
        if current_user.is_authenticated:
            return current_user.to_dict()

        guest = storage.get_json(GUEST_STORAGE_KEY)
        if isinstance(guest, dict) and guest.get('id') and guest.get('is_guest'):
            return guest
        return None
