"""
Account Service - self-service edits to the signed-in account.
"""
from flask import current_app
from flask_login import logout_user

from uyghurly_app.core.error_handlers import (
    AuthorizationError,
    FeatureUnavailableError,
    ValidationError,
)
from uyghurly_app.models import User, db
from .user_service import UserService

STATIC_EXPORT_MESSAGE = 'Account management is not available in this version.'


def _ensure_available():
    if current_app.config.get('STATIC_EXPORT'):
        raise FeatureUnavailableError(STATIC_EXPORT_MESSAGE)


def _ensure_registered(user):
    if user is None or getattr(user, 'is_guest', True):
        raise AuthorizationError('Guest accounts cannot be changed. Please create an account.')


class AccountService:

    @staticmethod
    def update_account(user: User, name: str, username: str) -> User:
        _ensure_available()
        _ensure_registered(user)

        name = (name or '').strip()
        username = (username or '').strip()
        errors = {}
        if not name:
            errors['name'] = 'Name is required.'
        if not username:
            errors['username'] = 'Username is required.'
        if errors:
            raise ValidationError('Please fill in all fields.', errors=errors)

        if username != user.username and UserService.username_exists(username):
            raise ValidationError('Username is already taken.', errors={'username': 'taken'})

        UserService.update_user_profile(user, name=name, username=username)
        return user

    @staticmethod
    def delete_account(user: User) -> None:
        _ensure_available()
        _ensure_registered(user)

        user_id = user.id
        logout_user()
        db.session.delete(user)
        db.session.commit()
        current_app.logger.info(f"Account deleted: {user_id}")
