"""
User Service - persistence for learner accounts.

Wraps the ``users`` table so routes and the auth adapter never build
queries themselves.
"""
from datetime import datetime, timezone
from typing import Optional

from flask import current_app

from uyghurly_app.core.error_handlers import NotFoundError
from uyghurly_app.core.signals import profile_updated
from uyghurly_app.models import DEFAULT_PROFILE, User, db


def _normalize_email(email: str) -> str:
    return (email or '').strip().lower()


class UserService:
    """Service for reading and writing user records."""

    @staticmethod
    def create_user(name: str, username: str, email: str, password: Optional[str] = None,
                    auth_provider: str = User.PROVIDER_PASSWORD) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            name=name.strip(),
            username=username.strip(),
            email=_normalize_email(email),
            auth_provider=auth_provider,
            is_guest=False,
            created_at=now,
            last_login_at=now,
            profile=dict(DEFAULT_PROFILE),
            progress={},
        )
        if password:
            user.set_password(password)

        db.session.add(user)
        db.session.commit()
        current_app.logger.info(f"User created: {user.username} ({user.id})")
        return user

    @staticmethod
    def get_user_by_id(user_id: str) -> Optional[User]:
        if not user_id:
            return None
        return db.session.get(User, user_id)

    @staticmethod
    def get_user_by_email(email: str) -> Optional[User]:
        return User.query.filter_by(email=_normalize_email(email)).first()

    @staticmethod
    def get_user_by_username(username: str) -> Optional[User]:
        return User.query.filter_by(username=(username or '').strip()).first()

    @staticmethod
    def get_user_by_email_or_username(identifier: str) -> Optional[User]:
        if '@' in (identifier or ''):
            return UserService.get_user_by_email(identifier)
        return UserService.get_user_by_username(identifier)

    @staticmethod
    def email_exists(email: str) -> bool:
        return UserService.get_user_by_email(email) is not None

    @staticmethod
    def username_exists(username: str) -> bool:
        return UserService.get_user_by_username(username) is not None

    @staticmethod
    def update_last_login(user: User) -> User:
        user.last_login_at = datetime.now(timezone.utc)
        db.session.commit()
        return user

    @staticmethod
    def update_user_profile(user: User, name: Optional[str] = None, username: Optional[str] = None,
                            profile: Optional[dict] = None) -> list:
        """
        Apply the given changes and return the names of the fields that changed.
        """
        changes = []

        if name is not None and user.name != name:
            user.name = name
            changes.append('name')

        if username is not None and user.username != username:
            user.username = username
            changes.append('username')

        if profile:
            user.profile = {**(user.profile or DEFAULT_PROFILE), **profile}
            changes.append('profile')

        if changes:
            db.session.commit()
            profile_updated.send(current_app._get_current_object(), user=user, changes=changes)

        return changes

    @staticmethod
    def update_user_progress(user_id: str, unit_id: str, progress: dict) -> dict:
        """
        Merge ``progress`` into the user's entry for ``unit_id``.

        ``profile.lessons_completed`` goes up by one only when the unit's
        ``lesson_completed`` flag changes from false to true.

        Raises:
            NotFoundError: no user with that id.
        """
        user = UserService.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError(f'User {user_id} not found', resource='user')

        all_progress = dict(user.progress or {})
        current = dict(all_progress.get(unit_id) or {})
        newly_completed = bool(progress.get('lesson_completed')) and not current.get('lesson_completed')

        current.update(progress)
        all_progress[unit_id] = current
        # JSON columns only notice reassignment.
        user.progress = all_progress

        if newly_completed:
            profile = dict(user.profile or DEFAULT_PROFILE)
            profile['lessons_completed'] = profile.get('lessons_completed', 0) + 1
            user.profile = profile

        db.session.commit()
        return current
