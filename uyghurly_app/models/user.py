"""User account model (the ``users`` collection)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from flask_login import UserMixin
from sqlalchemy.types import JSON
from werkzeug.security import check_password_hash, generate_password_hash

from ..core.extensions import db


def _utcnow():
    return datetime.now(timezone.utc)


def _generate_user_id() -> str:
    return uuid.uuid4().hex[:20]


DEFAULT_PROFILE = {
    'level': 'Beginner',
    'lessons_completed': 0,
    'total_study_time': 0,
    'streak': 0,
    'achievements': 0,
}


class User(UserMixin, db.Model):
    """Registered learner. Guests never get a row here."""

    __tablename__ = 'users'

    PROVIDER_PASSWORD = 'password'
    PROVIDER_GOOGLE = 'google'

    id = db.Column(db.String(32), primary_key=True, default=_generate_user_id)
    name = db.Column(db.String(120), nullable=False)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=True)
    auth_provider = db.Column(db.String(20), default=PROVIDER_PASSWORD, nullable=False)
    is_guest = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    last_login_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    profile = db.Column(JSON, default=lambda: dict(DEFAULT_PROFILE))
    # unit_id -> {lesson_completed, quiz_completed, quiz_score, completed_at}
    progress = db.Column(JSON, default=dict)

    def get_id(self):
        return str(self.id)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'username': self.username,
            'email': self.email,
            'is_guest': self.is_guest,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'last_login_at': self.last_login_at.isoformat() if self.last_login_at else None,
            'profile': dict(self.profile or {}),
            'progress': dict(self.progress or {}),
        }
