"""Database models package for Uyghurly."""

from ..core.extensions import db

from .storage import StorageEntry
from .user import DEFAULT_PROFILE, User

__all__ = [
    'db',
    'DEFAULT_PROFILE',
    'StorageEntry',
    'User',
]
