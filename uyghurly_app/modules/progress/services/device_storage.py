"""
Device Storage - the server-side stand-in for a browser's local storage.

Values are strings; ``get_json`` / ``set_json`` wrap the common case of a
JSON blob. A blob that no longer parses is logged and read as missing.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, List, Optional

from flask import session

from uyghurly_app.core.extensions import db
from uyghurly_app.models import StorageEntry

logger = logging.getLogger(__name__)

SESSION_KEY = 'device_id'


class DeviceStorage:
    def __init__(self, device_id: str):
        if not device_id:
            raise ValueError('device_id is required')
        self.device_id = device_id

    def _entry(self, key: str) -> Optional[StorageEntry]:
        return StorageEntry.query.filter_by(device_id=self.device_id, key=key).first()

    def get_item(self, key: str) -> Optional[str]:
        entry = self._entry(key)
        return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        entry = self._entry(key)
        if entry is None:
            db.session.add(StorageEntry(device_id=self.device_id, key=key, value=value))
        else:
            entry.value = value
        db.session.commit()

    def remove_item(self, key: str) -> bool:
        deleted = StorageEntry.query.filter_by(device_id=self.device_id, key=key).delete()
        db.session.commit()
        return bool(deleted)

    def keys(self, prefix: str = '') -> List[str]:
        query = StorageEntry.query.filter_by(device_id=self.device_id)
        if prefix:
            query = query.filter(StorageEntry.key.startswith(prefix, autoescape=True))
        return sorted(entry.key for entry in query.all())

    def get_json(self, key: str) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed JSON under %s for device %s", key, self.device_id)
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))


def current_device_id() -> str:
    """Stable id for the calling client, kept in the signed session cookie."""
    device_id = session.get(SESSION_KEY)
    if not device_id:
        device_id = uuid.uuid4().hex
        session[SESSION_KEY] = device_id
        session.permanent = True
    return device_id


def get_device_storage() -> DeviceStorage:
    return DeviceStorage(current_device_id())
