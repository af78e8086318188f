"""Per-device key/value storage rows."""

from __future__ import annotations

from datetime import datetime, timezone

from ..core.extensions import db


class StorageEntry(db.Model):
    """One ``key -> JSON text`` pair belonging to a device.

    Mirrors what a browser keeps in local storage: values are opaque
    strings, the schema of each key family lives with its reader.
    """

    __tablename__ = 'device_storage'

    entry_id = db.Column(db.Integer, primary_key=True)
    device_id = db.Column(db.String(64), nullable=False, index=True)
    key = db.Column(db.String(255), nullable=False)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (db.UniqueConstraint('device_id', 'key', name='_device_key_uc'),)
