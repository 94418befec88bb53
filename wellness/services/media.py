"""
Media store client.

Uploaded images are kept in an external object store and referenced by
the URL and handle returned here.  The store is reached through Django's
storage API, so the backend is chosen by the ``STORAGES["default"]``
setting (filesystem in development).
"""
from __future__ import annotations

import datetime
import logging
import os
import uuid
from dataclasses import dataclass

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from ..exceptions import MediaStoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredMedia:
    secure_url: str
    public_id: str


def _object_name(folder: str, filename: str = '') -> str:
    ext = os.path.splitext(filename)[1].lower() or '.jpg'
    return f"{folder.strip('/')}/{datetime.date.today():%Y/%m}/{uuid.uuid4().hex}{ext}"


def upload(buffer: bytes, folder: str, *, filename: str = '') -> StoredMedia:
    """Store ``buffer`` under ``folder`` and return its URL and handle."""
    if not isinstance(buffer, (bytes, bytearray)) or not buffer:
        raise MediaStoreError('Invalid buffer provided for upload')
    try:
        public_id = default_storage.save(_object_name(folder, filename), ContentFile(bytes(buffer)))
        secure_url = default_storage.url(public_id)
    except Exception as exc:
        logger.exception('Media upload to %s failed', folder)
        raise MediaStoreError('Error uploading image to media store') from exc
    logger.info('Stored media object %s', public_id)
    return StoredMedia(secure_url=secure_url, public_id=public_id)


def delete(public_id: str) -> None:
    """Remove a previously uploaded object by its handle."""
    try:
        default_storage.delete(public_id)
    except Exception as exc:
        logger.exception('Media delete of %s failed', public_id)
        raise MediaStoreError('Error deleting file from media store') from exc
    logger.info('Deleted media object %s', public_id)
