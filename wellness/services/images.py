"""
Image ownership helpers.

An owner (partner, user, doctor) refers to at most one :class:`Image`.
The reference is either just the key (``ImageReference``) or the loaded
record (``ExpandedImage``) depending on whether the owner was fetched
with ``select_related``; :func:`resolve` turns either form into a record.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.db import models
from rest_framework.exceptions import ValidationError

from ..exceptions import MediaStoreError
from ..models import Image
from . import media

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageReference:
    image_id: uuid.UUID


@dataclass(frozen=True)
class ExpandedImage:
    image: Image


ImageRef = Union[ImageReference, ExpandedImage]


def image_ref(owner: models.Model, field: str = 'image') -> Optional[ImageRef]:
    fk = owner._meta.get_field(field)
    if fk.is_cached(owner):
        image = getattr(owner, field)
        return ExpandedImage(image) if image is not None else None
    image_id = getattr(owner, fk.attname)
    return ImageReference(image_id) if image_id else None


def resolve(ref: Optional[ImageRef]) -> Optional[Image]:
    if ref is None:
        return None
    if isinstance(ref, ExpandedImage):
        return ref.image
    return Image.objects.filter(pk=ref.image_id).first()


def serialize_image(image: Optional[Image]) -> dict | None:
    if image is None:
        return None
    return {
        'id': str(image.id),
        'imageUrl': image.image_url,
        'imageCldId': image.image_cld_id,
        'url': image.image_url,
        'uploadedBy': str(image.uploaded_by_id) if image.uploaded_by_id else None,
        'createdAt': image.created_at.isoformat() if image.created_at else None,
    }


def upload_from_request(request) -> Optional[UploadedFile]:
    """Return the uploaded image (``file`` or legacy ``image`` field), validated."""
    upload = request.FILES.get('file') or request.FILES.get('image')
    if upload is None:
        return None
    max_bytes = settings.UPLOAD_MAX_MB * 1024 * 1024
    if upload.size > max_bytes:
        raise ValidationError({'file': f'Image exceeds the {settings.UPLOAD_MAX_MB} MB limit'})
    content_type = upload.content_type or ''
    if not any(content_type.startswith(prefix) for prefix in settings.ALLOWED_UPLOAD_TYPES):
        raise ValidationError({'file': 'Only image files are allowed'})
    return upload


@contextmanager
def staged_upload(upload: Optional[UploadedFile], folder: str) -> Iterator[Optional[media.StoredMedia]]:
    """Upload ``upload`` and undo the remote object if the enclosed block fails.

    Used around the database transaction that records the image, so an
    upload never outlives a failed create or update.
    """
    if upload is None:
        yield None
        return
    stored = media.upload(upload.read(), folder, filename=upload.name or '')
    try:
        yield stored
    except Exception:
        logger.warning('Rolling back uploaded media %s', stored.public_id)
        try:
            media.delete(stored.public_id)
        except MediaStoreError:
            logger.exception('Could not roll back uploaded media %s', stored.public_id)
        raise


def record(stored: media.StoredMedia, *, uploaded_by=None) -> Image:
    return Image.objects.create(
        image_url=stored.secure_url,
        image_cld_id=stored.public_id,
        uploaded_by=uploaded_by,
    )


def discard_remote(image: Optional[Image]) -> None:
    """Delete the remote object of an image whose record is already gone.

    Runs after the owning transaction committed; a failure leaves an
    unreferenced remote object behind and is only logged.
    """
    if image is None or not image.image_cld_id:
        return
    try:
        media.delete(image.image_cld_id)
    except MediaStoreError:
        logger.exception('Remote image %s left behind', image.image_cld_id)
