from __future__ import annotations

import logging
from typing import Any, Optional

from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound, ValidationError

from ..models import User
from . import images
from .lookups import get_or_404

logger = logging.getLogger(__name__)

IMAGE_FOLDER = 'user-profiles'

UPDATABLE_FIELDS = {
    'name': 'name',
    'phone': 'phone',
    'email': 'email',
    'gender': 'gender',
    'dateOfBirth': 'date_of_birth',
    'homeAddress': 'home_address',
    'city': 'city',
    'state': 'state',
    'lga': 'lga',
    'preferences': 'preferences',
}


def serialize_user(user: User) -> dict:
    """Public view of an account; the password hash is never included."""
    return {
        'id': str(user.id),
        'username': user.username,
        'name': user.display_name,
        'email': user.email,
        'phone': user.phone or None,
        'gender': user.gender or None,
        'dateOfBirth': user.date_of_birth or None,
        'homeAddress': user.home_address or None,
        'city': user.city or None,
        'state': user.state or None,
        'lga': user.lga or None,
        'roles': list(user.roles or []),
        'verified': user.verified,
        'preferences': user.preferences or {},
        'userImage': images.serialize_image(images.resolve(images.image_ref(user))),
        'pushTokens': list(user.push_tokens or []),
        'createdAt': user.created_at.isoformat() if user.created_at else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }


def user_queryset():
    return User.objects.select_related('image')


def get_user(user_id) -> User:
    return get_or_404(user_queryset(), user_id, 'User')


def update_user(user: User, data: dict[str, Any], upload: Optional[UploadedFile] = None) -> User:
    for key, attr in UPDATABLE_FIELDS.items():
        if key in data:
            setattr(user, attr, data[key])
    user.full_clean(exclude=['password'])

    replaced = None
    with images.staged_upload(upload, IMAGE_FOLDER) as stored, transaction.atomic():
        if stored is not None:
            replaced = images.resolve(images.image_ref(user))
            if replaced is not None:
                replaced.delete()
            user.image = images.record(stored, uploaded_by=user)
        user.save()
    images.discard_remote(replaced)
    logger.info('User %s profile updated', user.id)
    return user


def delete_user_image(user: User) -> None:
    image = images.resolve(images.image_ref(user))
    if image is None:
        raise NotFound('No profile image to delete')
    with transaction.atomic():
        image.delete()
        user.image = None
        user.save(update_fields=['image', 'updated_at'])
    images.discard_remote(image)


def delete_user(user: User) -> None:
    image = images.resolve(images.image_ref(user))
    try:
        with transaction.atomic():
            if image is not None:
                image.delete()
            user.delete()
    except ProtectedError:
        raise ValidationError('User still owns partner or payment records and cannot be deleted')
    images.discard_remote(image)
    logger.info('User %s deleted', user.pk)
