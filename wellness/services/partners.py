"""
Partner operations.

Each function takes the acting admin explicitly; nothing is read from
ambient request state.  Writes validate the whole record before the
media store is touched, and an uploaded image is recorded in the same
transaction as the partner that references it.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import Count, Q, QuerySet
from rest_framework.exceptions import NotAuthenticated

from ..models import Partner, User
from . import images
from .lookups import get_or_404

logger = logging.getLogger(__name__)

IMAGE_FOLDER = 'partners'

FIELD_MAP = {
    'name': 'name',
    'profession': 'profession',
    'businessAddress': 'business_address',
    'partnerType': 'partner_type',
    'email': 'email',
    'phone': 'phone',
    'description': 'description',
    'website': 'website',
    'socialLinks': 'social_links',
    'isActive': 'is_active',
}


def serialize_partner(partner: Partner) -> dict:
    creator = partner.created_by if Partner._meta.get_field('created_by').is_cached(partner) else None
    image = images.resolve(images.image_ref(partner))
    return {
        'id': str(partner.id),
        'name': partner.name,
        'profession': partner.profession,
        'businessAddress': partner.business_address,
        'partnerType': partner.partner_type,
        'email': partner.email or None,
        'phone': partner.phone or None,
        'description': partner.description or None,
        'website': partner.website or None,
        'socialLinks': list(partner.social_links or []),
        'isActive': partner.is_active,
        'partnerImage': images.serialize_image(image),
        'createdBy': {
            'id': str(creator.id),
            'name': creator.display_name,
            'email': creator.email,
        } if creator else str(partner.created_by_id),
        'createdAt': partner.created_at.isoformat() if partner.created_at else None,
        'updatedAt': partner.updated_at.isoformat() if partner.updated_at else None,
        'formattedCreatedAt': partner.formatted_created_at,
    }


def _require_actor(actor: Optional[User]) -> User:
    if actor is None or not getattr(actor, 'is_authenticated', False):
        raise NotAuthenticated('Admin identity is required')
    return actor


def _apply(partner: Partner, data: dict[str, Any]) -> None:
    for key, attr in FIELD_MAP.items():
        if key in data:
            setattr(partner, attr, data[key])


def partner_queryset() -> QuerySet:
    return Partner.objects.select_related('image', 'created_by')


def list_partners(*, is_active: Optional[str] = None, partner_type: Optional[str] = None,
                  profession: Optional[str] = None, search: Optional[str] = None) -> QuerySet:
    qs = partner_queryset()
    if is_active is not None:
        qs = qs.filter(is_active=(is_active == 'true'))
    if partner_type:
        qs = qs.filter(partner_type=partner_type)
    if profession:
        qs = qs.filter(profession=profession)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(profession__icontains=search))
    return qs.order_by('-created_at')


def get_partner(partner_id) -> Partner:
    return get_or_404(partner_queryset(), partner_id, 'Partner')


def create_partner(actor: Optional[User], data: dict[str, Any], upload: Optional[UploadedFile] = None) -> Partner:
    actor = _require_actor(actor)
    partner = Partner(created_by=actor)
    _apply(partner, data)
    partner.full_clean()

    with images.staged_upload(upload, IMAGE_FOLDER) as stored, transaction.atomic():
        if stored is not None:
            partner.image = images.record(stored, uploaded_by=actor)
        partner.save()
    logger.info('Partner %s created by %s', partner.id, actor.id)
    return partner


def update_partner(actor: Optional[User], partner_id, data: dict[str, Any],
                   upload: Optional[UploadedFile] = None) -> Partner:
    actor = _require_actor(actor)
    partner = get_partner(partner_id)
    _apply(partner, data)
    partner.full_clean()

    replaced = None
    with images.staged_upload(upload, IMAGE_FOLDER) as stored, transaction.atomic():
        if stored is not None:
            replaced = images.resolve(images.image_ref(partner))
            if replaced is not None:
                replaced.delete()
            partner.image = images.record(stored, uploaded_by=actor)
        partner.save()
    images.discard_remote(replaced)
    logger.info('Partner %s updated by %s', partner.id, actor.id)
    return partner


def delete_partner(partner_id) -> None:
    partner = get_partner(partner_id)
    image = images.resolve(images.image_ref(partner))
    with transaction.atomic():
        if image is not None:
            image.delete()
        partner.delete()
    images.discard_remote(image)
    logger.info('Partner %s deleted', partner_id)


def toggle_status(partner_id) -> Partner:
    partner = get_partner(partner_id)
    partner.is_active = not partner.is_active
    partner.save(update_fields=['is_active', 'updated_at'])
    logger.info('Partner %s is now %s', partner.id, 'active' if partner.is_active else 'inactive')
    return partner


def partner_stats() -> dict:
    counts = Partner.objects.aggregate(
        total=Count('id'),
        active=Count('id', filter=Q(is_active=True)),
        inactive=Count('id', filter=Q(is_active=False)),
    )
    by_type = [
        {'partnerType': row['partner_type'], 'count': row['count']}
        for row in Partner.objects.values('partner_type').annotate(count=Count('id')).order_by('partner_type')
    ]
    return {**counts, 'byType': by_type}
