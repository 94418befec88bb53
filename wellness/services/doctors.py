from __future__ import annotations

import logging
from typing import Optional

from django.db.models import Avg, Count, Q, QuerySet
from rest_framework.exceptions import NotFound

from ..models import Doctor, Review, User
from . import images
from .lookups import get_or_404

logger = logging.getLogger(__name__)


def doctor_queryset() -> QuerySet:
    return Doctor.objects.select_related('image').annotate(
        avg_rating=Avg('reviews__rating'),
        review_count=Count('reviews'),
    )


def serialize_doctor(doctor: Doctor) -> dict:
    avg = getattr(doctor, 'avg_rating', None)
    return {
        'id': str(doctor.id),
        'firstName': doctor.first_name,
        'lastName': doctor.last_name,
        'fullName': doctor.full_name,
        'email': doctor.email,
        'specialization': doctor.specialization,
        'licenseNumber': doctor.license_number,
        'yearsOfExperience': doctor.years_of_experience,
        'bio': doctor.bio or None,
        'contactNumber': doctor.contact_number or None,
        'availability': doctor.availability or {},
        'status': doctor.status,
        'doctorImage': images.serialize_image(images.resolve(images.image_ref(doctor))),
        'rating': round(float(avg), 1) if avg is not None else 0,
        'reviewCount': getattr(doctor, 'review_count', 0),
        'createdAt': doctor.created_at.isoformat() if doctor.created_at else None,
    }


def serialize_review(review: Review) -> dict:
    return {
        'id': str(review.id),
        'doctorId': str(review.doctor_id),
        'userId': str(review.user_id) if review.user_id else None,
        'name': review.name or 'Anonymous',
        'rating': review.rating,
        'comment': review.comment,
        'createdAt': review.created_at.isoformat() if review.created_at else None,
    }


def list_doctors(*, specialization: Optional[str] = None, status: Optional[str] = None,
                 search: Optional[str] = None) -> QuerySet:
    qs = doctor_queryset()
    if specialization:
        qs = qs.filter(specialization__iexact=specialization)
    if status:
        qs = qs.filter(status=status)
    if search:
        qs = qs.filter(
            Q(first_name__icontains=search) | Q(last_name__icontains=search) | Q(specialization__icontains=search)
        )
    return qs.order_by('-created_at')


def get_doctor(doctor_id) -> Doctor:
    return get_or_404(doctor_queryset(), doctor_id, 'Doctor')


def list_reviews(doctor: Doctor) -> QuerySet:
    return doctor.reviews.order_by('-created_at')


def add_review(doctor: Doctor, reviewer: User, *, rating: int, comment: str = '', name: str = '') -> Review:
    review = Review(
        doctor=doctor,
        user=reviewer,
        name=name or reviewer.display_name,
        rating=rating,
        comment=comment,
    )
    review.full_clean()
    review.save()
    logger.info('Review %s added for doctor %s', review.id, doctor.id)
    return review


def doctor_for_user(user: User) -> Doctor:
    doctor = Doctor.objects.filter(user=user).first()
    if doctor is None:
        raise NotFound('Doctor profile not found')
    return doctor
