"""
Pre-persist transformations.

These receivers run on every ``save()`` of the account models and keep
write-time rules out of the model classes themselves.
"""
from __future__ import annotations

from django.contrib.auth.hashers import UNUSABLE_PASSWORD_PREFIX, identify_hasher, make_password
from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import User


def hash_raw_password(user: User) -> None:
    """Hash ``user.password`` when it holds a raw value.

    A value that a configured hasher recognises is the stored hash of an
    unchanged password and is left alone, so a password is hashed exactly
    once per change.
    """
    raw = user.password
    if not raw or raw.startswith(UNUSABLE_PASSWORD_PREFIX):
        return
    try:
        identify_hasher(raw)
    except ValueError:
        user.password = make_password(raw)


def normalize_email(user: User) -> None:
    # Unique column: accounts without an email store NULL, never ''
    email = (user.email or '').strip().lower()
    user.email = email or None


@receiver(pre_save, sender=User)
def prepare_user_for_save(sender, instance: User, **kwargs) -> None:
    hash_raw_password(instance)
    normalize_email(instance)
