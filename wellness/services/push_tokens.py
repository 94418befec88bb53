"""
Push-notification token lists.

Tokens are kept with set semantics on any model exposing a
``push_tokens`` JSON list; every change is saved immediately.
"""
from __future__ import annotations

from django.db import models, transaction
from rest_framework.exceptions import ValidationError


def _clean(token) -> str:
    token = (token or '').strip() if isinstance(token, str) else ''
    if not token:
        raise ValidationError({'token': 'A push token is required'})
    return token


def add_token(owner: models.Model, token) -> list[str]:
    token = _clean(token)
    with transaction.atomic():
        locked = type(owner).objects.select_for_update().get(pk=owner.pk)
        if token not in locked.push_tokens:
            locked.push_tokens = [*locked.push_tokens, token]
            locked.save(update_fields=['push_tokens', 'updated_at'])
    owner.push_tokens = locked.push_tokens
    return list(owner.push_tokens)


def remove_token(owner: models.Model, token) -> list[str]:
    token = _clean(token)
    with transaction.atomic():
        locked = type(owner).objects.select_for_update().get(pk=owner.pk)
        if token in locked.push_tokens:
            locked.push_tokens = [t for t in locked.push_tokens if t != token]
            locked.save(update_fields=['push_tokens', 'updated_at'])
    owner.push_tokens = locked.push_tokens
    return list(owner.push_tokens)
