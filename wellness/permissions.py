"""
Role based permission classes.

Roles are stored on :class:`wellness.models.User` as a list drawn from
``User``, ``Admin`` and ``Doctor``.
"""
from rest_framework.permissions import BasePermission

from .models import ROLE_ADMIN, ROLE_DOCTOR


def is_admin(user) -> bool:
    return bool(
        user and user.is_authenticated
        and (getattr(user, 'is_superuser', False) or user.has_role(ROLE_ADMIN))
    )


class IsAdminRole(BasePermission):
    """Allow access only to users holding the Admin role."""
    message = 'Admin access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return is_admin(getattr(request, 'user', None))


class IsDoctorRole(BasePermission):
    """Allow access only to users holding the Doctor role."""
    message = 'Doctor access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, 'user', None)
        return bool(user and user.is_authenticated and user.has_role(ROLE_DOCTOR))


def is_self_or_admin(user, target_id) -> bool:
    if not (user and user.is_authenticated):
        return False
    return is_admin(user) or str(user.id) == str(target_id)
