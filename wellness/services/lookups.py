import uuid

from rest_framework.exceptions import NotFound, ValidationError


def parse_id(value, label: str) -> uuid.UUID:
    """Validate an identifier's shape before it reaches the database."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f'Invalid {label} ID')


def get_or_404(queryset, value, label: str):
    obj = queryset.filter(pk=parse_id(value, label.lower())).first()
    if obj is None:
        raise NotFound(f'{label} not found')
    return obj
