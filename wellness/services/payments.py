from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet
from rest_framework.exceptions import NotFound

from ..models import Payment, User
from ..permissions import is_admin
from .lookups import get_or_404


def serialize_payment(payment: Payment) -> dict:
    return {
        'id': str(payment.id),
        'orderId': str(payment.order_id),
        'userId': str(payment.user_id),
        'paymentMethod': payment.payment_method,
        'partnerReferenceCode': payment.partner_reference_code,
        'paymentReference': payment.payment_reference,
        'transactionId': payment.transaction_id,
        'checkoutUrl': payment.checkout_url,
        'amount': float(payment.amount),
        'status': payment.status,
        'createdAt': payment.created_at.isoformat() if payment.created_at else None,
    }


def list_payments(*, status: Optional[str] = None, payment_method: Optional[str] = None) -> QuerySet:
    qs = Payment.objects.all()
    if status:
        qs = qs.filter(status=status)
    if payment_method:
        qs = qs.filter(payment_method=payment_method)
    return qs.order_by('-created_at')


def get_visible_payment(actor: User, payment_id) -> Payment:
    """Admins see every payment; anyone else only their own."""
    payment = get_or_404(Payment.objects.all(), payment_id, 'Payment')
    if not is_admin(actor) and payment.user_id != actor.id:
        raise NotFound('Payment not found')
    return payment
