from __future__ import annotations

from django.db.models import Prefetch

from ..models import Order, OrderItem, Partner

GUEST = {'name': 'Guest', 'origin': 'N/A'}


def format_order_summary(order: Order) -> dict:
    items = list(order.items.all())
    first = items[0] if items else None
    if order.user_id:
        user = {'name': order.user.display_name, 'origin': order.platform or 'N/A'}
    else:
        user = dict(GUEST)
    return {
        'id': str(order.id),
        'orderId': order.order_number,
        'totalPrice': float(order.total),
        'status': order.payment_status,
        'platform': order.platform,
        'user': user,
        'itemCount': len(items),
        'frontImage': (first.product.image_url or None) if first else None,
        'createdAt': order.created_at.isoformat() if order.created_at else None,
    }


def partner_order_summaries(partner: Partner) -> list[dict]:
    orders = (
        Order.objects.filter(partner=partner)
        .select_related('user')
        .prefetch_related(Prefetch('items', queryset=OrderItem.objects.select_related('product').order_by('id')))
        .order_by('-created_at')
    )
    return [format_order_summary(o) for o in orders]
