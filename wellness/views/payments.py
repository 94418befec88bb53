from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole
from ..serializers.payment import PaymentListQuerySerializer
from ..services import payments


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def payment_list(request):
    q = PaymentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = payments.list_payments(
        status=q.validated_data.get('status'),
        payment_method=q.validated_data.get('paymentMethod'),
    )
    data = [payments.serialize_payment(p) for p in qs]
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payment_detail(request, payment_id: str):
    payment = payments.get_visible_payment(request.user, payment_id)
    return Response({'success': True, 'data': payments.serialize_payment(payment)})
