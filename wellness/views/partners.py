"""
Partner endpoints.

Everything except the public active list requires an admin.  Writes
accept JSON or multipart bodies; a multipart ``file`` (or ``image``)
field carries the optional partner image.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole
from ..serializers.partner import PartnerInputSerializer, PartnerListQuerySerializer
from ..services import images, orders, partners


def _list_response(qs) -> Response:
    data = [partners.serialize_partner(p) for p in qs]
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def partner_collection(request):
    if request.method == 'POST':
        s = PartnerInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        upload = images.upload_from_request(request)
        partner = partners.create_partner(request.user, s.validated_data, upload)
        return Response(
            {'success': True, 'message': 'Partner created successfully', 'data': partners.serialize_partner(partner)},
            status=status.HTTP_201_CREATED,
        )

    q = PartnerListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = partners.list_partners(
        is_active=q.validated_data.get('isActive'),
        partner_type=q.validated_data.get('partnerType'),
        profession=q.validated_data.get('profession'),
        search=q.validated_data.get('search'),
    )
    return _list_response(qs)


@api_view(['GET'])
@permission_classes([AllowAny])
def active_partners(request):
    q = PartnerListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = partners.list_partners(
        is_active='true',
        partner_type=q.validated_data.get('partnerType'),
        profession=q.validated_data.get('profession'),
        search=q.validated_data.get('search'),
    )
    return _list_response(qs)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def partner_stats(request):
    return Response({'success': True, 'data': partners.partner_stats()})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def partner_detail(request, partner_id: str):
    if request.method == 'GET':
        partner = partners.get_partner(partner_id)
        return Response({'success': True, 'data': partners.serialize_partner(partner)})

    if request.method == 'DELETE':
        partners.delete_partner(partner_id)
        return Response({'success': True, 'message': 'Partner deleted successfully'})

    s = PartnerInputSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    upload = images.upload_from_request(request)
    partner = partners.update_partner(request.user, partner_id, s.validated_data, upload)
    return Response({
        'success': True,
        'message': 'Partner updated successfully',
        'data': partners.serialize_partner(partners.get_partner(partner.id)),
    })


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def toggle_partner_status(request, partner_id: str):
    partner = partners.toggle_status(partner_id)
    state = 'activated' if partner.is_active else 'deactivated'
    return Response({
        'success': True,
        'message': f'Partner {state} successfully',
        'data': partners.serialize_partner(partner),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def partner_orders(request, partner_id: str):
    partner = partners.get_partner(partner_id)
    data = orders.partner_order_summaries(partner)
    return Response({'success': True, 'count': len(data), 'data': data})
