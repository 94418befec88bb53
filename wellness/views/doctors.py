"""
Doctor directory and reviews.

Listing, detail and reading reviews are public; posting a review needs
any signed-in user.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from ..serializers.doctor import DoctorListQuerySerializer, ReviewInputSerializer
from ..services import doctors, push_tokens


@api_view(['GET'])
@permission_classes([AllowAny])
def doctor_list(request):
    q = DoctorListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = doctors.list_doctors(
        specialization=q.validated_data.get('specialization'),
        status=q.validated_data.get('status'),
        search=q.validated_data.get('search'),
    )
    data = [doctors.serialize_doctor(d) for d in qs]
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def doctor_detail(request, doctor_id: str):
    return Response({'success': True, 'data': doctors.serialize_doctor(doctors.get_doctor(doctor_id))})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def doctor_reviews(request, doctor_id: str):
    doctor = doctors.get_doctor(doctor_id)
    if request.method == 'GET':
        data = [doctors.serialize_review(r) for r in doctors.list_reviews(doctor)]
        return Response({'success': True, 'count': len(data), 'data': data})

    s = ReviewInputSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    review = doctors.add_review(doctor, request.user, **s.validated_data)
    return Response(
        {'success': True, 'message': 'Review added successfully', 'data': doctors.serialize_review(review)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST', 'DELETE'])
@permission_classes([IsAuthenticated])
def my_push_tokens(request):
    doctor = doctors.doctor_for_user(request.user)
    token = request.data.get('token') or request.data.get('expoPushToken')
    if request.method == 'POST':
        tokens = push_tokens.add_token(doctor, token)
    else:
        tokens = push_tokens.remove_token(doctor, token)
    return Response({'success': True, 'data': {'pushTokens': tokens}})
