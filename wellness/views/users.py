from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole, is_admin, is_self_or_admin
from ..serializers.user import UserUpdateSerializer
from ..services import images, push_tokens, users
from ..services.lookups import parse_id


def _target(request, user_id: str):
    """Resolve ``user_id`` for a caller who must be that user or an admin."""
    parse_id(user_id, 'user')
    if not is_self_or_admin(request.user, user_id):
        raise PermissionDenied('You may only access your own account')
    return users.get_user(user_id)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_list(request):
    data = [users.serialize_user(u) for u in users.user_queryset().order_by('-created_at')]
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response({'success': True, 'data': users.serialize_user(users.get_user(request.user.id))})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def user_detail(request, user_id: str):
    if request.method == 'DELETE':
        if not is_admin(request.user):
            raise PermissionDenied('Admin access required')
        users.delete_user(users.get_user(user_id))
        return Response({'success': True, 'message': 'User deleted successfully'})

    target = _target(request, user_id)
    if request.method == 'GET':
        return Response({'success': True, 'data': users.serialize_user(target)})

    s = UserUpdateSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    upload = images.upload_from_request(request)
    target = users.update_user(target, s.validated_data, upload)
    return Response({
        'success': True,
        'message': 'Profile updated successfully',
        'data': users.serialize_user(users.get_user(target.id)),
    })


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def user_image(request, user_id: str):
    users.delete_user_image(_target(request, user_id))
    return Response({'success': True, 'message': 'Profile image deleted successfully'})


@api_view(['POST', 'DELETE'])
@permission_classes([IsAuthenticated])
def my_push_tokens(request):
    token = request.data.get('token') or request.data.get('expoPushToken')
    if request.method == 'POST':
        tokens = push_tokens.add_token(request.user, token)
        message = 'Push token registered'
    else:
        tokens = push_tokens.remove_token(request.user, token)
        message = 'Push token removed'
    return Response({'success': True, 'message': message, 'data': {'pushTokens': tokens}})
