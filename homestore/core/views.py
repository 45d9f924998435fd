from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError, AuthenticationFailed
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.shortcuts import get_object_or_404
from django.db.models import Q
from .models import Notification, InboxMessage
from .permissions import IsAdminRole
from .serializers import (
    UserSerializer, UserCreateSerializer, UserUpdateSerializer,
    NotificationSerializer, InboxMessageSerializer
)
from .exceptions import invalid_fields_response
from .utils import paginate, search_filter

User = get_user_model()

NOTIFICATION_LIMIT = 20
SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 5


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_active:
            raise AuthenticationFailed('User account is disabled.')
        data['user'] = UserSerializer(self.user).data
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        token['role'] = user.role
        return token


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer


class CustomTokenRefreshSerializer(TokenRefreshSerializer):
    """Token refresh that reports deleted users as an invalid token"""
    def validate(self, attrs):
        try:
            return super().validate(attrs)
        except (InvalidToken, TokenError):
            raise InvalidToken('Token is invalid or expired.')
        except (ObjectDoesNotExist, User.DoesNotExist):
            raise InvalidToken('Token is invalid. User no longer exists.')


class CustomTokenRefreshView(TokenRefreshView):
    serializer_class = CustomTokenRefreshSerializer


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Current user with role flags"""
    data = UserSerializer(request.user).data
    data['is_admin'] = request.user.is_admin_role
    return Response(data)


# User views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_list_create(request):
    """List all users or create a new user"""
    if request.method == 'GET':
        queryset = search_filter(User.objects.order_by('-created_at'), request.query_params.get('search'),
                                 ['username', 'email', 'name'])
        role = request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        users, meta = paginate(queryset, request.query_params)
        return Response({'data': UserSerializer(users, many=True).data, 'meta': meta})

    serializer = UserCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    user = serializer.save()
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk):
    """Retrieve, update or delete a user"""
    user = get_object_or_404(User, pk=pk)

    if request.method == 'GET':
        return Response(UserSerializer(user).data)

    if request.method in ('PUT', 'PATCH'):
        serializer = UserUpdateSerializer(user, data=request.data, partial=request.method == 'PATCH')
        if not serializer.is_valid():
            return invalid_fields_response(serializer.errors)
        serializer.save()
        return Response(UserSerializer(user).data)

    if user.pk == request.user.pk:
        return Response({'error': 'You cannot delete your own account.'}, status=status.HTTP_400_BAD_REQUEST)
    user.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


# Notification views
def _visible_notifications(user):
    return Notification.objects.filter(Q(user=user) | Q(user__isnull=True))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """Latest notifications for the current user, including broadcasts"""
    queryset = _visible_notifications(request.user).select_related('creator').order_by('-created_at')
    unread_count = queryset.filter(is_read=False).count()
    notifications = queryset[:NOTIFICATION_LIMIT]
    return Response({
        'data': NotificationSerializer(notifications, many=True).data,
        'unread_count': unread_count,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notification_mark_read(request, pk):
    notification = get_object_or_404(_visible_notifications(request.user), pk=pk)
    notification.is_read = True
    notification.save(update_fields=['is_read'])
    return Response({'success': True})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notification_mark_all_read(request):
    updated = _visible_notifications(request.user).filter(is_read=False).update(is_read=True)
    return Response({'success': True, 'updated': updated})


# Inbox views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def inbox_list(request):
    """Messages from the storefront contact forms"""
    queryset = search_filter(InboxMessage.objects.all(), request.query_params.get('search'),
                             ['name', 'email', 'phone_number', 'content'])
    unread = request.query_params.get('unread')
    if unread in ('true', '1'):
        queryset = queryset.filter(is_read=False)
    messages, meta = paginate(queryset.order_by('-created_at'), request.query_params)
    return Response({'data': InboxMessageSerializer(messages, many=True).data, 'meta': meta})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def inbox_mark_read(request, pk):
    message = get_object_or_404(InboxMessage, pk=pk)
    message.is_read = True
    message.save(update_fields=['is_read'])
    return Response({'success': True})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def inbox_delete(request, pk):
    message = get_object_or_404(InboxMessage, pk=pk)
    message.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def global_search(request):
    """Search products, catalogs, collections and content by name or title"""
    query = request.query_params.get('q', '').strip()

    results = {
        'products': [],
        'catalogs': [],
        'collections': [],
        'services': [],
        'projects': [],
        'posts': [],
    }
    if len(query) < SEARCH_MIN_LENGTH:
        return Response(results)

    from homestore.catalog.models import Product, Catalog, Collection
    from homestore.content.models import Service, Project, Post

    def hits(model, fields, title_field, link_prefix):
        condition = Q()
        for name in fields:
            condition |= Q(**{f'{name}__icontains': query})
        rows = model.objects.filter(condition).order_by('-updated_at')[:SEARCH_LIMIT]
        return [
            {
                'id': row.pk,
                'title': getattr(row, title_field),
                'slug': row.slug,
                'link': f'/{link_prefix}/{row.pk}',
            }
            for row in rows
        ]

    results['products'] = hits(Product, ['name', 'name_vi', 'slug'], 'name', 'products')
    results['catalogs'] = hits(Catalog, ['name', 'name_vi', 'slug'], 'name', 'catalogs')
    results['collections'] = hits(Collection, ['name', 'name_vi', 'slug'], 'name', 'collections')
    results['services'] = hits(Service, ['title', 'title_vi', 'slug'], 'title', 'services')
    results['projects'] = hits(Project, ['title', 'title_vi', 'slug'], 'title', 'projects')
    results['posts'] = hits(Post, ['title', 'title_vi', 'slug'], 'title', 'blogs')
    return Response(results)
