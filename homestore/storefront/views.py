"""
Public storefront API. All reads are localized (?locale= or the locale
cookie) and served from the tag cache.
"""
import hmac
import logging
import os

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from homestore.core.exceptions import invalid_fields_response
from homestore.core.i18n import get_request_locale
from homestore.core.models import InboxMessage
from .cache import revalidate_tag
from .serializers import ContactFormSerializer, SubscribeSerializer
from . import queries

logger = logging.getLogger(__name__)

SUBSCRIBE_NAME = 'Khách hàng (Footer)'
SUBSCRIBE_CONTENT = 'Đăng ký tư vấn từ form ở Footer.'


def _found(data):
    if data is None:
        return Response({'error': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(data)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def revalidate(request):
    """Drop cached storefront data for the given tags. Called by the admin deployment."""
    secret = getattr(settings, 'REVALIDATION_SECRET', os.getenv('REVALIDATION_SECRET', ''))
    if not secret:
        logger.error("REVALIDATION_SECRET is not configured")
        return Response({'error': 'Server configuration error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    auth_header = request.headers.get('Authorization', '')
    if not hmac.compare_digest(auth_header.encode(), f'Bearer {secret}'.encode()):
        return Response({'error': 'Unauthorized'}, status=status.HTTP_401_UNAUTHORIZED)

    tags = request.data.get('tags') if isinstance(request.data, dict) else None
    if not isinstance(tags, list) or not tags:
        return Response(
            {'error': 'Invalid request: tags must be a non-empty array'}, status=status.HTTP_400_BAD_REQUEST
        )

    revalidated = []
    for tag in tags:
        if isinstance(tag, str) and tag.strip():
            revalidate_tag(tag)
            revalidated.append(tag)

    logger.info(f"Revalidated tags: {', '.join(revalidated)}")
    return Response({
        'success': True,
        'revalidated': revalidated,
        'timestamp': timezone.now().isoformat(),
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def home(request):
    return Response(queries.get_home(get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def menu(request):
    return Response({'data': queries.get_menu(get_request_locale(request))})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def footer(request):
    return Response(queries.get_footer(get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def contacts(request):
    return Response({'data': queries.get_site_contacts()})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def catalog_page(request, slug):
    """Catalog landing page. ``?sort=newest|price_asc|price_desc|name``"""
    sort = request.query_params.get('sort') or queries.DEFAULT_SORT
    if sort not in queries.PRODUCT_SORTS:
        sort = queries.DEFAULT_SORT
    return _found(queries.get_catalog_page(slug, get_request_locale(request), sort=sort))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def product_page(request, slug):
    return _found(queries.get_product_page(slug, get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def sale_page(request):
    return Response(queries.get_sale_page(get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def collections(request):
    return Response({'data': queries.get_collections(get_request_locale(request))})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def service_page(request, slug):
    return _found(queries.get_service(slug, get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def projects(request):
    return Response({'data': queries.get_projects(get_request_locale(request))})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def project_page(request, slug):
    return _found(queries.get_project(slug, get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def blogs(request):
    return Response({'data': queries.get_posts(get_request_locale(request))})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def blog_page(request, slug):
    return _found(queries.get_post(slug, get_request_locale(request)))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def search(request):
    """Product search box, up to 10 hits"""
    results = queries.search_products(request.query_params.get('q', ''), get_request_locale(request))
    return Response({'data': results})


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def contact(request):
    serializer = ContactFormSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)

    data = serializer.validated_data
    message = InboxMessage.objects.create(
        name=data['name'],
        email=data.get('email') or None,
        phone_number=data['full_phone'],
        content=data['content'],
    )
    logger.info(f"Contact message {message.pk} received from {message.name}")
    return Response({'success': True, 'id': message.pk}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def subscribe(request):
    serializer = SubscribeSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)

    value = serializer.validated_data['contact']
    is_email = '@' in value
    message = InboxMessage.objects.create(
        name=SUBSCRIBE_NAME,
        email=value if is_email else None,
        phone_number='N/A' if is_email else value,
        content=SUBSCRIBE_CONTENT,
    )
    logger.info(f"Subscribe request {message.pk} received")
    return Response({'success': True, 'id': message.pk}, status=status.HTTP_201_CREATED)
