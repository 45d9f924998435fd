from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from homestore.core.exceptions import DomainError, error_response, invalid_fields_response
from homestore.core.utils import paginate, search_filter
from .models import Asset
from .overlay import get_overlay_settings
from .serializers import (
    AssetSerializer, AssetUploadSerializer, ProcessOverlaySerializer, LogoOverlaySettingsSerializer
)
from . import services


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def asset_list(request):
    """List uploaded assets"""
    queryset = search_filter(Asset.objects.all(), request.query_params.get('search'), ['filename', 'alt_text'])
    mime = request.query_params.get('type')
    if mime:
        queryset = queryset.filter(mime_type__startswith=mime)
    assets, meta = paginate(queryset.order_by('-created_at'), request.query_params, default_limit=24)
    return Response({'data': AssetSerializer(assets, many=True).data, 'meta': meta})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def asset_upload(request):
    """Upload a file to blob storage and record it as an asset"""
    serializer = AssetUploadSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)

    upload = serializer.validated_data['file']
    apply_overlay = serializer.validated_data.get('apply_overlay') or request.query_params.get('apply_overlay') in ('1', 'true')
    try:
        asset = services.create_asset(
            upload.read(),
            upload.name,
            content_type=getattr(upload, 'content_type', None),
            folder=serializer.validated_data.get('folder') or None,
            alt_text=serializer.validated_data.get('alt_text'),
            apply_overlay=apply_overlay,
        )
    except DomainError as e:
        return error_response(e)
    return Response(AssetSerializer(asset).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def asset_detail(request, pk):
    """Retrieve, edit alt text or delete an asset"""
    asset = get_object_or_404(Asset, pk=pk)

    if request.method == 'GET':
        return Response(AssetSerializer(asset).data)

    if request.method == 'PATCH':
        serializer = AssetSerializer(asset, data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_fields_response(serializer.errors)
        serializer.save()
        return Response(serializer.data)

    try:
        services.delete_asset(asset)
    except DomainError as e:
        return error_response(e)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([JSONParser, FormParser, MultiPartParser])
def process_logo_overlay(request):
    """Create a watermarked copy of an image asset"""
    serializer = ProcessOverlaySerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)

    asset = get_object_or_404(Asset, pk=serializer.validated_data['asset_id'])
    try:
        result, processed = services.watermark_asset(asset)
    except DomainError as e:
        return error_response(e)
    return Response({
        'url': result.url,
        'processed': processed,
        'asset': AssetSerializer(result).data,
    })


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def logo_overlay_settings(request):
    """Get or update the logo overlay settings"""
    if request.method == 'GET':
        return Response(get_overlay_settings())

    serializer = LogoOverlaySettingsSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    return Response(services.update_overlay_settings(serializer.validated_data))
