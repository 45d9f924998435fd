from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from homestore.core.exceptions import DomainError, error_response, invalid_fields_response
from homestore.core.serializers import BulkDeleteSerializer
from homestore.core.utils import paginate
from .filters import ServiceFilter, ProjectFilter, PostFilter
from .serializers import (
    ContentSummarySerializer,
    ServiceSerializer, ServiceWriteSerializer,
    ProjectSerializer, ProjectWriteSerializer,
    PostSerializer, PostWriteSerializer,
)
from .services import SERVICE, PROJECT, POST, save_content, delete_content, bulk_delete_content


def _queryset(kind):
    return kind.model.objects.select_related(kind.image_field).prefetch_related('gallery__asset')


def _list_create(request, kind, filter_class, read_serializer, write_serializer):
    if request.method == 'GET':
        queryset = kind.model.objects.select_related(kind.image_field).order_by('-updated_at')
        filterset = filter_class(request.query_params, queryset=queryset)
        items, meta = paginate(filterset.qs, request.query_params)
        return Response({'data': ContentSummarySerializer(items, many=True).data, 'meta': meta})

    serializer = write_serializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        instance = save_content(kind, serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    instance = _queryset(kind).get(pk=instance.pk)
    return Response(read_serializer(instance).data, status=status.HTTP_201_CREATED)


def _detail(request, pk, kind, read_serializer, write_serializer):
    instance = get_object_or_404(_queryset(kind), pk=pk)

    if request.method == 'GET':
        return Response(read_serializer(instance).data)

    if request.method == 'DELETE':
        try:
            delete_content(kind, instance, user=request.user)
        except DomainError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = write_serializer(data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        instance = save_content(kind, serializer.validated_data, instance=instance, user=request.user)
    except DomainError as e:
        return error_response(e)
    instance = _queryset(kind).get(pk=instance.pk)
    return Response(read_serializer(instance).data)


def _bulk_delete(request, kind):
    serializer = BulkDeleteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        deleted = bulk_delete_content(kind, serializer.validated_data['ids'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'deleted': deleted})


# Services

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def service_list_create(request):
    """List services or create a new one"""
    return _list_create(request, SERVICE, ServiceFilter, ServiceSerializer, ServiceWriteSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def service_detail(request, pk):
    return _detail(request, pk, SERVICE, ServiceSerializer, ServiceWriteSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def service_bulk_delete(request):
    return _bulk_delete(request, SERVICE)


# Projects

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def project_list_create(request):
    """List projects or create a new one"""
    return _list_create(request, PROJECT, ProjectFilter, ProjectSerializer, ProjectWriteSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def project_detail(request, pk):
    return _detail(request, pk, PROJECT, ProjectSerializer, ProjectWriteSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def project_bulk_delete(request):
    return _bulk_delete(request, PROJECT)


# Posts

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def post_list_create(request):
    """List blog posts or create a new one"""
    return _list_create(request, POST, PostFilter, PostSerializer, PostWriteSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def post_detail(request, pk):
    return _detail(request, pk, POST, PostSerializer, PostWriteSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def post_bulk_delete(request):
    return _bulk_delete(request, POST)
