from django.db.models import Count
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from homestore.core.exceptions import DomainError, error_response, invalid_fields_response
from homestore.core.serializers import BulkDeleteSerializer
from homestore.core.utils import paginate
from .filters import CatalogFilter, ProductFilter, CollectionFilter
from .importer import import_products, template_csv
from .models import Catalog, Product, Collection, ProductImportJob
from .serializers import (
    CatalogSerializer, CatalogDetailSerializer, CatalogWriteSerializer,
    ProductListSerializer, ProductSerializer, ProductWriteSerializer, RecommendedProductsSerializer,
    CollectionSerializer, CollectionDetailSerializer, CollectionWriteSerializer,
    ProductImportUploadSerializer, ProductImportJobSerializer,
)
from . import services


def _bulk_delete(request, delete_func):
    serializer = BulkDeleteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        deleted = delete_func(serializer.validated_data['ids'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'deleted': deleted})


# Catalogs

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def catalog_list_create(request):
    """List catalogs or create a new one"""
    if request.method == 'GET':
        queryset = Catalog.objects.select_related('parent', 'image').annotate(
            annotated_product_count=Count('products')
        ).order_by('level', 'display_order', 'name')
        filterset = CatalogFilter(request.query_params, queryset=queryset)
        catalogs, meta = paginate(filterset.qs, request.query_params)
        return Response({'data': CatalogSerializer(catalogs, many=True).data, 'meta': meta})

    serializer = CatalogWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        catalog = services.save_catalog(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(CatalogDetailSerializer(catalog).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def catalog_detail(request, pk):
    """Retrieve, update or delete a catalog"""
    catalog = get_object_or_404(Catalog.objects.select_related('parent', 'image'), pk=pk)

    if request.method == 'GET':
        return Response(CatalogDetailSerializer(catalog).data)

    if request.method == 'DELETE':
        try:
            services.delete_catalog(catalog, user=request.user)
        except DomainError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = CatalogWriteSerializer(data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        catalog = services.save_catalog(serializer.validated_data, catalog=catalog, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(CatalogDetailSerializer(catalog).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def catalog_toggle_home(request, pk):
    """Flip (or set with ``show_on_home``) the homepage visibility of a catalog"""
    catalog = get_object_or_404(Catalog, pk=pk)
    value = request.data.get('show_on_home')
    if isinstance(value, str):
        value = value.lower() in ('true', '1', 'yes')
    try:
        catalog = services.toggle_show_on_home(catalog, value=value, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'id': catalog.pk, 'show_on_home': catalog.show_on_home})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def catalog_bulk_delete(request):
    return _bulk_delete(request, services.bulk_delete_catalogs)


# Products

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def product_list_create(request):
    """List products or create a new one"""
    if request.method == 'GET':
        queryset = Product.objects.select_related('catalog').prefetch_related('gallery__asset').order_by('-updated_at')
        filterset = ProductFilter(request.query_params, queryset=queryset)
        products, meta = paginate(filterset.qs, request.query_params)
        return Response({'data': ProductListSerializer(products, many=True).data, 'meta': meta})

    serializer = ProductWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        product = services.save_product(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def product_detail(request, pk):
    """Retrieve, update or delete a product"""
    product = get_object_or_404(
        Product.objects.select_related('catalog').prefetch_related('gallery__asset'), pk=pk
    )

    if request.method == 'GET':
        return Response(ProductSerializer(product).data)

    if request.method == 'DELETE':
        try:
            services.delete_product(product, user=request.user)
        except DomainError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ProductWriteSerializer(data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        product = services.save_product(serializer.validated_data, product=product, user=request.user)
    except DomainError as e:
        return error_response(e)
    product = Product.objects.select_related('catalog').prefetch_related('gallery__asset').get(pk=product.pk)
    return Response(ProductSerializer(product).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def product_bulk_delete(request):
    return _bulk_delete(request, services.bulk_delete_products)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def product_recommended(request, pk):
    """Get or replace the recommended products of a product"""
    product = get_object_or_404(Product, pk=pk)

    if request.method == 'GET':
        recommended = services.get_recommended_products(product)
        return Response({'data': ProductListSerializer(recommended, many=True).data})

    serializer = RecommendedProductsSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        recommended = services.set_recommended_products(
            product, serializer.validated_data['product_ids'], user=request.user
        )
    except DomainError as e:
        return error_response(e)
    return Response({'data': ProductListSerializer(recommended, many=True).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def product_import_upload(request):
    """Import products from an uploaded CSV file"""
    serializer = ProductImportUploadSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        job = import_products(serializer.validated_data['file'].read(), user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(ProductImportJobSerializer(job).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def product_import_status(request, pk):
    job = get_object_or_404(ProductImportJob, pk=pk)
    return Response(ProductImportJobSerializer(job).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def product_import_template(request):
    """CSV header with one example row"""
    subcatalog = Catalog.objects.filter(level=2).order_by('name').first()
    response = HttpResponse(template_csv(subcatalog.name if subcatalog else None), content_type='text/csv')
    response['Content-Disposition'] = 'attachment; filename="product-import-template.csv"'
    return response


# Collections

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def collection_list_create(request):
    """List collections or create a new one"""
    if request.method == 'GET':
        queryset = Collection.objects.select_related('banner').order_by('-updated_at')
        filterset = CollectionFilter(request.query_params, queryset=queryset)
        collections, meta = paginate(filterset.qs, request.query_params)
        return Response({'data': CollectionSerializer(collections, many=True).data, 'meta': meta})

    serializer = CollectionWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        collection = services.save_collection(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(CollectionDetailSerializer(collection).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def collection_detail(request, pk):
    """Retrieve, update or delete a collection"""
    collection = get_object_or_404(Collection.objects.select_related('banner'), pk=pk)

    if request.method == 'GET':
        return Response(CollectionDetailSerializer(collection).data)

    if request.method == 'DELETE':
        try:
            services.delete_collection(collection, user=request.user)
        except DomainError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = CollectionWriteSerializer(data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        collection = services.save_collection(serializer.validated_data, collection=collection, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(CollectionDetailSerializer(collection).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def collection_bulk_delete(request):
    return _bulk_delete(request, services.bulk_delete_collections)
