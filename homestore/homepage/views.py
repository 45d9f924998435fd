from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from homestore.catalog.models import Product
from homestore.catalog.serializers import ProductListSerializer
from homestore.core.exceptions import DomainError, error_response, invalid_fields_response
from .models import SiteHero, SiteIntro, SiteContact, NavMenuItem
from .serializers import (
    SiteHeroSerializer, SiteIntroSerializer, FooterBundleSerializer, SiteContactSerializer,
    NavMenuItemSerializer, FeaturedCatalogRowSerializer, SaleSectionSettingsSerializer,
    HomepageSaleProductSerializer,
    HeroWriteSerializer, IntroWriteSerializer, FooterWriteSerializer, SiteContactsWriteSerializer,
    NavMenuWriteSerializer, FeaturedLayoutWriteSerializer, SaleSettingsWriteSerializer,
    SaleProductInputSerializer, SaleReorderSerializer,
)
from . import services


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def hero(request):
    """Get or upsert the homepage hero"""
    if request.method == 'GET':
        instance = services.get_singleton(SiteHero)
        return Response(SiteHeroSerializer(instance).data if instance else None)

    serializer = HeroWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        instance = services.save_hero(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(SiteHeroSerializer(instance).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def intro(request):
    """Get or upsert the homepage intro"""
    if request.method == 'GET':
        instance = services.get_singleton(SiteIntro)
        return Response(SiteIntroSerializer(instance).data if instance else None)

    serializer = IntroWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        instance = services.save_intro(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(SiteIntroSerializer(instance).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def footer(request):
    """Get or upsert the footer with its addresses, contacts and social links"""
    if request.method == 'GET':
        return Response(FooterBundleSerializer(services.get_footer()).data)

    serializer = FooterWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        bundle = services.save_footer(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(FooterBundleSerializer(bundle).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def site_contacts(request):
    if request.method == 'GET':
        contacts = SiteContact.objects.order_by('position')
        return Response({'data': SiteContactSerializer(contacts, many=True).data})

    serializer = SiteContactsWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        contacts = services.replace_site_contacts(serializer.validated_data['contacts'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'data': SiteContactSerializer(contacts, many=True).data})


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def nav_menu(request):
    if request.method == 'GET':
        items = NavMenuItem.objects.select_related('catalog', 'service').order_by('position')
        return Response({'data': NavMenuItemSerializer(items, many=True).data})

    serializer = NavMenuWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        items = services.replace_nav_menu(serializer.validated_data['items'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'data': NavMenuItemSerializer(items, many=True).data})


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def featured_layout(request):
    if request.method == 'GET':
        return Response({'data': FeaturedCatalogRowSerializer(services.get_featured_rows(), many=True).data})

    serializer = FeaturedLayoutWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        rows = services.replace_featured_rows(serializer.validated_data['rows'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'data': FeaturedCatalogRowSerializer(rows, many=True).data})


# Sale section

@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def sale_settings(request):
    if request.method == 'GET':
        return Response(SaleSectionSettingsSerializer(services.get_sale_settings()).data)

    serializer = SaleSettingsWriteSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        settings_row = services.update_sale_settings(serializer.validated_data, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(SaleSectionSettingsSerializer(settings_row).data)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def sale_products(request):
    """List the sale section or add a product to it"""
    if request.method == 'GET':
        return Response({'data': HomepageSaleProductSerializer(services.get_sale_products(), many=True).data})

    serializer = SaleProductInputSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        entry = services.add_sale_product(serializer.validated_data['product_id'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(HomepageSaleProductSerializer(entry).data, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def sale_product_remove(request, product_id):
    get_object_or_404(Product, pk=product_id)
    try:
        services.remove_sale_product(product_id, user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def sale_products_reorder(request):
    """Replace the sale section with the given product order"""
    serializer = SaleReorderSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_fields_response(serializer.errors)
    try:
        entries = services.reorder_sale_products(serializer.validated_data['product_ids'], user=request.user)
    except DomainError as e:
        return error_response(e)
    return Response({'data': HomepageSaleProductSerializer(entries, many=True).data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sale_eligible_products(request):
    """Discounted active products not yet in the sale section"""
    products = services.get_eligible_sale_products()
    return Response({'data': ProductListSerializer(products, many=True).data})
