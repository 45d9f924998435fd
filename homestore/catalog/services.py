"""
Catalog, product and collection mutations.

Every create/update runs in one transaction, emits a broadcast notification
and schedules storefront revalidation for the tags it touched.
"""
import logging

from django.db.models import Max

from homestore.core.exceptions import DomainError
from homestore.core.revalidation import (
    schedule_revalidation, TAG_CATALOGS, TAG_MENU, TAG_PRODUCTS, TAG_COLLECTIONS, TAG_SALE
)
from homestore.core.utils import (
    resolve_slug, notify_entity, create_notification, atomic_mutation, delete_instance, bulk_delete
)
from homestore.homepage.models import HomepageSaleProduct
from homestore.media.services import get_asset_or_error, gallery_items
from .models import (
    Catalog, Product, ProductAsset, Collection, CollectionProduct, CatalogCollection, RecommendedProduct
)

logger = logging.getLogger(__name__)

CATALOG_TAGS = [TAG_CATALOGS, TAG_MENU, TAG_PRODUCTS]
COLLECTION_TAGS = [TAG_COLLECTIONS, TAG_CATALOGS]

CATALOG_FIELDS = [
    'name', 'name_vi', 'description', 'description_vi', 'show_on_home', 'display_order', 'product_image_ratio',
]
PRODUCT_FIELDS = [
    'name', 'name_vi', 'description', 'description_vi', 'short_description', 'short_description_vi',
    'base_price', 'discount_price', 'show_price', 'is_active', 'dimensions',
]
COLLECTION_FIELDS = ['name', 'name_vi', 'description', 'description_vi', 'is_active']


def _actor(user):
    if user is not None and getattr(user, 'is_authenticated', False):
        return user
    return None


def _apply_fields(instance, data, fields):
    for field in fields:
        if field in data:
            setattr(instance, field, data[field])


# Catalogs

def resolve_parent(parent_id, catalog=None):
    """Parent for a catalog. Must exist and be a level-1 catalog."""
    if not parent_id:
        return None
    if catalog is not None and catalog.pk == parent_id:
        raise DomainError('A catalog cannot be its own parent.')
    parent = Catalog.objects.filter(pk=parent_id).first()
    if parent is None:
        raise DomainError('Parent catalog not found.')
    if parent.level != 1:
        raise DomainError('Parent catalog must be a top-level catalog.')
    return parent


def save_catalog(data, catalog=None, user=None, invalidator=None):
    """Create or update a catalog. Level is always derived from the parent."""
    creating = catalog is None
    if creating:
        catalog = Catalog(created_by=_actor(user))

    name = data.get('name', catalog.name)
    slug = data.get('slug') or (None if creating else catalog.slug)
    catalog.slug = resolve_slug(Catalog, slug, name, exclude_pk=catalog.pk)

    if 'parent_id' in data:
        parent = resolve_parent(data['parent_id'], None if creating else catalog)
        if not creating:
            if parent is not None and catalog.children.exists():
                raise DomainError('A catalog with subcatalogs cannot be moved under another catalog.')
            if parent is None and catalog.products.exists():
                raise DomainError('A catalog with products must stay a subcatalog.')
        catalog.parent = parent

    if 'image_id' in data:
        catalog.image = get_asset_or_error(data['image_id'])

    _apply_fields(catalog, data, CATALOG_FIELDS)

    with atomic_mutation('create' if creating else 'update', 'catalog'):
        catalog.save()
        if 'collection_ids' in data:
            _replace_catalog_collections(catalog, data['collection_ids'])
        schedule_revalidation(CATALOG_TAGS, invalidator)

    action = 'created' if creating else 'updated'
    logger.info(f"Catalog {catalog.pk} ({catalog.slug}) {action}, level {catalog.level}")
    notify_entity(action, 'Catalog', catalog.name, creator=user, link=f'/catalogs/{catalog.pk}')
    return catalog


def _replace_catalog_collections(catalog, collection_ids):
    collection_ids = list(dict.fromkeys(collection_ids or []))
    found = Collection.objects.filter(pk__in=collection_ids).count()
    if found != len(collection_ids):
        raise DomainError('One or more collections were not found.')
    CatalogCollection.objects.filter(catalog=catalog).delete()
    CatalogCollection.objects.bulk_create([
        CatalogCollection(catalog=catalog, collection_id=collection_id) for collection_id in collection_ids
    ])


def toggle_show_on_home(catalog, value=None, user=None, invalidator=None):
    catalog.show_on_home = (not catalog.show_on_home) if value is None else bool(value)
    with atomic_mutation('update', 'catalog'):
        catalog.save(update_fields=['show_on_home', 'updated_at'])
        schedule_revalidation([TAG_CATALOGS], invalidator)
    notify_entity('updated', 'Catalog', catalog.name, creator=user, link=f'/catalogs/{catalog.pk}')
    return catalog


def delete_catalog(catalog, user=None, invalidator=None):
    name = catalog.name
    delete_instance(catalog, 'catalog')
    schedule_revalidation(CATALOG_TAGS, invalidator)
    notify_entity('deleted', 'Catalog', name, creator=user)


def bulk_delete_catalogs(ids, user=None, invalidator=None):
    deleted = bulk_delete(Catalog, ids, 'catalog')
    schedule_revalidation(CATALOG_TAGS, invalidator)
    _notify_bulk_delete('Catalogs', deleted, user)
    return deleted


def _notify_bulk_delete(entity_plural, count, user):
    create_notification(
        type='entity_deleted',
        title=f'{entity_plural} deleted',
        message=f'{count} {entity_plural.lower()} were deleted.',
        creator=user,
    )


# Products

def resolve_product_catalog(catalog_id):
    """Products can only be attached to level-2 catalogs"""
    if not catalog_id:
        return None
    catalog = Catalog.objects.filter(pk=catalog_id).first()
    if catalog is None:
        raise DomainError('Catalog not found.')
    if catalog.level != 2:
        raise DomainError('Products can only be assigned to a subcatalog.')
    return catalog


def sync_sale_membership(product):
    """
    Keep the homepage sale section in line with the discount price.
    Returns True when the sale table changed.
    """
    entries = HomepageSaleProduct.objects.filter(product=product)
    if product.discount_price is None:
        deleted, _ = entries.delete()
        return deleted > 0

    if entries.exists():
        return False
    max_position = HomepageSaleProduct.objects.aggregate(value=Max('position'))['value']
    HomepageSaleProduct.objects.create(
        product=product,
        position=0 if max_position is None else max_position + 1,
    )
    return True


def replace_product_gallery(product, images):
    """Replace the gallery with ``images`` in list order"""
    images, assets = gallery_items(images)

    ProductAsset.objects.filter(product=product).delete()
    ProductAsset.objects.bulk_create([
        ProductAsset(
            product=product,
            asset=assets[image['asset_id']],
            position=index,
            is_primary=image['is_primary'],
            focus_point=image.get('focus_point'),
            aspect_ratio=image.get('aspect_ratio') or 'original',
            object_fit=image.get('object_fit') or 'cover',
        )
        for index, image in enumerate(images)
    ])


def save_product(data, product=None, user=None, invalidator=None):
    """Create or update a product, syncing sale membership and the gallery"""
    creating = product is None
    if creating:
        product = Product(created_by=_actor(user))

    name = data.get('name', product.name)
    slug = data.get('slug') or (None if creating else product.slug)
    product.slug = resolve_slug(Product, slug, name, exclude_pk=product.pk)

    if 'catalog_id' in data:
        product.catalog = resolve_product_catalog(data['catalog_id'])

    _apply_fields(product, data, PRODUCT_FIELDS)

    with atomic_mutation('create' if creating else 'update', 'product'):
        product.save()
        if 'images' in data:
            replace_product_gallery(product, data['images'])
        sale_changed = sync_sale_membership(product)
        tags = [TAG_PRODUCTS] + ([TAG_SALE] if sale_changed else [])
        schedule_revalidation(tags, invalidator)

    action = 'created' if creating else 'updated'
    logger.info(f"Product {product.pk} ({product.slug}) {action}, sale changed: {sale_changed}")
    notify_entity(action, 'Product', product.name, creator=user, link=f'/products/{product.pk}')
    return product


def delete_product(product, user=None, invalidator=None):
    name = product.name
    in_sale = HomepageSaleProduct.objects.filter(product=product).exists()
    delete_instance(product, 'product')
    schedule_revalidation([TAG_PRODUCTS] + ([TAG_SALE] if in_sale else []), invalidator)
    notify_entity('deleted', 'Product', name, creator=user)


def bulk_delete_products(ids, user=None, invalidator=None):
    deleted = bulk_delete(Product, ids, 'product')
    schedule_revalidation([TAG_PRODUCTS, TAG_SALE], invalidator)
    _notify_bulk_delete('Products', deleted, user)
    return deleted


def get_recommended_products(product):
    return [
        link.recommended_product
        for link in product.recommendations.select_related('recommended_product').order_by('position')
    ]


def set_recommended_products(product, product_ids, user=None, invalidator=None):
    """
    Replace the recommendation list. Positions follow the list order;
    the product itself and repeated ids are dropped.
    """
    ordered = []
    for product_id in product_ids or []:
        if product_id != product.pk and product_id not in ordered:
            ordered.append(product_id)

    found = Product.objects.in_bulk(ordered)
    if len(found) != len(ordered):
        raise DomainError('One or more recommended products were not found.')

    with atomic_mutation('update', 'recommended products'):
        RecommendedProduct.objects.filter(source_product=product).delete()
        RecommendedProduct.objects.bulk_create([
            RecommendedProduct(source_product=product, recommended_product=found[product_id], position=index)
            for index, product_id in enumerate(ordered)
        ])
        schedule_revalidation([TAG_PRODUCTS], invalidator)

    notify_entity('updated', 'Product', product.name, creator=user, link=f'/products/{product.pk}')
    return [found[product_id] for product_id in ordered]


# Collections

def save_collection(data, collection=None, user=None, invalidator=None):
    creating = collection is None
    if creating:
        collection = Collection(created_by=_actor(user))

    name = data.get('name', collection.name)
    slug = data.get('slug') or (None if creating else collection.slug)
    collection.slug = resolve_slug(Collection, slug, name, exclude_pk=collection.pk)

    if 'banner_id' in data:
        collection.banner = get_asset_or_error(data['banner_id'], 'Banner')

    _apply_fields(collection, data, COLLECTION_FIELDS)

    with atomic_mutation('create' if creating else 'update', 'collection'):
        collection.save()
        if 'product_ids' in data:
            product_ids = list(dict.fromkeys(data['product_ids'] or []))
            if Product.objects.filter(pk__in=product_ids).count() != len(product_ids):
                raise DomainError('One or more products were not found.')
            CollectionProduct.objects.filter(collection=collection).delete()
            CollectionProduct.objects.bulk_create([
                CollectionProduct(collection=collection, product_id=product_id) for product_id in product_ids
            ])
        if 'catalog_ids' in data:
            catalog_ids = list(dict.fromkeys(data['catalog_ids'] or []))
            if Catalog.objects.filter(pk__in=catalog_ids).count() != len(catalog_ids):
                raise DomainError('One or more catalogs were not found.')
            CatalogCollection.objects.filter(collection=collection).delete()
            CatalogCollection.objects.bulk_create([
                CatalogCollection(catalog_id=catalog_id, collection=collection) for catalog_id in catalog_ids
            ])
        schedule_revalidation(COLLECTION_TAGS, invalidator)

    action = 'created' if creating else 'updated'
    logger.info(f"Collection {collection.pk} ({collection.slug}) {action}")
    notify_entity(action, 'Collection', collection.name, creator=user, link=f'/collections/{collection.pk}')
    return collection


def delete_collection(collection, user=None, invalidator=None):
    name = collection.name
    delete_instance(collection, 'collection')
    schedule_revalidation(COLLECTION_TAGS, invalidator)
    notify_entity('deleted', 'Collection', name, creator=user)


def bulk_delete_collections(ids, user=None, invalidator=None):
    deleted = bulk_delete(Collection, ids, 'collection')
    schedule_revalidation(COLLECTION_TAGS, invalidator)
    _notify_bulk_delete('Collections', deleted, user)
    return deleted
