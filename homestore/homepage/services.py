"""
Homepage building blocks: hero, intro, footer, floating contacts, navigation
menu, featured catalog layout and the sale section.

Singletons (hero, intro, footer, sale settings) are read as "the most
recently updated row" and upserted in place. List-shaped blocks are replaced
wholesale with positions following the submitted order.
"""
import logging

from homestore.catalog.models import Catalog, Product
from homestore.content.models import Service
from homestore.core.exceptions import DomainError
from homestore.core.revalidation import (
    schedule_revalidation, TAG_HERO, TAG_INTRO, TAG_FOOTER, TAG_CONTACTS, TAG_MENU, TAG_FEATURED, TAG_SALE,
)
from homestore.core.utils import atomic_mutation, notify_entity
from homestore.media.services import get_asset_or_error
from .models import (
    SiteHero, SiteIntro, SiteFooter, FooterAddress, FooterContact, FooterSocialLink, SiteContact,
    FeaturedCatalogRow, FeaturedCatalogRowItem, SaleSectionSettings, HomepageSaleProduct, NavMenuItem,
)

logger = logging.getLogger(__name__)

DEFAULT_SALE_TITLE = 'SUMMER SALES'

MENU_ITEM_LEVELS = {'catalog': 1, 'subcatalog': 2}


def get_singleton(model):
    return model.objects.order_by('-updated_at').first()


def _apply(instance, data, fields):
    for field in fields:
        if field in data:
            setattr(instance, field, data[field])


def _actor(user):
    return user if getattr(user, 'is_authenticated', False) else None


# Hero

HERO_FIELDS = [
    'title', 'title_vi', 'subtitle', 'subtitle_vi', 'button_text', 'button_text_vi', 'button_link',
    'background_type', 'is_active',
]


def save_hero(data, user=None, invalidator=None):
    """Upsert the hero. The chosen background type must have its media set."""
    hero = get_singleton(SiteHero) or SiteHero()
    _apply(hero, data, HERO_FIELDS)
    if 'background_image_id' in data:
        hero.background_image = get_asset_or_error(data['background_image_id'], 'Background image')
    if 'background_video_id' in data:
        hero.background_video = get_asset_or_error(data['background_video_id'], 'Background video')

    if hero.background_type == 'image' and hero.background_image_id is None:
        raise DomainError('Background media is required')
    if hero.background_type == 'video' and hero.background_video_id is None:
        raise DomainError('Background media is required')

    with atomic_mutation('save', 'hero'):
        hero.save()
        schedule_revalidation([TAG_HERO], invalidator)

    logger.info(f"Hero {hero.pk} saved ({hero.background_type})")
    notify_entity('updated', 'Homepage', 'Hero section', creator=_actor(user), link='/homepage/hero')
    return hero


# Intro

INTRO_FIELDS = ['title', 'title_vi', 'subtitle', 'subtitle_vi', 'content_html', 'content_html_vi', 'is_active']


def save_intro(data, user=None, invalidator=None):
    intro = get_singleton(SiteIntro) or SiteIntro()
    _apply(intro, data, INTRO_FIELDS)
    if 'intro_image_id' in data:
        intro.intro_image = get_asset_or_error(data['intro_image_id'], 'Intro image')
    if 'background_image_id' in data:
        intro.background_image = get_asset_or_error(data['background_image_id'], 'Background image')
    if not intro.title:
        raise DomainError('Title is required.')

    with atomic_mutation('save', 'intro'):
        intro.save()
        schedule_revalidation([TAG_INTRO], invalidator)

    logger.info(f"Intro {intro.pk} saved")
    notify_entity('updated', 'Homepage', 'Intro section', creator=_actor(user), link='/homepage/intro')
    return intro


# Footer

FOOTER_FIELDS = ['intro', 'intro_vi', 'description', 'description_vi', 'map_embed_url']


def get_footer():
    """Footer singleton plus its ordered child lists"""
    return {
        'footer': get_singleton(SiteFooter),
        'addresses': list(FooterAddress.objects.order_by('position')),
        'contacts': list(FooterContact.objects.order_by('position')),
        'social_links': list(FooterSocialLink.objects.order_by('position')),
    }


def save_footer(data, user=None, invalidator=None):
    """Upsert the footer. Child lists present in ``data`` are replaced."""
    footer = get_singleton(SiteFooter) or SiteFooter()
    _apply(footer, data, FOOTER_FIELDS)

    with atomic_mutation('save', 'footer'):
        footer.save()
        if 'addresses' in data:
            FooterAddress.objects.all().delete()
            FooterAddress.objects.bulk_create([
                FooterAddress(
                    label=item['label'],
                    label_vi=item.get('label_vi'),
                    address=item['address'],
                    address_vi=item.get('address_vi'),
                    position=index,
                )
                for index, item in enumerate(data['addresses'])
            ])
        if 'contacts' in data:
            FooterContact.objects.all().delete()
            FooterContact.objects.bulk_create([
                FooterContact(
                    type=item['type'],
                    label=item.get('label'),
                    label_vi=item.get('label_vi'),
                    value=item['value'],
                    position=index,
                )
                for index, item in enumerate(data['contacts'])
            ])
        if 'social_links' in data:
            FooterSocialLink.objects.all().delete()
            FooterSocialLink.objects.bulk_create([
                FooterSocialLink(
                    platform=item['platform'],
                    url=item['url'],
                    is_active=item.get('is_active', True),
                    position=index,
                )
                for index, item in enumerate(data['social_links'])
            ])
        schedule_revalidation([TAG_FOOTER], invalidator)

    logger.info(f"Footer {footer.pk} saved")
    notify_entity('updated', 'Homepage', 'Footer', creator=_actor(user), link='/homepage/footer')
    return get_footer()


# Floating site contacts

def replace_site_contacts(contacts, user=None, invalidator=None):
    """Replace all site contacts. Entries with a blank value are dropped."""
    kept = [item for item in contacts if (item.get('value') or '').strip()]
    with atomic_mutation('update', 'site contacts'):
        SiteContact.objects.all().delete()
        SiteContact.objects.bulk_create([
            SiteContact(
                type=item['type'],
                label=item.get('label') or None,
                value=item['value'].strip(),
                is_active=item.get('is_active', True),
                position=index,
            )
            for index, item in enumerate(kept)
        ])
        schedule_revalidation([TAG_CONTACTS], invalidator)

    logger.info(f"Site contacts replaced ({len(kept)} kept of {len(contacts)})")
    notify_entity('updated', 'Homepage', 'Site contacts', creator=_actor(user), link='/homepage/contacts')
    return list(SiteContact.objects.order_by('position'))


# Navigation menu

def _menu_target(item):
    item_type = item['item_type']
    if item_type == 'service':
        service_id = item.get('service_id')
        service = Service.objects.filter(pk=service_id).first() if service_id else None
        if service is None:
            raise DomainError('Service menu items must reference an existing service.')
        return None, service

    catalog_id = item.get('catalog_id')
    catalog = Catalog.objects.filter(pk=catalog_id).first() if catalog_id else None
    expected_level = MENU_ITEM_LEVELS[item_type]
    if catalog is None or catalog.level != expected_level:
        raise DomainError(f'{item_type.capitalize()} menu items must reference a level {expected_level} catalog.')
    return catalog, None


def replace_nav_menu(items, user=None, invalidator=None):
    """Replace the navigation menu. Positions follow the submitted order."""
    resolved = []
    for item in items:
        catalog, service = _menu_target(item)
        resolved.append(NavMenuItem(
            item_type=item['item_type'],
            catalog=catalog,
            service=service,
            is_active=item.get('is_active', True),
        ))
    for index, menu_item in enumerate(resolved):
        menu_item.position = index

    with atomic_mutation('save', 'menu items'):
        NavMenuItem.objects.all().delete()
        NavMenuItem.objects.bulk_create(resolved)
        schedule_revalidation([TAG_MENU], invalidator)

    logger.info(f"Navigation menu replaced with {len(resolved)} items")
    notify_entity('updated', 'Homepage', 'Navigation menu', creator=_actor(user), link='/homepage/menu')
    return list(NavMenuItem.objects.select_related('catalog', 'service').order_by('position'))


# Featured catalog layout

def get_featured_rows():
    return list(
        FeaturedCatalogRow.objects.prefetch_related('items__catalog__image').order_by('position')
    )


def replace_featured_rows(rows, user=None, invalidator=None):
    """Replace the featured layout. Rows without catalogs are skipped."""
    rows = [row for row in rows if row.get('catalog_ids')]
    catalog_ids = {catalog_id for row in rows for catalog_id in row['catalog_ids']}
    found = set(Catalog.objects.filter(pk__in=catalog_ids).values_list('pk', flat=True))
    if found != catalog_ids:
        raise DomainError('One or more catalogs were not found.')

    with atomic_mutation('save', 'featured layout'):
        FeaturedCatalogRow.objects.all().delete()
        for position, row in enumerate(rows):
            saved = FeaturedCatalogRow.objects.create(position=position, columns=row['columns'])
            FeaturedCatalogRowItem.objects.bulk_create([
                FeaturedCatalogRowItem(row=saved, catalog_id=catalog_id, position=index)
                for index, catalog_id in enumerate(row['catalog_ids'])
            ])
        schedule_revalidation([TAG_FEATURED], invalidator)

    logger.info(f"Featured layout replaced with {len(rows)} rows")
    notify_entity('updated', 'Homepage', 'Featured catalogs', creator=_actor(user), link='/homepage/featured')
    return get_featured_rows()


# Sale section

def get_sale_settings():
    """Sale settings singleton, created with the default title on first access"""
    settings_row = get_singleton(SaleSectionSettings)
    if settings_row is None:
        settings_row = SaleSectionSettings.objects.create(title=DEFAULT_SALE_TITLE, is_active=True)
    return settings_row


def update_sale_settings(data, user=None, invalidator=None):
    settings_row = get_sale_settings()
    _apply(settings_row, data, ['title', 'title_vi', 'is_active'])
    with atomic_mutation('update', 'sale settings'):
        settings_row.save()
        schedule_revalidation([TAG_SALE], invalidator)
    notify_entity('updated', 'Homepage', 'Sale section', creator=_actor(user), link='/homepage/sale')
    return settings_row


def get_sale_products():
    return list(
        HomepageSaleProduct.objects.select_related('product').prefetch_related('product__gallery__asset')
        .order_by('position')
    )


def get_eligible_sale_products():
    """Active discounted products that are not in the sale section yet"""
    return list(
        Product.objects.filter(discount_price__isnull=False, is_active=True, sale_entry__isnull=True)
        .prefetch_related('gallery__asset').order_by('name')
    )


def add_sale_product(product_id, user=None, invalidator=None):
    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise DomainError('Product not found.', status_code=404)
    if HomepageSaleProduct.objects.filter(product=product).exists():
        raise DomainError('Product already in sale section')

    with atomic_mutation('add', 'sale product'):
        entry = HomepageSaleProduct.objects.create(product=product, position=HomepageSaleProduct.objects.count())
        schedule_revalidation([TAG_SALE], invalidator)

    logger.info(f"Product {product.pk} added to sale section at {entry.position}")
    return entry


def remove_sale_product(product_id, user=None, invalidator=None):
    with atomic_mutation('remove', 'sale product'):
        deleted, _ = HomepageSaleProduct.objects.filter(product_id=product_id).delete()
        schedule_revalidation([TAG_SALE], invalidator)
    logger.info(f"Product {product_id} removed from sale section ({deleted} rows)")
    return deleted


def reorder_sale_products(product_ids, user=None, invalidator=None):
    """Delete every sale row and re-insert them in the given order, atomically"""
    ordered = list(dict.fromkeys(product_ids))
    found = set(Product.objects.filter(pk__in=ordered).values_list('pk', flat=True))
    if len(found) != len(ordered):
        raise DomainError('One or more products were not found.')

    with atomic_mutation('update', 'selected products'):
        HomepageSaleProduct.objects.all().delete()
        HomepageSaleProduct.objects.bulk_create([
            HomepageSaleProduct(product_id=product_id, position=index)
            for index, product_id in enumerate(ordered)
        ])
        schedule_revalidation([TAG_SALE], invalidator)

    logger.info(f"Sale section reordered ({len(ordered)} products)")
    return get_sale_products()
