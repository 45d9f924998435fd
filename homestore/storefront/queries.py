"""
Read models for the public storefront.

Every query returns plain localized dicts so results can be cached under
their revalidation tags. Only active rows are ever exposed.
"""
from django.db.models import F, Prefetch, Q
from django.db.models.functions import Coalesce

from homestore.catalog.models import Catalog, Product, ProductAsset, Collection, RecommendedProduct
from homestore.content.models import Service, Project, Post
from homestore.core.i18n import get_localized_text
from homestore.core.revalidation import (
    TAG_PRODUCTS, TAG_CATALOGS, TAG_COLLECTIONS, TAG_SERVICES, TAG_PROJECTS, TAG_POSTS,
    TAG_MENU, TAG_FOOTER, TAG_HERO, TAG_INTRO, TAG_SALE, TAG_FEATURED, TAG_CONTACTS,
)
from homestore.homepage.models import (
    SiteHero, SiteIntro, SiteFooter, FooterAddress, FooterContact, FooterSocialLink, SiteContact,
    FeaturedCatalogRow, SaleSectionSettings, HomepageSaleProduct, NavMenuItem,
)
from .cache import cached_query

SEARCH_LIMIT = 10
LATEST_POSTS_LIMIT = 6

PRODUCT_SORTS = {
    'newest': ['-created_at'],
    'price_asc': [F('effective_price').asc(), 'name'],
    'price_desc': [F('effective_price').desc(), 'name'],
    'name': ['name'],
}
DEFAULT_SORT = 'newest'


def _text(obj, field, locale):
    return get_localized_text(obj, field, locale)


def _price(value):
    return str(value) if value is not None else None


def _image(asset):
    if asset is None:
        return None
    return {'url': asset.url, 'alt_text': asset.alt_text}


def _active_products():
    return Product.objects.filter(is_active=True).prefetch_related(
        Prefetch('gallery', queryset=ProductAsset.objects.select_related('asset').order_by('position'))
    )


def _product_card(product, locale):
    primary = product.primary_image()
    return {
        'id': product.pk,
        'name': _text(product, 'name', locale),
        'slug': product.slug,
        'base_price': _price(product.base_price),
        'discount_price': _price(product.discount_price),
        'show_price': product.show_price,
        'is_on_sale': product.is_on_sale,
        'image': _image(primary.asset) if primary else None,
    }


def _catalog_card(catalog, locale):
    return {
        'id': catalog.pk,
        'name': _text(catalog, 'name', locale),
        'slug': catalog.slug,
        'level': catalog.level,
        'image': _image(catalog.image),
    }


def _collection_card(collection, locale, products=None):
    data = {
        'id': collection.pk,
        'name': _text(collection, 'name', locale),
        'slug': collection.slug,
        'description': _text(collection, 'description', locale),
        'banner': _image(collection.banner),
    }
    if products is not None:
        data['products'] = [_product_card(p, locale) for p in products]
    return data


def _gallery(items):
    return [
        {
            'url': item.asset.url,
            'alt_text': item.asset.alt_text,
            'position': item.position,
            'is_primary': item.is_primary,
        }
        for item in sorted(items, key=lambda item: item.position)
    ]


def _entry_card(entry, locale, image_field='image'):
    """Summary of a service, project or post"""
    data = {
        'id': entry.pk,
        'title': _text(entry, 'title', locale),
        'slug': entry.slug,
        'image': _image(getattr(entry, image_field)),
    }
    if isinstance(entry, Post):
        data['excerpt'] = _text(entry, 'excerpt', locale)
        data['published_at'] = entry.created_at.isoformat()
    return data


def _seo(entry, locale):
    return {
        'title': _text(entry, 'seo_title', locale) or _text(entry, 'title', locale),
        'description': _text(entry, 'seo_description', locale),
        'keywords': _text(entry, 'seo_keywords', locale),
    }


def _entry_detail(entry, locale, body_field, image_field='image'):
    data = _entry_card(entry, locale, image_field)
    data[body_field] = _text(entry, body_field, locale)
    data['gallery'] = _gallery(entry.gallery.select_related('asset'))
    data['seo'] = _seo(entry, locale)
    return data


def _latest(model):
    return model.objects.filter(is_active=True).order_by('-updated_at').first()


# Layout blocks

def _sale_section(locale):
    settings_row = SaleSectionSettings.objects.order_by('-updated_at').first()
    if settings_row is None or not settings_row.is_active:
        return None
    entries = HomepageSaleProduct.objects.filter(product__is_active=True).select_related('product').prefetch_related(
        'product__gallery__asset'
    ).order_by('position')
    return {
        'title': _text(settings_row, 'title', locale),
        'products': [_product_card(entry.product, locale) for entry in entries],
    }


@cached_query('home', tags=[
    TAG_HERO, TAG_INTRO, TAG_FEATURED, TAG_CATALOGS, TAG_SALE, TAG_PRODUCTS,
    TAG_COLLECTIONS, TAG_SERVICES, TAG_PROJECTS, TAG_POSTS,
])
def get_home(locale):
    """Everything the homepage renders"""
    hero = _latest(SiteHero)
    intro = _latest(SiteIntro)

    featured_rows = []
    rows = FeaturedCatalogRow.objects.prefetch_related('items__catalog__image').order_by('position')
    for row in rows:
        items = [item for item in row.items.all() if item.catalog.image_id]
        if items:
            featured_rows.append({
                'columns': row.columns,
                'catalogs': [_catalog_card(item.catalog, locale) for item in items],
            })

    return {
        'hero': {
            'title': _text(hero, 'title', locale),
            'subtitle': _text(hero, 'subtitle', locale),
            'button_text': _text(hero, 'button_text', locale),
            'button_link': hero.button_link,
            'background_type': hero.background_type,
            'background_image': _image(hero.background_image),
            'background_video': _image(hero.background_video),
        } if hero else None,
        'intro': {
            'title': _text(intro, 'title', locale),
            'subtitle': _text(intro, 'subtitle', locale),
            'content_html': _text(intro, 'content_html', locale),
            'intro_image': _image(intro.intro_image),
            'background_image': _image(intro.background_image),
        } if intro else None,
        'featured_rows': featured_rows,
        'home_catalogs': [
            _catalog_card(catalog, locale)
            for catalog in Catalog.objects.filter(show_on_home=True).select_related('image')
            .order_by('display_order', 'name')
        ],
        'sale': _sale_section(locale),
        'collections': [
            _collection_card(collection, locale)
            for collection in Collection.objects.filter(is_active=True).select_related('banner').order_by('-updated_at')
        ],
        'services': [
            _entry_card(service, locale)
            for service in Service.objects.filter(is_active=True).select_related('image').order_by('title')
        ],
        'projects': [
            _entry_card(project, locale)
            for project in Project.objects.filter(is_active=True).select_related('image').order_by('-created_at')
        ],
        'posts': [
            _entry_card(post, locale, 'featured_image')
            for post in Post.objects.filter(is_active=True).select_related('featured_image')
            .order_by('-created_at')[:LATEST_POSTS_LIMIT]
        ],
    }


@cached_query('menu', tags=[TAG_MENU, TAG_CATALOGS, TAG_SERVICES])
def get_menu(locale):
    """Active navigation entries resolved to {type, label, slug, children}"""
    items = NavMenuItem.objects.filter(is_active=True).select_related('catalog', 'service').prefetch_related(
        'catalog__children'
    ).order_by('position')

    menu = []
    for item in items:
        if item.item_type == 'service':
            if item.service is None or not item.service.is_active:
                continue
            menu.append({
                'type': 'service',
                'label': _text(item.service, 'title', locale),
                'slug': item.service.slug,
                'children': [],
            })
            continue

        if item.catalog is None:
            continue
        children = []
        if item.item_type == 'catalog':
            children = [
                {'label': _text(child, 'name', locale), 'slug': child.slug}
                for child in sorted(item.catalog.children.all(), key=lambda c: (c.display_order, c.name))
            ]
        menu.append({
            'type': item.item_type,
            'label': _text(item.catalog, 'name', locale),
            'slug': item.catalog.slug,
            'children': children,
        })
    return menu


@cached_query('footer', tags=[TAG_FOOTER])
def get_footer(locale):
    footer = SiteFooter.objects.order_by('-updated_at').first()
    return {
        'intro': _text(footer, 'intro', locale) if footer else '',
        'description': _text(footer, 'description', locale) if footer else None,
        'map_embed_url': footer.map_embed_url if footer else None,
        'addresses': [
            {'label': _text(a, 'label', locale), 'address': _text(a, 'address', locale)}
            for a in FooterAddress.objects.order_by('position')
        ],
        'contacts': [
            {'type': c.type, 'label': _text(c, 'label', locale), 'value': c.value}
            for c in FooterContact.objects.order_by('position')
        ],
        'social_links': [
            {'platform': s.platform, 'url': s.url}
            for s in FooterSocialLink.objects.filter(is_active=True).order_by('position')
        ],
    }


@cached_query('contacts', tags=[TAG_CONTACTS])
def get_site_contacts():
    return [
        {'type': c.type, 'label': c.label, 'value': c.value}
        for c in SiteContact.objects.filter(is_active=True).order_by('position')
    ]


# Catalog and product pages

def _sorted_products(queryset, sort):
    order = PRODUCT_SORTS.get(sort) or PRODUCT_SORTS[DEFAULT_SORT]
    return queryset.annotate(effective_price=Coalesce('discount_price', 'base_price')).order_by(*order)


@cached_query('catalog_page', tags=[TAG_CATALOGS, TAG_PRODUCTS, TAG_COLLECTIONS])
def get_catalog_page(slug, locale, sort=DEFAULT_SORT):
    """
    Level-1 catalogs list their subcatalogs and collections with products;
    level-2 catalogs list their own products in the requested order.
    """
    catalog = Catalog.objects.select_related('image', 'parent').filter(slug=slug).first()
    if catalog is None:
        return None

    data = _catalog_card(catalog, locale)
    data['description'] = _text(catalog, 'description', locale)
    data['product_image_ratio'] = catalog.product_image_ratio

    if catalog.level == 1:
        data['subcatalogs'] = [
            dict(_catalog_card(child, locale), products=[
                _product_card(p, locale) for p in _sorted_products(_active_products().filter(catalog=child), sort)
            ])
            for child in catalog.children.select_related('image').order_by('display_order', 'name')
        ]
        data['collections'] = [
            _collection_card(collection, locale, products=_active_products().filter(collections=collection))
            for collection in catalog.collections.filter(is_active=True).select_related('banner').order_by('name')
        ]
    else:
        data['parent'] = _catalog_card(catalog.parent, locale) if catalog.parent_id else None
        data['products'] = [
            _product_card(p, locale) for p in _sorted_products(_active_products().filter(catalog=catalog), sort)
        ]
    return data


@cached_query('product_page', tags=[TAG_PRODUCTS, TAG_CATALOGS])
def get_product_page(slug, locale):
    product = _active_products().select_related('catalog__parent').filter(slug=slug).first()
    if product is None:
        return None

    breadcrumb = []
    if product.catalog_id:
        if product.catalog.parent_id:
            parent = product.catalog.parent
            breadcrumb.append({'name': _text(parent, 'name', locale), 'slug': parent.slug})
        breadcrumb.append({'name': _text(product.catalog, 'name', locale), 'slug': product.catalog.slug})

    recommended = RecommendedProduct.objects.filter(
        source_product=product, recommended_product__is_active=True
    ).select_related('recommended_product').prefetch_related('recommended_product__gallery__asset').order_by('position')

    data = _product_card(product, locale)
    data.update({
        'description': _text(product, 'description', locale),
        'short_description': _text(product, 'short_description', locale),
        'dimensions': product.dimensions,
        'gallery': [
            {
                'url': item.asset.url,
                'alt_text': item.asset.alt_text,
                'position': item.position,
                'is_primary': item.is_primary,
                'focus_point': item.focus_point,
                'aspect_ratio': item.aspect_ratio,
                'object_fit': item.object_fit,
            }
            for item in product.gallery.all()
        ],
        'breadcrumb': breadcrumb,
        'image_ratio': product.catalog.product_image_ratio if product.catalog_id else None,
        'recommended': [_product_card(r.recommended_product, locale) for r in recommended],
    })
    return data


@cached_query('sale_page', tags=[TAG_SALE, TAG_PRODUCTS])
def get_sale_page(locale):
    """Sale settings and products, even when the homepage block is hidden"""
    settings_row = SaleSectionSettings.objects.order_by('-updated_at').first()
    entries = HomepageSaleProduct.objects.filter(product__is_active=True).select_related('product').prefetch_related(
        'product__gallery__asset'
    ).order_by('position')
    return {
        'title': _text(settings_row, 'title', locale) if settings_row else None,
        'is_active': settings_row.is_active if settings_row else False,
        'products': [_product_card(entry.product, locale) for entry in entries],
    }


@cached_query('collections', tags=[TAG_COLLECTIONS, TAG_PRODUCTS])
def get_collections(locale):
    return [
        _collection_card(collection, locale, products=_active_products().filter(collections=collection))
        for collection in Collection.objects.filter(is_active=True).select_related('banner').order_by('-updated_at')
    ]


# Services, projects and blog

@cached_query('service_page', tags=[TAG_SERVICES])
def get_service(slug, locale):
    service = Service.objects.filter(slug=slug, is_active=True).select_related('image').first()
    if service is None:
        return None
    return _entry_detail(service, locale, 'description_html')


@cached_query('projects', tags=[TAG_PROJECTS])
def get_projects(locale):
    return [
        _entry_card(project, locale)
        for project in Project.objects.filter(is_active=True).select_related('image').order_by('-created_at')
    ]


@cached_query('project_page', tags=[TAG_PROJECTS])
def get_project(slug, locale):
    project = Project.objects.filter(slug=slug, is_active=True).select_related('image').first()
    if project is None:
        return None
    return _entry_detail(project, locale, 'content_html')


@cached_query('posts', tags=[TAG_POSTS])
def get_posts(locale):
    return [
        _entry_card(post, locale, 'featured_image')
        for post in Post.objects.filter(is_active=True).select_related('featured_image').order_by('-created_at')
    ]


@cached_query('post_page', tags=[TAG_POSTS])
def get_post(slug, locale):
    post = Post.objects.filter(slug=slug, is_active=True).select_related('featured_image').first()
    if post is None:
        return None
    return _entry_detail(post, locale, 'content_html', 'featured_image')


def search_products(query, locale):
    """Active products whose name or slug contains the query"""
    query = (query or '').strip()
    if not query:
        return []
    products = _active_products().filter(
        Q(name__icontains=query) | Q(slug__icontains=query)
    ).order_by('name')[:SEARCH_LIMIT]
    return [_product_card(product, locale) for product in products]
