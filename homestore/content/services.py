"""
Service, project and post mutations.

The three entities share one shape: a localized title, unique slug, HTML
body, SEO fields and an ordered gallery whose primary image doubles as the
entity's main image.
"""
import logging
from dataclasses import dataclass
from typing import List, Type

from django.db import models

from homestore.core.revalidation import schedule_revalidation, TAG_SERVICES, TAG_MENU, TAG_PROJECTS, TAG_POSTS
from homestore.core.utils import (
    resolve_slug, notify_entity, create_notification, atomic_mutation, delete_instance, bulk_delete
)
from homestore.media.services import gallery_items
from .models import Service, ServiceAsset, Project, ProjectAsset, Post, PostAsset

logger = logging.getLogger(__name__)

SEO_FIELDS = [
    'seo_title', 'seo_title_vi', 'seo_description', 'seo_description_vi', 'seo_keywords', 'seo_keywords_vi',
]


@dataclass(frozen=True)
class ContentKind:
    model: Type[models.Model]
    gallery_model: Type[models.Model]
    owner_field: str
    image_field: str
    label: str
    plural: str
    link: str
    tags: List[str]
    fields: List[str]


SERVICE = ContentKind(
    model=Service,
    gallery_model=ServiceAsset,
    owner_field='service',
    image_field='image',
    label='Service',
    plural='Services',
    link='/services',
    tags=[TAG_SERVICES, TAG_MENU],
    fields=['title', 'title_vi', 'description_html', 'description_html_vi', 'is_active'] + SEO_FIELDS,
)

PROJECT = ContentKind(
    model=Project,
    gallery_model=ProjectAsset,
    owner_field='project',
    image_field='image',
    label='Project',
    plural='Projects',
    link='/projects',
    tags=[TAG_PROJECTS],
    fields=['title', 'title_vi', 'content_html', 'content_html_vi', 'is_active'] + SEO_FIELDS,
)

POST = ContentKind(
    model=Post,
    gallery_model=PostAsset,
    owner_field='post',
    image_field='featured_image',
    label='Post',
    plural='Posts',
    link='/blogs',
    tags=[TAG_POSTS],
    fields=['title', 'title_vi', 'excerpt', 'excerpt_vi', 'content_html', 'content_html_vi', 'is_active'] + SEO_FIELDS,
)


def replace_gallery(kind, instance, images):
    """Replace the gallery and return the primary asset (None when empty)"""
    items, assets = gallery_items(images)
    kind.gallery_model.objects.filter(**{kind.owner_field: instance}).delete()
    kind.gallery_model.objects.bulk_create([
        kind.gallery_model(
            **{kind.owner_field: instance},
            asset=assets[item['asset_id']],
            position=index,
            is_primary=item['is_primary'],
        )
        for index, item in enumerate(items)
    ])
    primary = next((item for item in items if item['is_primary']), None)
    return assets[primary['asset_id']] if primary else None


def save_content(kind, data, instance=None, user=None, invalidator=None):
    """Create or update a service, project or post"""
    creating = instance is None
    if creating:
        instance = kind.model(created_by=user if getattr(user, 'is_authenticated', False) else None)

    title = data.get('title', instance.title)
    slug = data.get('slug') or (None if creating else instance.slug)
    instance.slug = resolve_slug(kind.model, slug, title, exclude_pk=instance.pk)

    for field in kind.fields:
        if field in data:
            setattr(instance, field, data[field])

    entity = kind.label.lower()
    with atomic_mutation('create' if creating else 'update', entity):
        instance.save()
        if 'images' in data:
            setattr(instance, kind.image_field, replace_gallery(kind, instance, data['images']))
            instance.save(update_fields=[kind.image_field, 'updated_at'])
        schedule_revalidation(kind.tags, invalidator)

    action = 'created' if creating else 'updated'
    logger.info(f"{kind.label} {instance.pk} ({instance.slug}) {action}")
    notify_entity(action, kind.label, instance.title, creator=user, link=f'{kind.link}/{instance.pk}')
    return instance


def delete_content(kind, instance, user=None, invalidator=None):
    title = instance.title
    delete_instance(instance, kind.label.lower())
    schedule_revalidation(kind.tags, invalidator)
    notify_entity('deleted', kind.label, title, creator=user)


def bulk_delete_content(kind, ids, user=None, invalidator=None):
    deleted = bulk_delete(kind.model, ids, kind.label.lower())
    schedule_revalidation(kind.tags, invalidator)
    create_notification(
        type='entity_deleted',
        title=f'{kind.plural} deleted',
        message=f'{deleted} {kind.plural.lower()} were deleted.',
        creator=user,
    )
    return deleted
