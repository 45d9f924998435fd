"""Shared helpers: slugs, notifications, listing pagination and deletes"""
import logging
import math
import re
import unicodedata
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import ProtectedError, RestrictedError, Q

from .exceptions import DomainError, SlugConflictError, ReferencedError
from .models import Notification

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

DEFAULT_PAGE_SIZE = 10


def slugify(text):
    """URL slug with Vietnamese diacritics folded to ASCII"""
    if not text:
        return ''
    value = unicodedata.normalize('NFD', str(text).lower())
    value = ''.join(ch for ch in value if unicodedata.category(ch) != 'Mn')
    value = value.replace('đ', 'd').replace('Đ', 'd')
    value = re.sub(r'[^a-z0-9\s-]', '', value).strip()
    value = re.sub(r'\s+', '-', value)
    value = re.sub(r'-+', '-', value)
    return value.strip('-')


def is_valid_slug(slug):
    return bool(slug) and bool(SLUG_PATTERN.match(slug))


def ensure_unique_slug(model, slug, exclude_pk=None, message='Slug already exists.'):
    """Raise SlugConflictError if another row already uses the slug"""
    queryset = model.objects.filter(slug=slug)
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    if queryset.exists():
        raise SlugConflictError(message)


def resolve_slug(model, slug, name, exclude_pk=None):
    """Validated, unique slug. Derived from the name when none is given."""
    slug = (slug or '').strip() or slugify(name)
    if not is_valid_slug(slug):
        raise DomainError('Slug must be lowercase and kebab-case.')
    ensure_unique_slug(model, slug, exclude_pk=exclude_pk)
    return slug


def create_notification(type, title, message, link=None, user=None, creator=None):
    """
    Create a dashboard notification. ``user=None`` broadcasts to everyone.
    Never raises: a failed notification must not break the main operation.
    """
    try:
        if creator is not None and not getattr(creator, 'is_authenticated', False):
            creator = None
        return Notification.objects.create(
            type=type,
            title=title,
            message=message,
            link=link,
            user=user,
            creator=creator,
        )
    except Exception as e:
        logger.error(f"Failed to create notification: {str(e)}")
        return None


def notify_entity(action, entity_label, name, creator=None, link=None):
    """Shorthand for the created/updated/deleted notifications every mutation emits"""
    return create_notification(
        type=f'entity_{action}',
        title=f'{entity_label} {action}',
        message=f'{entity_label} "{name}" was {action}.',
        link=link,
        creator=creator,
    )


def paginate(queryset, params, default_limit=DEFAULT_PAGE_SIZE):
    """Slice a queryset for listing pages and build the meta block"""
    try:
        page = max(int(params.get('page', 1)), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = max(min(int(params.get('limit', default_limit)), 100), 1)
    except (TypeError, ValueError):
        limit = default_limit

    total_items = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    meta = {
        'totalItems': total_items,
        'totalPages': math.ceil(total_items / limit) if total_items else 0,
        'currentPage': page,
        'limit': limit,
    }
    return items, meta


def search_filter(queryset, search, fields):
    """Case-insensitive OR search across the given fields"""
    search = (search or '').strip()
    if not search:
        return queryset
    query = Q()
    for name in fields:
        query |= Q(**{f'{name}__icontains': search})
    return queryset.filter(query)


def delete_instance(instance, entity_label):
    """Delete one row, reporting blocking references as ReferencedError"""
    try:
        with transaction.atomic():
            instance.delete()
    except (ProtectedError, RestrictedError, IntegrityError) as e:
        logger.warning(f"Delete of {entity_label} {instance.pk} blocked: {str(e)}")
        raise ReferencedError()


def bulk_delete(model, ids, entity_label):
    """
    Delete every row whose id is in ``ids`` in one statement.
    All or nothing: a blocking reference anywhere fails the whole batch.
    Returns the number of rows of ``model`` removed.
    """
    ids = [i for i in (ids or []) if i not in (None, '')]
    if not ids:
        raise DomainError('No items selected.')
    try:
        with transaction.atomic():
            _, per_model = model.objects.filter(pk__in=ids).delete()
    except (ProtectedError, RestrictedError, IntegrityError) as e:
        logger.warning(f"Bulk delete of {entity_label} blocked: {str(e)}")
        raise ReferencedError(status_code=400)
    deleted = per_model.get(model._meta.label, 0)
    logger.info(f"Bulk deleted {deleted} {entity_label} rows")
    return deleted


@contextmanager
def atomic_mutation(verb, entity_label):
    """
    Run a create/update inside one transaction. Database failures are logged
    and reported as ``Database error: Failed to <verb> <entity>.`` (500).
    """
    try:
        with transaction.atomic():
            yield
    except DomainError:
        raise
    except DatabaseError as e:
        logger.error(f"Failed to {verb} {entity_label}: {str(e)}")
        raise DomainError(f'Database error: Failed to {verb} {entity_label}.', status_code=500)
