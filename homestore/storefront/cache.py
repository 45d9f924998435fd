"""
Tag-versioned caching for storefront queries
Uses Redis (django-redis) in production, any Django cache backend otherwise

Every cached result is stored under a key that embeds the current version of
each of its tags. Revalidating a tag bumps its version, so older keys are never
read again. On Redis the stale keys are also removed with SCAN.
"""
from django.conf import settings
from django.core.cache import cache
from functools import wraps
import hashlib
import logging
import os

logger = logging.getLogger(__name__)

KEY_NAMESPACE = 'storefront'
DEFAULT_TTL = 3600


def _version_key(tag):
    return f"{KEY_NAMESPACE}:version:{tag}"


def get_tag_version(tag):
    """Current version of a tag, starting at 1"""
    key = _version_key(tag)
    version = cache.get(key)
    if version is None:
        cache.add(key, 1, None)
        version = cache.get(key, 1)
    return version


def make_cache_key(prefix, tags, *args, **kwargs):
    """Key embedding the tag names, their versions and the call arguments"""
    tags = sorted(set(tags))
    versions = ','.join(f"{tag}={get_tag_version(tag)}" for tag in tags)
    key_data = f"{prefix}:{versions}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    # |tag| markers let revalidate_tag SCAN for every key carrying a tag
    markers = ''.join(f"|{tag}|" for tag in tags)
    return f"{KEY_NAMESPACE}:{markers}:{prefix}:{key_hash}"


def cached_query(key_prefix, tags, ttl=None):
    """
    Decorator to cache storefront queries under a set of tags

    Usage:
        @cached_query('product_detail', tags=['products'])
        def get_product(slug, locale):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_ttl = ttl if ttl is not None else getattr(
                settings, 'STOREFRONT_CACHE_TTL', int(os.getenv('STOREFRONT_CACHE_TTL', DEFAULT_TTL))
            )
            cache_key = make_cache_key(key_prefix, tags, *args, **kwargs)

            cached_data = cache.get(cache_key)
            if cached_data is not None:
                logger.debug(f"Cache HIT for {key_prefix}: {cache_key}")
                return cached_data

            logger.debug(f"Cache MISS for {key_prefix}: {cache_key}")
            result = func(*args, **kwargs)
            cache.set(cache_key, result, cache_ttl)
            return result
        wrapper.cache_tags = list(tags)
        return wrapper
    return decorator


def _uses_redis():
    backend = settings.CACHES.get('default', {}).get('BACKEND', '')
    return backend.startswith('django_redis')


def _delete_tagged_keys(tag):
    """Remove every stored result carrying ``tag`` (Redis only). Returns the number removed."""
    from django_redis import get_redis_connection

    redis_conn = get_redis_connection("default")
    stale = list(redis_conn.scan_iter(match=f"*{KEY_NAMESPACE}:*|{tag}|*", count=100))
    if stale:
        redis_conn.delete(*stale)
    return len(stale)


def revalidate_tag(tag):
    """Bump the tag version so results cached under it are never served again"""
    key = _version_key(tag)
    try:
        version = cache.incr(key)
    except ValueError:
        # No version yet: anything cached so far used version 1
        version = 2
        cache.set(key, version, None)

    if _uses_redis():
        # Stale keys are unreachable after the bump; deleting them only frees memory
        try:
            removed = _delete_tagged_keys(tag)
            logger.info(f"Removed {removed} stale storefront keys for tag {tag}")
        except Exception as e:
            logger.warning(f"Could not remove stale storefront keys for tag {tag}: {str(e)}")
    logger.info(f"Revalidated storefront tag {tag} (version {version})")
    return version
