"""
Storefront cache revalidation.

After an admin mutation commits, the storefront deployment is asked to drop
the cache tags the mutation touched:

    POST {STOREFRONT_URL}/api/revalidate/
    Authorization: Bearer <REVALIDATION_SECRET>
    {"tags": ["products", "catalogs"]}

Revalidation is best effort. Every failure is logged and swallowed so it can
never fail the mutation that triggered it. Service functions take an optional
``invalidator`` so tests can record calls instead of doing HTTP.
"""
import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Iterable

import requests
from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

# Tags understood by the storefront cache
TAG_PRODUCTS = 'products'
TAG_CATALOGS = 'catalogs'
TAG_COLLECTIONS = 'collections'
TAG_SERVICES = 'services'
TAG_PROJECTS = 'projects'
TAG_POSTS = 'posts'
TAG_MENU = 'menu'
TAG_FOOTER = 'footer'
TAG_HERO = 'hero'
TAG_INTRO = 'intro'
TAG_SETTINGS = 'settings'
TAG_SALE = 'sale'
TAG_FEATURED = 'featured'
TAG_CONTACTS = 'contacts'


@dataclass
class RevalidationResult:
    success: bool
    attempts: int = 0
    revalidated: List[str] = field(default_factory=list)
    error: Optional[str] = None


class CacheInvalidator(Protocol):
    def invalidate(self, tags: List[str]) -> RevalidationResult:
        ...


class NullInvalidator:
    """Does nothing. Used when no storefront is deployed."""

    def invalidate(self, tags):
        return RevalidationResult(success=True, revalidated=list(tags))


class RecordingInvalidator:
    """Keeps every batch of tags it receives"""

    def __init__(self):
        self.calls = []

    def invalidate(self, tags):
        self.calls.append(list(tags))
        return RevalidationResult(success=True, attempts=1, revalidated=list(tags))

    @property
    def tags(self):
        return {tag for call in self.calls for tag in call}


def _json_body(response):
    """Response body as a dict; anything else (HTML, arrays, strings) reads as empty"""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class StorefrontRevalidator:
    """Calls the storefront revalidation endpoint with retry and exponential backoff"""

    def __init__(self, base_url=None, secret=None, timeout=None, max_retries=None,
                 base_delay=None, session=None, sleep=time.sleep):
        self.base_url = (base_url or getattr(settings, 'STOREFRONT_URL', os.getenv('STOREFRONT_URL', 'http://localhost:3000'))).rstrip('/')
        self.secret = secret if secret is not None else getattr(settings, 'REVALIDATION_SECRET', os.getenv('REVALIDATION_SECRET', ''))
        self.timeout = timeout if timeout is not None else getattr(settings, 'REVALIDATION_TIMEOUT', 5)
        self.max_retries = max_retries if max_retries is not None else getattr(settings, 'REVALIDATION_MAX_RETRIES', 3)
        self.base_delay = base_delay if base_delay is not None else getattr(settings, 'REVALIDATION_BASE_DELAY', 1)
        self.session = session or requests
        self.sleep = sleep

    @property
    def endpoint(self):
        return f"{self.base_url}/api/revalidate/"

    def invalidate(self, tags):
        if not self.secret:
            logger.warning("REVALIDATION_SECRET is not configured, skipping storefront revalidation")
            return RevalidationResult(success=False, error='REVALIDATION_SECRET is not configured')

        tags = list(tags or [])
        if not tags:
            logger.warning("No tags provided, skipping storefront revalidation")
            return RevalidationResult(success=False, error='No tags provided')

        last_error = 'Unknown error'
        for attempt in range(1, self.max_retries + 1):
            try:
                logger.info(f"Revalidating storefront tags {tags} (attempt {attempt}/{self.max_retries})")
                response = self.session.post(
                    self.endpoint,
                    json={'tags': tags},
                    headers={'Authorization': f'Bearer {self.secret}'},
                    timeout=self.timeout,
                )

                if response.ok:
                    revalidated = _json_body(response).get('revalidated', tags)
                    logger.info(f"Storefront revalidated tags {revalidated} (attempt {attempt})")
                    return RevalidationResult(success=True, attempts=attempt, revalidated=revalidated)

                last_error = _json_body(response).get('error') or f"HTTP {response.status_code}"

                if response.status_code == 401:
                    # Retrying with the same secret cannot succeed
                    logger.error("Storefront revalidation rejected: check REVALIDATION_SECRET")
                    return RevalidationResult(
                        success=False,
                        attempts=attempt,
                        error='Authentication failed - check REVALIDATION_SECRET configuration',
                    )

                logger.warning(f"Storefront revalidation attempt {attempt} failed: {last_error}")
            except requests.Timeout:
                last_error = f"Request timeout after {self.timeout}s"
                logger.warning(f"Storefront revalidation attempt {attempt} timed out")
            except requests.RequestException as e:
                last_error = str(e)
                logger.warning(f"Storefront revalidation attempt {attempt} error: {last_error}")

            if attempt < self.max_retries:
                self.sleep(self.base_delay * (2 ** (attempt - 1)))

        logger.error(f"Failed to revalidate storefront tags {tags} after {self.max_retries} attempts: {last_error}")
        return RevalidationResult(
            success=False,
            attempts=self.max_retries,
            error=f"Failed after {self.max_retries} attempts: {last_error}",
        )


_default_invalidator = None


def get_cache_invalidator():
    """Build (once) the invalidator named by CACHE_INVALIDATOR_CLASS"""
    global _default_invalidator
    if _default_invalidator is None:
        path = getattr(settings, 'CACHE_INVALIDATOR_CLASS', 'homestore.core.revalidation.StorefrontRevalidator')
        _default_invalidator = import_string(path)()
    return _default_invalidator


def set_cache_invalidator(invalidator):
    """Replace the process-wide invalidator. Passing None rebuilds it from settings."""
    global _default_invalidator
    _default_invalidator = invalidator


def _dedupe(tags: Iterable[str]):
    seen = []
    for tag in tags:
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def revalidate_now(tags, invalidator=None):
    """Send the tags immediately. Never raises."""
    tags = _dedupe(tags)
    try:
        return (invalidator or get_cache_invalidator()).invalidate(tags)
    except Exception as e:
        # Don't fail the main operation if revalidation fails
        logger.error(f"Storefront revalidation failed for {tags}: {str(e)}")
        return RevalidationResult(success=False, error=str(e))


def schedule_revalidation(tags, invalidator=None):
    """Revalidate once the surrounding transaction commits"""
    tags = _dedupe(tags)
    if not tags:
        return
    transaction.on_commit(lambda: revalidate_now(tags, invalidator))
