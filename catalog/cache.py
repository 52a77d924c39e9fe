"""
Fragment cache with invalidation tags on top of the Django cache framework.

Django's cache has no notion of tags, so every tag keeps an index entry
listing the keys stored under it. Invalidating a tag deletes those keys.
"""
import logging

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

logger = logging.getLogger(__name__)

TAG_PREFIX = 'catalog:tag:'


def _tag_key(tag):
    return f"{TAG_PREFIX}{tag}"


def _timeout(expire):
    """Convert an absolute expiry datetime into a cache timeout in seconds."""
    if expire is None:
        return getattr(settings, 'CATALOG_CACHE_TIMEOUT', 60 * 60 * 24)
    seconds = int((expire - timezone.now()).total_seconds())
    # a timeout of 0 makes Django expire the entry right away
    return max(seconds, 0)


def get(key, default=None):
    return cache.get(key, default)


def set_tagged(key, value, expire=None, tags=()):
    """
    Store ``value`` under ``key`` until ``expire`` (datetime or None) and
    register the key under every tag in ``tags``.
    """
    timeout = _timeout(expire)
    if timeout == 0:
        logger.debug("Not caching %s, already expired at %s", key, expire)
        return
    cache.set(key, value, timeout)

    for tag in set(tags):
        index = cache.get(_tag_key(tag)) or []
        if key not in index:
            index.append(key)
            cache.set(_tag_key(tag), index, None)


def invalidate_tags(*tags):
    """Delete every cached entry registered under one of ``tags``."""
    for tag in tags:
        keys = cache.get(_tag_key(tag)) or []
        if keys:
            cache.delete_many(keys)
            logger.info("Invalidated %d cache entries for tag %s", len(keys), tag)
        cache.delete(_tag_key(tag))


def add_meta_items(items, expire=None, tags=None):
    """
    Collect the cache tags and the earliest expiry date for ``items``.

    ``items`` is a product or an iterable of products. Returns the tuple
    ``(expire, tags)`` where ``tags`` extends the passed list.
    """
    tags = list(tags or [])
    if items is None:
        return expire, tags
    if not isinstance(items, (list, tuple, set)):
        items = [items]

    now = timezone.now()
    for item in items:
        for tag in ('product', f"product-{item.pk}"):
            if tag not in tags:
                tags.append(tag)

        end_date = getattr(item, 'end_date', None)
        if end_date is not None and end_date > now and (expire is None or end_date < expire):
            expire = end_date

    return expire, tags
