"""
"Last seen" products kept in the user's session.

The list is stored as a dict mapping the product ID (as string, sessions are
JSON serialized) to the rendered HTML fragment of the product. Dict order is
the order of the views, the last entry is the most recently viewed product.

Rendered list bodies derived from it are stored in the session too. Their
keys are registered under ``SEEN_CACHE_KEY`` and dropped whenever the list
changes.
"""
import hashlib
import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.template.loader import render_to_string

from . import cache
from .services import get_product, seen_domains

logger = logging.getLogger(__name__)

SEEN_LIST_KEY = 'catalog/session/seen/list'
SEEN_CACHE_KEY = 'catalog/session/seen/cache'
SEEN_BODY_KEY = 'catalog/session/seen/body'

DEFAULT_MAX_ITEMS = 6


def max_items():
    value = getattr(settings, 'CATALOG_SEEN_MAX_ITEMS', DEFAULT_MAX_ITEMS)
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ImproperlyConfigured(f"CATALOG_SEEN_MAX_ITEMS must be an integer, got {value!r}")
    if value < 1:
        raise ImproperlyConfigured(f"CATALOG_SEEN_MAX_ITEMS must be greater than 0, got {value}")
    return value


def cache_key(product_id):
    return hashlib.md5(f"{product_id}product:detail-seen".encode('utf-8')).hexdigest()


def get_seen(session):
    """Return a copy of the seen list, oldest first."""
    seen = session.get(SEEN_LIST_KEY, {})
    if not isinstance(seen, dict):
        return {}
    return dict(seen)


def get_seen_html(product_id):
    """
    Return the "last seen" fragment for the product, rendering and caching
    it if necessary. The fragment is shared by all sessions, so it's rendered
    without request context.
    """
    key = cache_key(product_id)
    html = cache.get(key)

    if html is None:
        logger.debug("Seen fragment cache miss for product %s", product_id)
        product = get_product(product_id, seen_domains())
        expire, tags = cache.add_meta_items(product)

        html = render_to_string('catalog/detail/seen_item.html', {'seen_product': product})
        cache.set_tagged(key, html, expire, tags)

    return html


def add_seen(session, product_id, html_factory):
    """
    Move the product to the end of the seen list or append it.

    ``html_factory`` is called with the product ID only if the product isn't
    in the list yet. Returns the updated list.
    """
    product_id = str(product_id)
    seen = get_seen(session)

    if product_id in seen:
        seen[product_id] = seen.pop(product_id)
    else:
        seen[product_id] = html_factory(product_id)
        limit = max_items()
        if len(seen) > limit:
            seen = dict(list(seen.items())[-limit:])

    session[SEEN_LIST_KEY] = seen
    clear_dependent(session)
    session.modified = True
    return seen


def clear_dependent(session):
    """Drop every rendered body derived from the seen list."""
    for key in session.get(SEEN_CACHE_KEY, []):
        session.pop(key, None)
    session[SEEN_CACHE_KEY] = []


def clear_seen(session):
    session.pop(SEEN_LIST_KEY, None)
    clear_dependent(session)
    session.modified = True


def record_view(request, product_id=None):
    """
    Record the view of a product detail page.

    The product ID is taken from the ``d_prodid`` request parameter if it
    isn't passed. Requests without a product ID don't change the session.
    """
    if product_id is None:
        product_id = request.GET.get('d_prodid') or request.POST.get('d_prodid')
    if product_id in (None, ''):
        return None

    return add_seen(request.session, product_id, get_seen_html)


def render_seen_items(session, exclude_id=None):
    """
    Return the rendered items of the seen list, most recent product first.

    The body is cached in the session until the list changes. It's rendered
    without request context, so it holds nothing tied to the request like
    the CSRF token.
    """
    variant = str(exclude_id) if exclude_id is not None else 'all'
    key = f"{SEEN_BODY_KEY}/{variant}"

    html = session.get(key)
    if html is not None:
        return html

    seen = get_seen(session)
    if exclude_id is not None:
        seen.pop(str(exclude_id), None)

    html = render_to_string('catalog/session/seen_items.html', {
        'seen_items': list(reversed(seen.values())),
    }).strip()

    keys = session.get(SEEN_CACHE_KEY, [])
    if key not in keys:
        keys.append(key)
    session[SEEN_CACHE_KEY] = keys
    session[key] = html
    session.modified = True
    return html


def render_seen_list(request, exclude_id=None):
    """
    Return the HTML of the "last seen" section including the clear form.

    Only the items are cached, the section around them is rendered on every
    call as its CSRF token changes when the user logs in.
    """
    items = render_seen_items(request.session, exclude_id)
    if not items:
        return ''
    return render_to_string('catalog/session/seen_list.html', {'seen_items_body': items}, request=request)
