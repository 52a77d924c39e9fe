import logging

from django.conf import settings
from django.db.models import Prefetch, Q
from django.utils import timezone

from .models import Product, ProductGallery, ReviewRating, Variation

logger = logging.getLogger(__name__)

DEFAULT_DOMAINS = ['media', 'price', 'text']

# Related data loaded for each domain name
DOMAIN_PREFETCHES = {
    'media': Prefetch('productgallery_set', queryset=ProductGallery.objects.order_by('order')),
    'price': Prefetch('variation_set', queryset=Variation.objects.filter(is_active=True).select_related('category')),
    'text': Prefetch('reviewrating_set', queryset=ReviewRating.objects.filter(status=True)),
    'download': 'downloads',
}
DOMAIN_RELATIONS = {
    'brand': 'brand',
    'category': 'category',
}


def catalog_domains():
    return getattr(settings, 'CATALOG_DOMAINS', None) or DEFAULT_DOMAINS


def seen_domains():
    """Domains loaded for the "last seen" fragment, falling back to the catalog ones."""
    return getattr(settings, 'CATALOG_SEEN_DOMAINS', None) or catalog_domains()


def _queryset(domains):
    # category is always joined, Product.get_url() needs it
    relations = {'category'}
    prefetches = []
    for domain in domains or []:
        if domain in DOMAIN_PREFETCHES:
            prefetches.append(DOMAIN_PREFETCHES[domain])
        elif domain in DOMAIN_RELATIONS:
            relations.add(DOMAIN_RELATIONS[domain])
        else:
            logger.warning("Ignoring unknown product domain %r", domain)

    now = timezone.now()
    return (Product.objects
            .filter(is_available=True)
            .filter(Q(end_date__isnull=True) | Q(end_date__gt=now))
            .select_related(*sorted(relations))
            .prefetch_related(*prefetches))


def get_product(product_id, domains=None):
    """
    Return the available product with the given ID and its related data.

    Raises ``Product.DoesNotExist`` if the product is unknown, disabled or
    past its end date.
    """
    return _queryset(domains if domains is not None else catalog_domains()).get(pk=product_id)


def get_products(product_ids, domains=None):
    """Return the available products for ``product_ids`` in the same order."""
    ids = [int(pid) for pid in product_ids]
    products = _queryset(domains if domains is not None else catalog_domains()).in_bulk(ids)
    return [products[pid] for pid in ids if pid in products]
