import logging
from datetime import timedelta

import pytest
from django.utils import timezone

from catalog.models import Product, Variation, VariationCategory
from catalog.services import get_product, get_products, seen_domains


def test_get_product_loads_active_variations(make_product, django_assert_num_queries):
    product = make_product()
    color = VariationCategory.objects.create(name="Color")
    Variation.objects.create(product=product, category=color, name="Red")
    Variation.objects.create(product=product, category=color, name="Blue", is_active=False)

    item = get_product(product.pk, ['price'])

    with django_assert_num_queries(0):
        assert [v.name for v in item.variation_set.all()] == ["Red"]
        assert item.category.slug == "grills"


def test_unavailable_product_is_not_found(make_product):
    product = make_product(is_available=False)

    with pytest.raises(Product.DoesNotExist):
        get_product(product.pk)


def test_product_past_end_date_is_not_found(make_product):
    product = make_product(end_date=timezone.now() - timedelta(days=1))

    with pytest.raises(Product.DoesNotExist):
        get_product(product.pk)


def test_unknown_domain_is_ignored(make_product, caplog):
    product = make_product()

    with caplog.at_level(logging.WARNING, logger='catalog.services'):
        assert get_product(product.pk, ['media', 'stock']) == product

    assert "stock" in caplog.text


def test_get_products_keeps_order_and_skips_missing(make_product):
    first = make_product()
    second = make_product()
    hidden = make_product(is_available=False)

    products = get_products([second.pk, hidden.pk, first.pk, 9999])

    assert products == [second, first]


def test_seen_domains_fall_back_to_catalog_domains(settings):
    settings.CATALOG_SEEN_DOMAINS = None
    settings.CATALOG_DOMAINS = ['media']
    assert seen_domains() == ['media']

    settings.CATALOG_SEEN_DOMAINS = ['text']
    assert seen_domains() == ['text']

    settings.CATALOG_DOMAINS = None
    settings.CATALOG_SEEN_DOMAINS = None
    assert seen_domains() == ['media', 'price', 'text']
