from decimal import Decimal

import pytest
from django.contrib.auth.models import AnonymousUser
from django.contrib.sessions.backends.cache import SessionStore
from django.contrib.sessions.middleware import SessionMiddleware
from django.core.cache import cache

from carts.models import Cart, CartItem
from carts.utils import _cart_id
from catalog.models import Category, Product


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def session():
    """Session which doesn't need the database"""
    return SessionStore()


@pytest.fixture
def category(db):
    return Category.objects.create(category_name="Grills", slug="grills")


@pytest.fixture
def make_product(category):
    counter = {'n': 0}

    def make(**kwargs):
        counter['n'] += 1
        n = counter['n']
        defaults = {
            'product_name': f"Product {n}",
            'slug': f"product-{n}",
            'price': Decimal('10.00'),
            'stock': 10,
            'category': category,
        }
        defaults.update(kwargs)
        return Product.objects.create(**defaults)

    return make


@pytest.fixture
def make_request(rf):
    """RequestFactory request with a working session and an anonymous user."""

    def make(method='get', path='/', data=None, user=None):
        request = getattr(rf, method)(path, data or {})
        SessionMiddleware(lambda r: None).process_request(request)
        request.session.save()
        request.user = user or AnonymousUser()
        return request

    return make


@pytest.fixture
def fill_cart():
    def fill(request, *products, quantity=1):
        cart, _ = Cart.objects.get_or_create(cart_id=_cart_id(request))
        return [CartItem.objects.create(product=p, cart=cart, quantity=quantity) for p in products]

    return fill


@pytest.fixture
def address():
    return {
        'first_name': 'Jane',
        'last_name': 'Doe',
        'phone': '602-555-0100',
        'email': 'jane@example.com',
        'address_line_1': '1 Main St',
        'city': 'Phoenix',
        'state': 'AZ',
        'country': 'US',
        'zip_code': '85001',
    }
