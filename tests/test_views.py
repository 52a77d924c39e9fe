from decimal import Decimal

import re

import pytest
from django.test import Client
from django.urls import reverse

from catalog import seen
from catalog.models import Brand
from checkout.models import Order


def csrf_token(response):
    return re.search(r'name="csrfmiddlewaretoken" value="([^"]+)"', response.content.decode()).group(1)


@pytest.fixture
def products(make_product):
    return [make_product(product_name=f"Burner {n}", price=Decimal('12.50')) for n in range(1, 5)]


class TestProductDetail:
    def test_view_is_recorded(self, client, products):
        response = client.get(products[0].get_url())

        assert response.status_code == 200
        assert list(client.session[seen.SEEN_LIST_KEY]) == [str(products[0].pk)]

    def test_seen_list_shows_other_products(self, client, products):
        client.get(products[0].get_url())
        response = client.get(products[1].get_url())

        body = response.content.decode()
        assert 'catalog-session-seen' in body
        assert 'data-product-id="%d"' % products[0].pk in body
        assert list(client.session[seen.SEEN_LIST_KEY]) == [str(products[0].pk), str(products[1].pk)]

    def test_seen_list_is_capped(self, client, products, settings):
        settings.CATALOG_SEEN_MAX_ITEMS = 2
        for product in products:
            client.get(product.get_url())
        client.get(products[2].get_url())

        assert list(client.session[seen.SEEN_LIST_KEY]) == [str(products[3].pk), str(products[2].pk)]

    def test_unavailable_product(self, client, make_product):
        product = make_product(is_available=False)

        assert client.get(product.get_url()).status_code == 404

    def test_clear_seen(self, client, products):
        client.get(products[0].get_url())

        response = client.post(reverse('catalog:clear_seen'))

        assert response.status_code == 302
        assert seen.SEEN_LIST_KEY not in client.session

    def test_store_page_shows_seen_products(self, client, products):
        client.get(products[0].get_url())

        response = client.get(reverse('catalog:store'))

        assert 'catalog-session-seen' in response.content.decode()

    def test_clear_seen_after_login(self, products, django_user_model):
        django_user_model.objects.create_user('staff', password='secret', is_staff=True)
        client = Client(enforce_csrf_checks=True)
        client.get(products[0].get_url())
        client.get(reverse('catalog:store'))

        login_page = client.get(reverse('admin:login'))
        response = client.post(reverse('admin:login'), {
            'username': 'staff',
            'password': 'secret',
            'csrfmiddlewaretoken': csrf_token(login_page),
            'next': reverse('catalog:store'),
        })
        assert response.status_code == 302

        store_page = client.get(reverse('catalog:store'))
        response = client.post(reverse('catalog:clear_seen'), {'csrfmiddlewaretoken': csrf_token(store_page)})

        assert response.status_code == 302
        assert seen.SEEN_LIST_KEY not in client.session


class TestBrandDetail:
    def test_shows_brand_and_products(self, client, make_product):
        brand = Brand.objects.create(name="Weber", slug="weber", short_description="Grills since 1952",
                                     description="Family owned grill maker.")
        product = make_product(product_name="Kettle", brand=brand)
        make_product(product_name="Smoker")

        response = client.get(brand.get_url())

        body = response.content.decode()
        assert response.status_code == 200
        assert "Grills since 1952" in body
        assert "Family owned grill maker." in body
        assert [p.pk for p in response.context['products']] == [product.pk]
        assert "Smoker" not in body

    def test_unknown_brand(self, client, db):
        response = client.get(reverse('catalog:brand_detail', args=['unknown']))

        assert response.status_code == 404


class TestCheckout:
    def test_empty_cart_redirects(self, client, db):
        response = client.get(reverse('checkout'))

        assert response.status_code == 302
        assert response.url == reverse('cart')

    def test_complete_checkout(self, client, products, address):
        product = products[0]
        client.post(reverse('add_cart', args=[product.pk]), {'quantity': 2})

        response = client.get(reverse('checkout'))
        assert response.context['active_step'] == 'address'
        assert 'checkout-standard-summary' not in response.content.decode()

        response = client.post(reverse('checkout'), dict(address, c_step='address', ca_address='1'))
        assert response.status_code == 302

        response = client.get(reverse('checkout'))
        assert response.context['active_step'] == 'delivery'

        client.post(reverse('checkout'), {'c_step': 'delivery', 'c_delivery': 'pickup'})
        client.post(reverse('checkout'), {'c_step': 'payment', 'c_payment': 'invoice'})

        response = client.get(reverse('checkout'))
        assert response.context['active_step'] == 'summary'
        assert 'checkout-standard-summary' in response.content.decode()

        response = client.post(reverse('checkout'), {
            'c_step': 'summary',
            'cs_order': '1',
            'cs_comment': 'Call before delivery',
            'cs_option_terms': '1',
            'cs_option_terms_value': '1',
        })

        order = Order.objects.get()
        assert response.status_code == 302
        assert response.url == reverse('order_complete', args=[order.order_number])
        assert order.order_note == 'Call before delivery'
        assert order.shipping_method == 'Store Pickup'
        assert order.tax == Decimal('0.50')
        assert order.order_total == Decimal('25.50')
        assert order.orderproduct_set.get().quantity == 2

        response = client.get(response.url)
        assert response.status_code == 200
        assert 'Jane Doe, 1 Main St' in response.content.decode()
        assert client.get(reverse('cart')).context['quantity'] == 0

    def test_terms_not_accepted(self, client, products, address):
        client.post(reverse('add_cart', args=[products[0].pk]), {'quantity': 1})
        client.post(reverse('checkout'), dict(address, c_step='address', ca_address='1'))
        client.post(reverse('checkout'), {'c_step': 'delivery', 'c_delivery': 'standard'})
        client.post(reverse('checkout'), {'c_step': 'payment', 'c_payment': 'cod'})

        response = client.post(reverse('checkout'), {
            'c_step': 'summary',
            'cs_order': '1',
            'cs_option_terms': '1',
        })

        assert response.status_code == 200
        assert response.context['active_step'] == 'summary'
        assert 'Please accept the terms and conditions' in response.context['errors']
        assert not Order.objects.exists()

    def test_order_with_incomplete_basket(self, client, products, address):
        client.post(reverse('add_cart', args=[products[0].pk]), {'quantity': 1})
        client.post(reverse('checkout'), dict(address, c_step='address', ca_address='1'))

        response = client.post(reverse('checkout'), {'c_step': 'delivery', 'cs_order': '1'})

        assert response.status_code == 200
        assert response.context['active_step'] == 'summary'
        assert any('delivery' in error for error in response.context['errors'])

    def test_onepage_shows_summary_with_payment(self, client, products, address, settings):
        settings.CHECKOUT_ONEPAGE = ['delivery', 'payment', 'summary']
        client.post(reverse('add_cart', args=[products[0].pk]), {'quantity': 1})
        client.post(reverse('checkout'), dict(address, c_step='address', ca_address='1'))

        response = client.get(reverse('checkout'))
        body = response.content.decode()

        assert response.context['active_step'] == 'delivery'
        assert 'checkout-standard-payment' in body
        assert 'checkout-standard-summary' in body

    def test_invalid_address(self, client, products):
        client.post(reverse('add_cart', args=[products[0].pk]), {'quantity': 1})

        response = client.post(reverse('checkout'), {'c_step': 'address', 'ca_address': '1', 'first_name': 'Jane'})

        assert response.status_code == 200
        assert response.context['active_step'] == 'address'
        assert response.context['errors'] == ['Please correct the address fields']
