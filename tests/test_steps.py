import pytest

from carts.basket import Basket
from checkout.steps import is_visible, resolve_active_step, step_links


@pytest.mark.parametrize('active, onepage, expected', [
    ('summary', [], True),
    ('payment', [], False),
    ('payment', ['payment', 'summary'], True),
    ('address', ['payment', 'summary'], False),
    ('payment', ['payment', 'delivery'], False),
    ('summary', ['payment', 'delivery'], True),
])
def test_summary_visibility(active, onepage, expected):
    assert is_visible('summary', active, onepage) is expected


def test_visibility_uses_configured_onepage(settings):
    settings.CHECKOUT_ONEPAGE = ['delivery', 'payment', 'summary']

    assert is_visible('summary', 'delivery')
    assert not is_visible('summary', 'address')


class TestResolveActiveStep:
    def test_first_incomplete_step(self, make_request, make_product, fill_cart, address):
        request = make_request()
        fill_cart(request, make_product())
        basket = Basket(request)
        assert resolve_active_step(request, basket) == 'address'

        basket.set_address(address)
        assert resolve_active_step(request, basket) == 'delivery'

        basket.set_delivery('standard')
        basket.set_payment('cod')
        assert resolve_active_step(request, basket) == 'summary'

    def test_requested_step(self, make_request, db):
        request = make_request(data={'c_step': 'payment'})

        assert resolve_active_step(request, Basket(request)) == 'payment'

    def test_unknown_requested_step_is_ignored(self, make_request, db):
        request = make_request(data={'c_step': 'teleport'})

        assert resolve_active_step(request, Basket(request)) == 'address'

    def test_configured_steps(self, make_request, settings, db):
        settings.CHECKOUT_STEPS = ['delivery', 'summary']
        request = make_request(data={'c_step': 'address'})

        assert resolve_active_step(request, Basket(request)) == 'delivery'


def test_step_links(settings):
    settings.CHECKOUT_STEPS = ['address', 'delivery', 'summary']

    links = step_links('delivery')

    assert [(s['name'], s['active'], s['done']) for s in links] == [
        ('address', False, True),
        ('delivery', True, False),
        ('summary', False, False),
    ]
