import logging

from django.contrib import messages
from django.shortcuts import render, redirect, get_object_or_404

from carts.basket import Basket, BasketError
from .models import Order
from .sections import CheckoutState, get_sections
from .services import place_order
from .steps import configured_steps, resolve_active_step, step_links

logger = logging.getLogger(__name__)

LAST_ORDER_KEY = 'checkout_order_id'


def checkout(request):
    basket = Basket(request)
    if not basket.items:
        messages.info(request, "Your cart is empty.")
        return redirect('cart')

    sections = get_sections(configured_steps())
    state = CheckoutState(request, basket, resolve_active_step(request, basket))

    if request.method == 'POST':
        try:
            for section in sections:
                section.process(state)
        except BasketError as e:
            logger.warning("Checkout stopped at %s: %s", state.active_step, e)
            state.add_error(str(e))

        if not state.errors:
            if state.param('cs_order') is None:
                # Post/redirect/get, the next step is resolved from the basket
                return redirect('checkout')
            try:
                order = place_order(request, basket)
            except BasketError as e:
                state.add_error(str(e), step='summary')
            else:
                request.session[LAST_ORDER_KEY] = order.pk
                return redirect('order_complete', order_number=order.order_number)

        for error in state.errors:
            messages.error(request, error)

    for section in sections:
        section.add_data(state)

    context = {
        'active_step': state.active_step,
        'steps': step_links(state.active_step),
        'errors': state.errors,
        'basket': basket,
        'section_headers': [section.render_header(state) for section in sections],
        'section_bodies': [section.render_body(state) for section in sections],
    }
    return render(request, 'checkout/checkout.html', context)


def order_complete(request, order_number):
    order = get_object_or_404(Order, order_number=order_number, pk=request.session.get(LAST_ORDER_KEY))
    context = {
        'order': order,
        'ordered_products': order.orderproduct_set.select_related('product'),
    }
    return render(request, 'checkout/order_complete.html', context)
