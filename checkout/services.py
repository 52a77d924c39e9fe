import logging
from datetime import date

from django.db import transaction

from carts.basket import PARTS_ALL
from .models import Order, OrderProduct

logger = logging.getLogger(__name__)


@transaction.atomic
def place_order(request, basket):
    """
    Create the order and its products from a complete basket, empty the cart
    and reset the checkout data. Raises ``BasketError`` if the basket is
    incomplete.
    """
    basket.check(PARTS_ALL)

    user = request.user if request.user.is_authenticated else None
    delivery = basket.delivery
    payment = basket.payment

    order = Order(**basket.address_data())
    order.user = user
    order.order_note = basket.comment[:255]
    order.shipping_method = delivery.get('label', delivery['code'])
    order.shipping_cost = basket.delivery_cost()
    order.payment_method = payment.get('label', payment['code'])
    order.tax = basket.tax()
    order.order_total = basket.grand_total()
    order.ip = request.META.get('REMOTE_ADDR', '')
    order.save()

    order.order_number = date.today().strftime("%Y%m%d") + str(order.id)
    order.save(update_fields=['order_number'])

    for cart_item in basket.items:
        order_product = OrderProduct.objects.create(
            order=order,
            user=user,
            product=cart_item.product,
            quantity=cart_item.quantity,
            product_price=cart_item.unit_price(),
            tax_rate=cart_item.product.tax_rate,
        )
        variations = list(cart_item.variations.all())
        if variations:
            order_product.variations.set(variations)
        cart_item.delete()

    basket.clear()
    logger.info("Placed order %s with %d product(s)", order.order_number, order.orderproduct_set.count())
    return order
