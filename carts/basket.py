"""
Basket used by the checkout: the session cart plus the address, delivery,
payment and comment chosen during the checkout, all kept in the session.
"""
import logging
from decimal import Decimal

from django.conf import settings

from .utils import get_cart_items

logger = logging.getLogger(__name__)

PARTS_PRODUCTS = 'products'
PARTS_ADDRESS = 'address'
PARTS_DELIVERY = 'delivery'
PARTS_PAYMENT = 'payment'
PARTS_ALL = (PARTS_PRODUCTS, PARTS_ADDRESS, PARTS_DELIVERY, PARTS_PAYMENT)

ADDRESS_PAYMENT = 'payment'
ADDRESS_DELIVERY = 'delivery'

SESSION_ADDRESS = 'billing_data'
SESSION_DELIVERY = 'checkout_delivery'
SESSION_PAYMENT = 'checkout_payment'
SESSION_COMMENT = 'checkout_comment'

CENTS = Decimal('0.01')


class BasketError(Exception):
    """Raised if a part of the basket required for ordering is missing."""

    def __init__(self, part, message):
        super().__init__(message)
        self.part = part


def _options(name):
    return {opt['code']: opt for opt in getattr(settings, name, [])}


def delivery_options():
    return _options('CHECKOUT_DELIVERY_OPTIONS')


def payment_options():
    return _options('CHECKOUT_PAYMENT_OPTIONS')


class Basket:
    def __init__(self, request):
        self.request = request
        session = request.session
        self._address = dict(session.get(SESSION_ADDRESS) or {})
        self._delivery = session.get(SESSION_DELIVERY)
        self._payment = session.get(SESSION_PAYMENT)
        self._comment = session.get(SESSION_COMMENT, '')
        self._items = None

    # --------------------------
    # Products
    # --------------------------
    @property
    def items(self):
        if self._items is None:
            self._items = list(get_cart_items(self.request).prefetch_related('variations'))
        return self._items

    def quantity(self):
        return sum(item.quantity for item in self.items)

    # --------------------------
    # Addresses
    # --------------------------
    def has_address(self):
        return bool(self._address)

    def get_address(self, kind=ADDRESS_PAYMENT):
        """
        Return the address of the given kind as dict. The delivery address
        falls back to the payment address field by field.
        """
        if not self._address:
            raise BasketError(PARTS_ADDRESS, "No address available")

        billing = {k: v for k, v in self._address.items() if not k.startswith('shipping_')}
        if kind == ADDRESS_PAYMENT:
            return billing

        shipping = {}
        for key, value in billing.items():
            shipping[key] = self._address.get(f"shipping_{key}") or value
        return shipping

    def address_data(self):
        """Billing and shipping fields as entered in the address form"""
        return dict(self._address)

    def set_address(self, data):
        self._address = dict(data)

    # --------------------------
    # Delivery and payment
    # --------------------------
    @property
    def delivery(self):
        return delivery_options().get(self._delivery)

    def set_delivery(self, code):
        if code not in delivery_options():
            raise ValueError(f"Unknown delivery option {code!r}")
        self._delivery = code

    @property
    def payment(self):
        return payment_options().get(self._payment)

    def set_payment(self, code):
        if code not in payment_options():
            raise ValueError(f"Unknown payment option {code!r}")
        self._payment = code

    # --------------------------
    # Comment
    # --------------------------
    @property
    def comment(self):
        return self._comment

    def set_comment(self, comment):
        self._comment = (comment or '').strip()

    # --------------------------
    # Persistence and checks
    # --------------------------
    def save(self):
        session = self.request.session
        session[SESSION_ADDRESS] = self._address
        session[SESSION_DELIVERY] = self._delivery
        session[SESSION_PAYMENT] = self._payment
        session[SESSION_COMMENT] = self._comment
        session.modified = True

    def clear(self):
        session = self.request.session
        for key in (SESSION_ADDRESS, SESSION_DELIVERY, SESSION_PAYMENT, SESSION_COMMENT):
            session.pop(key, None)
        session.modified = True
        self.__init__(self.request)

    def missing_part(self, parts=PARTS_ALL):
        """Return the first part of ``parts`` which isn't available yet or None."""
        for part in parts:
            if part == PARTS_PRODUCTS and not self.items:
                return part
            if part == PARTS_ADDRESS and not self.has_address():
                return part
            if part == PARTS_DELIVERY and self.delivery is None:
                return part
            if part == PARTS_PAYMENT and self.payment is None:
                return part
        return None

    def check(self, parts=PARTS_ALL):
        part = self.missing_part(parts)
        if part is not None:
            logger.debug("Basket check failed, %s part is missing", part)
            raise BasketError(part, f"Basket is incomplete, the {part} is missing")

    # --------------------------
    # Totals
    # --------------------------
    def subtotal(self):
        return sum((item.sub_total() for item in self.items), Decimal('0.00')).quantize(CENTS)

    def delivery_cost(self):
        option = self.delivery
        if option is None:
            return Decimal('0.00')
        return Decimal(str(option.get('cost', '0.00'))).quantize(CENTS)

    def tax_rates(self):
        """Map each tax rate to the total of the basket items with that rate."""
        rates = {}
        for item in self.items:
            rate = item.product.tax_rate
            rates[rate] = rates.get(rate, Decimal('0.00')) + item.sub_total()
        return {rate: total.quantize(CENTS) for rate, total in sorted(rates.items())}

    def tax(self):
        tax = sum((total * rate / Decimal('100') for rate, total in self.tax_rates().items()), Decimal('0.00'))
        return tax.quantize(CENTS)

    def grand_total(self):
        return (self.subtotal() + self.tax() + self.delivery_cost()).quantize(CENTS)
