"""
Sections of the checkout page, one for each wizard step.

Every section processes its own request parameters, adds its data to the
shared ``CheckoutState`` and renders its part of the page. A section renders
nothing while its step isn't visible.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import MultipleObjectsReturned, ObjectDoesNotExist
from django.template.loader import render_to_string
from django.utils.translation import gettext as _

from carts.basket import ADDRESS_PAYMENT, PARTS_ALL, BasketError, delivery_options, payment_options
from .forms import OrderForm
from .steps import SUMMARY, is_visible, onepage_steps

logger = logging.getLogger(__name__)


class CheckoutState:
    """Data shared by the sections while handling one checkout request."""

    def __init__(self, request, basket, active_step):
        self.request = request
        self.basket = basket
        self.active_step = active_step
        self.errors = []
        self.data = {}

    def param(self, name, default=None):
        if name in self.request.POST:
            return self.request.POST.get(name)
        return self.request.GET.get(name, default)

    def add_error(self, message, step=None):
        self.errors.append(message)
        if step is not None:
            self.active_step = step


class Section:
    step = None
    template_body = None
    template_header = None

    def is_visible(self, state):
        return is_visible(self.step, state.active_step, onepage_steps())

    def process(self, state):
        """Store the values posted for this section in the basket."""

    def add_data(self, state):
        """Add the template data of this section to ``state.data``."""

    def _context(self, state):
        context = {'state': state, 'basket': state.basket, 'active_step': state.active_step}
        context.update(state.data)
        return context

    def render_body(self, state):
        if not self.is_visible(state) or not self.template_body:
            return ''
        return render_to_string(self.template_body, self._context(state), request=state.request)

    def render_header(self, state):
        if not self.is_visible(state) or not self.template_header:
            return ''
        return render_to_string(self.template_header, self._context(state), request=state.request)


# --------------------------
# Address
# --------------------------
class AddressSection(Section):
    step = 'address'
    template_body = 'checkout/address_body.html'

    def process(self, state):
        if state.param('ca_address') is None:
            return

        form = OrderForm(state.request.POST)
        if not form.is_valid():
            state.data['address_form'] = form
            state.add_error(_('Please correct the address fields'), step=self.step)
            return

        data = {name: value for name, value in form.cleaned_data.items() if value not in (None, '')}
        state.basket.set_address(data)
        state.basket.save()

    def add_data(self, state):
        if 'address_form' not in state.data:
            state.data['address_form'] = OrderForm(initial=state.basket.address_data())


# --------------------------
# Delivery and payment
# --------------------------
class OptionSection(Section):
    param_name = None

    def options(self):
        return {}

    def select(self, basket, code):
        raise NotImplementedError

    def process(self, state):
        code = state.param(self.param_name)
        if code is None:
            return
        try:
            self.select(state.basket, code)
        except ValueError:
            logger.info("Rejected %s option %r", self.step, code)
            state.add_error(_('Please choose a valid %(step)s option') % {'step': self.step}, step=self.step)
            return
        state.basket.save()

    def add_data(self, state):
        state.data[f'{self.step}_options'] = list(self.options().values())


class DeliverySection(OptionSection):
    step = 'delivery'
    param_name = 'c_delivery'
    template_body = 'checkout/delivery_body.html'

    def options(self):
        return delivery_options()

    def select(self, basket, code):
        basket.set_delivery(code)


class PaymentSection(OptionSection):
    step = 'payment'
    param_name = 'c_payment'
    template_body = 'checkout/payment_body.html'

    def options(self):
        return payment_options()

    def select(self, basket, code):
        basket.set_payment(code)


# --------------------------
# Summary
# --------------------------
class SummarySection(Section):
    step = SUMMARY
    template_body = 'checkout/summary_body.html'
    template_header = 'checkout/summary_header.html'

    def process(self, state):
        try:
            if state.param('cs_order') is None:
                return

            basket = state.basket

            comment = state.param('cs_comment')
            if comment is not None:
                basket.set_comment(comment)
                basket.save()

            if (state.param('cs_option_terms') is not None
                    and str(state.param('cs_option_terms_value', '0')) != '1'):
                error = _('Please accept the terms and conditions')
                codes = state.data.setdefault('summary_error_codes', {})
                codes.setdefault('option', {})['terms'] = error
                state.active_step = SUMMARY
                state.errors.insert(0, error)

            basket.check(PARTS_ALL)
        except Exception:
            state.active_step = SUMMARY
            raise

    def add_data(self, state):
        user = getattr(state.request, 'user', None)
        customer_id = user.pk if user is not None and user.is_authenticated else None

        if customer_id is None:
            try:
                email = state.basket.get_address(ADDRESS_PAYMENT).get('email')
                customer_id = get_user_model().objects.get(email__iexact=email).pk
            except (BasketError, ObjectDoesNotExist, MultipleObjectsReturned):
                logger.debug("No customer account found for the checkout address")

        state.data['summary_customer_id'] = customer_id
        state.data['summary_tax_rates'] = state.basket.tax_rates()
        state.data.setdefault('summary_error_codes', {})


SECTIONS = [AddressSection(), DeliverySection(), PaymentSection(), SummarySection()]


def get_sections(steps):
    return [section for section in SECTIONS if section.step in steps]
