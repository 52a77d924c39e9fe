"""Checkout wizard steps and the one-page mode."""
from django.conf import settings

from carts.basket import PARTS_ADDRESS, PARTS_DELIVERY, PARTS_PAYMENT

DEFAULT_STEPS = ['address', 'delivery', 'payment', 'summary']
SUMMARY = 'summary'

# Basket part each step is responsible for
STEP_PARTS = {
    'address': PARTS_ADDRESS,
    'delivery': PARTS_DELIVERY,
    'payment': PARTS_PAYMENT,
}


def configured_steps():
    return list(getattr(settings, 'CHECKOUT_STEPS', None) or DEFAULT_STEPS)


def onepage_steps():
    return list(getattr(settings, 'CHECKOUT_ONEPAGE', None) or [])


def is_visible(step, active_step, onepage=None):
    """
    A step is shown if it's the active one or if the one-page list contains
    both the step and the active step.
    """
    if onepage is None:
        onepage = onepage_steps()
    return step == active_step or (step in onepage and active_step in onepage)


def resolve_active_step(request, basket):
    """
    Return the step requested by ``c_step`` if it's configured, otherwise the
    first step whose basket part is still missing and the last step if the
    basket is complete.
    """
    steps = configured_steps()
    requested = request.POST.get('c_step') or request.GET.get('c_step')
    if requested in steps:
        return requested

    for step in steps:
        part = STEP_PARTS.get(step)
        if part is not None and basket.missing_part((part,)) is not None:
            return step

    return SUMMARY if SUMMARY in steps else steps[-1]


def step_links(active_step):
    """Step names with their state for the progress bar."""
    steps = configured_steps()
    index = steps.index(active_step) if active_step in steps else len(steps)
    return [
        {'name': step, 'active': step == active_step, 'done': pos < index}
        for pos, step in enumerate(steps)
    ]
