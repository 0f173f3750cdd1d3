# integrations/payment_links.py

import logging
import math

from django.conf import settings

from core.exceptions import IntegrationError

from .http import call_service

logger = logging.getLogger(__name__)

STRIPE_API_BASE = 'https://api.stripe.com/v1'
PROPERTY_FEE_PRODUCT = 'Property Fee (1 month rent)'


def _stripe_post(path, data):
    headers = {'Authorization': f"Bearer {settings.STRIPE_SECRET_KEY}"}
    return call_service('stripe', 'POST', f"{STRIPE_API_BASE}/{path}", settings.PAYMENT_TIMEOUT, data=data, headers=headers)


def create_property_fee_link(amount, image_url=None, metadata=None):
    """
    Create a Stripe payment link charging one month of rent.

    The amount is rounded up to a whole currency unit. Raises IntegrationError
    on any failure; submission treats that as non-fatal.
    """
    if not settings.STRIPE_SECRET_KEY:
        raise IntegrationError('stripe', 'Stripe secret key is not configured')

    unit_amount = int(math.ceil(float(amount))) * 100

    product_data = {'name': PROPERTY_FEE_PRODUCT}
    if image_url:
        product_data['images[0]'] = image_url
    product = _stripe_post('products', product_data)

    price = _stripe_post('prices', {
        'unit_amount': unit_amount,
        'currency': settings.STRIPE_CURRENCY,
        'product': product['id'],
    })

    link_data = {
        'line_items[0][price]': price['id'],
        'line_items[0][quantity]': 1,
    }
    for key, value in (metadata or {}).items():
        link_data[f"metadata[{key}]"] = value
    link = _stripe_post('payment_links', link_data)

    url = link.get('url')
    if not url:
        raise IntegrationError('stripe', 'Payment link response has no url')
    logger.info("Created property fee payment link", extra={'amount': unit_amount, 'price_id': price['id']})
    return url
