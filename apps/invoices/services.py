"""
Invoice numbering and GST arithmetic.
"""

import logging
import random
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from .models import Invoice

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')
MAX_NUMBER_ATTEMPTS = 10


class InvoiceError(Exception):
    """Raised when an invoice cannot be issued"""


def quantize_money(value):
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_totals(base_price, gst_percentage):
    """
    GST and grand total for a base price.

    Returns:
        tuple: (gst_amount, total_amount), both rounded half-up to paise
    """
    base_price = Decimal(base_price)
    gst_amount = quantize_money(base_price * Decimal(gst_percentage) / Decimal('100'))
    total_amount = quantize_money(base_price + gst_amount)
    return gst_amount, total_amount


def generate_invoice_number(today=None):
    """PREFIX-YYYYMMDD-NNNN, NNNN random; retried until unused"""
    today = today or timezone.localdate()
    prefix = settings.INVOICE_NUMBER_PREFIX

    for _ in range(MAX_NUMBER_ATTEMPTS):
        number = f'{prefix}-{today:%Y%m%d}-{random.randint(0, 9999):04d}'
        if not Invoice.objects.filter(invoice_number=number).exists():
            return number

    raise InvoiceError('Could not allocate a free invoice number, please try again')


def create_invoice(package, customer_name, customer_email, gst_percentage=None,
                   features=None, customer_phone='', company_name='',
                   additional_notes='', created_by=None):
    """
    Issue an invoice for a package.

    `features` defaults to every feature of the package. Package name,
    features and price are copied so the invoice stays fixed.

    Raises:
        InvoiceError: inactive package or no free invoice number
    """
    if not package.is_active:
        raise InvoiceError(f'Package "{package.name}" is not active')

    if gst_percentage is None:
        gst_percentage = Decimal(settings.DEFAULT_GST_PERCENTAGE)

    if features is None:
        features = list(package.features or [])

    base_price = quantize_money(package.price)
    gst_amount, total_amount = calculate_totals(base_price, gst_percentage)

    for attempt in range(MAX_NUMBER_ATTEMPTS):
        try:
            with transaction.atomic():
                invoice = Invoice.objects.create(
                    invoice_number=generate_invoice_number(),
                    customer_name=customer_name,
                    customer_email=customer_email.lower(),
                    customer_phone=customer_phone,
                    company_name=company_name,
                    package=package,
                    package_name=package.name,
                    features=list(features),
                    base_price=base_price,
                    gst_percentage=gst_percentage,
                    gst_amount=gst_amount,
                    total_amount=total_amount,
                    additional_notes=additional_notes,
                    created_by=created_by,
                )
            break
        except IntegrityError:
            # Another request took the same number between check and insert
            logger.warning("Invoice number collision, retrying (attempt %d)", attempt + 1)
    else:
        raise InvoiceError('Could not allocate a free invoice number, please try again')

    logger.info(
        "Invoice %s issued for %s (total %s)", invoice.invoice_number, invoice.customer_name, total_amount
    )
    return invoice
