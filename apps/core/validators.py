"""
Field validators shared by sales-person, lead and invoice forms.
"""

import re

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
NON_DIGITS = re.compile(r'\D')

MIN_PHONE_DIGITS = 10


def is_valid_email(value):
    return bool(value) and EMAIL_PATTERN.match(value) is not None


def is_valid_phone(value):
    """At least 10 digits once spaces, dashes, brackets and '+' are dropped"""
    if not value:
        return False
    return len(NON_DIGITS.sub('', value)) >= MIN_PHONE_DIGITS


def validate_email_format(value):
    if not is_valid_email(value):
        raise ValidationError(
            _('Enter a valid email address (e.g. name@company.com).'),
            code='invalid_email',
        )


def validate_phone_number(value):
    if not is_valid_phone(value):
        raise ValidationError(
            _('Phone number must contain at least %(min)d digits.'),
            code='invalid_phone',
            params={'min': MIN_PHONE_DIGITS},
        )


def split_multi_value(raw):
    """
    Split a textarea value into clean entries.

    One entry per line or comma separated; blanks are dropped and
    duplicates removed while keeping the first occurrence order.
    """
    if not raw:
        return []

    seen = []
    for chunk in re.split(r'[\n,]+', raw):
        item = chunk.strip()
        if item and item not in seen:
            seen.append(item)
    return seen
