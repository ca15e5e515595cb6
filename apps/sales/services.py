"""
Sales-person onboarding.

A sales person is two rows: a `users` login with role 'sales' and the
`sales_persons` record. They are always written together.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .models import SalesPerson

logger = logging.getLogger(__name__)


class OnboardingError(Exception):
    """Raised when a sales person cannot be created or updated"""


def split_name(full_name):
    """'Sarah Anne Johnson' → ('Sarah', 'Anne Johnson')"""
    parts = full_name.split()
    if not parts:
        return '', ''
    # Column limits of users.first_name / last_name
    return parts[0][:50], ' '.join(parts[1:])[:100]


def email_in_use(email, exclude_sales_person=None):
    """True if a login or another sales person already owns this email"""
    User = get_user_model()

    users = User.objects.filter(email__iexact=email)
    sales_persons = SalesPerson.objects.filter(email__iexact=email)

    if exclude_sales_person is not None:
        sales_persons = sales_persons.exclude(pk=exclude_sales_person.pk)
        if exclude_sales_person.user_id:
            users = users.exclude(pk=exclude_sales_person.user_id)

    return users.exists() or sales_persons.exists()


def onboard_sales_person(name, email, phone, password, created_by=None):
    """
    Create the login and the sales-person record in one transaction.

    Raises:
        OnboardingError: email already taken, or the database refused the rows
    """
    User = get_user_model()
    email = email.strip().lower()
    name = name.strip()

    if email_in_use(email):
        raise OnboardingError('A user with this email already exists.')

    first_name, last_name = split_name(name)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=User.ROLE_SALES,
            )
            sales_person = SalesPerson.objects.create(
                user=user,
                name=name,
                email=email,
                phone=phone.strip(),
                status=SalesPerson.STATUS_ACTIVE,
                created_by=created_by,
            )
    except IntegrityError as e:
        logger.error("Failed to onboard sales person %s: %s", email, e)
        raise OnboardingError('Could not create the sales person. Please try again.') from e

    logger.info("Onboarded sales person %s (user %s)", sales_person.name, user.pk)
    return sales_person


def update_sales_person(sales_person, name, email, phone, password=None, status=None):
    """
    Update the record and keep its login in sync.

    An empty password leaves the current one unchanged.
    """
    email = email.strip().lower()
    name = name.strip()

    if email_in_use(email, exclude_sales_person=sales_person):
        raise OnboardingError('A user with this email already exists.')

    try:
        with transaction.atomic():
            sales_person.name = name
            sales_person.email = email
            sales_person.phone = phone.strip()
            if status:
                sales_person.status = status
            sales_person.save()

            user = sales_person.user
            if user is not None:
                user.email = email
                user.first_name, user.last_name = split_name(name)
                if status and user.is_sales():
                    user.is_active = status == SalesPerson.STATUS_ACTIVE
                if password:
                    user.set_password(password)
                user.save()
    except IntegrityError as e:
        logger.error("Failed to update sales person %s: %s", sales_person.pk, e)
        raise OnboardingError('Could not update the sales person. Please try again.') from e

    logger.info("Updated sales person %s", sales_person.pk)
    return sales_person


def delete_sales_person(sales_person):
    """
    Remove the sales person and its login.

    Admin logins that double as sales persons keep their account.
    Their leads stay, unassigned (Lead.assigned_to is SET_NULL).
    """
    name = sales_person.name
    user = sales_person.user

    with transaction.atomic():
        if user is not None and not user.is_admin():
            # Cascades to the sales_persons row
            user.delete()
        else:
            sales_person.delete()

    logger.info("Deleted sales person %s", name)
