"""
Default data for a fresh database: the admin login, the lead pipeline
and the package catalogue.

Every helper is idempotent and can be called from the seed API,
the `seed_crm` management command or the post_migrate hook.
"""

import logging
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.core.models import PipelineStage
from apps.invoices.models import Package
from apps.sales.models import SalesPerson

logger = logging.getLogger(__name__)


DEFAULT_PIPELINE_STAGES = [
    {'name': 'No Stage', 'order_index': 0, 'color': 'gray'},
    {'name': 'Lead', 'order_index': 1, 'color': 'blue'},
    {'name': 'Qualified', 'order_index': 2, 'color': 'purple'},
    {'name': 'Negotiation', 'order_index': 3, 'color': 'yellow'},
    {'name': 'Result', 'order_index': 4, 'color': 'green'},
]

PACKAGE_DESCRIPTION = 'Scalable, results-driven solutions designed to grow with your business.'

DEFAULT_PACKAGES = [
    {
        'name': 'AI Starter Package',
        'price': Decimal('30000'),
        'description': PACKAGE_DESCRIPTION,
        'features': [
            '20 AI-generated social media posts per month',
            '24 optimized blog articles (800-1200 words each)',
            'AI-driven content calendar and scheduling',
            'Basic AI copywriting for ads and emails',
            'Campaign strategy development and setup',
            '5 more features',
        ],
        'is_active': True,
    },
    {
        'name': 'AI Growth Package',
        'price': Decimal('75000'),
        'description': PACKAGE_DESCRIPTION,
        'features': [
            '50 AI-generated social media posts per month',
            '8 optimized blog articles (800-1200 words each)',
            'Dynamic content personalization for different audience segments',
            'Advanced audience modeling and targeting',
            'Comprehensive campaign strategy across Google, Facebook, LinkedIn',
            'Advanced predictive analytics and forecasting',
            '7 more features',
        ],
        'is_active': True,
    },
    {
        'name': 'AI Enterprise Package',
        'price': Decimal('150000'),
        'description': PACKAGE_DESCRIPTION,
        'features': [
            '100+ AI-generated social media posts per month',
            '15 AI-optimized long-form content with advanced SEO',
            'Advanced predictive analytics and forecasting',
            'Custom AI model training for your brand voice',
            'Integration with enterprise CRM and marketing automation',
            'Multi-language support (71+ languages)',
            '24/7 priority support with 1-hour response time',
            'Quarterly business reviews and strategy consultation',
            '5 more features',
        ],
        'is_active': True,
    },
]


def ensure_pipeline_stages():
    """Create any missing default stage. Returns how many were created."""
    created_count = 0

    for stage in DEFAULT_PIPELINE_STAGES:
        _, created = PipelineStage.objects.get_or_create(
            name=stage['name'],
            defaults={'order_index': stage['order_index'], 'color': stage['color']},
        )
        if created:
            created_count += 1

    if created_count:
        logger.info("Created %d pipeline stage(s)", created_count)
    return created_count


def ensure_default_packages():
    """
    Insert the default catalogue when the packages table is empty.

    Returns the number of packages created (0 when some already exist).
    """
    if Package.objects.exists():
        return 0

    with transaction.atomic():
        packages = Package.objects.bulk_create(
            [Package(**data) for data in DEFAULT_PACKAGES]
        )

    logger.info("Created %d default package(s)", len(packages))
    return len(packages)


def ensure_admin_user():
    """
    Create the default admin login and its sales-person record.

    Returns (user, created).
    """
    User = get_user_model()
    email = settings.SEED_ADMIN_EMAIL.lower()

    admin = User.objects.filter(email=email).first()
    if admin is not None:
        return admin, False

    with transaction.atomic():
        admin = User.objects.create_user(
            email=email,
            password=settings.SEED_ADMIN_PASSWORD,
            first_name='Admin',
            last_name='User',
            role=User.ROLE_ADMIN,
            is_staff=True,
        )
        SalesPerson.objects.create(
            user=admin,
            name='Admin User',
            email=email,
            phone='',
            status=SalesPerson.STATUS_ACTIVE,
            created_by=admin,
        )

    logger.info("Created default admin %s", email)
    return admin, True


def seed_database():
    """
    Seed admin, pipeline and packages.

    Returns a summary dict:
        {'admin': user, 'admin_created': bool,
         'stages_created': int, 'packages_created': int}
    """
    admin, admin_created = ensure_admin_user()
    stages_created = ensure_pipeline_stages()
    packages_created = ensure_default_packages()

    return {
        'admin': admin,
        'admin_created': admin_created,
        'stages_created': stages_created,
        'packages_created': packages_created,
    }
