import logging

from django.conf import settings
from django.db.models.signals import post_migrate
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_migrate)
def seed_reference_data(sender, app_config=None, **kwargs):
    """
    Fill pipeline stages and packages after `migrate`.

    Runs once per migrate (keyed on the core app). Best effort: a failure
    is logged and never aborts the migration.
    """
    if app_config is None or app_config.name != 'apps.core':
        return

    if not getattr(settings, 'AUTO_SEED', False):
        return

    from .seeding import ensure_default_packages, ensure_pipeline_stages

    try:
        ensure_pipeline_stages()
        ensure_default_packages()
    except Exception:
        logger.exception("Automatic seeding after migrate failed")
