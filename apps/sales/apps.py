from django.apps import AppConfig


class SalesConfig(AppConfig):
    """Sales persons: onboarding, profile and the sales dashboard"""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.sales'
    verbose_name = 'Sales'
