from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - PipelineStage model (the Kanban columns)
        - Admin dashboard and analytics views
        - Seeding of default data (API, command, post_migrate)
        - Validators shared by the other apps
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'

    def ready(self):
        # Registers the post_migrate seeding hook
        import apps.core.signals  # noqa: F401
