# ==============================================================================
# AXISPHERE CRM - CONFIG PACKAGE INITIALIZER
# ==============================================================================

# Import Celery app to ensure it's loaded when Django starts
# so that shared tasks bind to it and beat picks up the schedule
from .celery import app as celery_app

__all__ = ('celery_app',)
