# AXISPHERE CRM - DJANGO MANAGEMENT SCRIPT
# Django's command-line utility for administrative tasks
#
# Common commands:
# - python manage.py runserver          # Start development server
# - python manage.py migrate            # Apply migrations (also seeds pipeline stages & packages)
# - python manage.py seed_crm           # Seed admin user, pipeline stages, packages
# - python manage.py createsuperuser    # Create Django admin superuser
# - python manage.py test               # Run tests
# - python manage.py collectstatic      # Collect static files for production
# ==============================================================================

import os
import sys


def main():
    """Set the settings module and hand the command line to Django."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
