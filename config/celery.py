# Celery is a distributed task queue for running background jobs

# - Send lead follow-up reminders
# - Distribute unassigned leads across the sales team
#
# Start worker: celery -A config worker -l info
# Start beat: celery -A config beat -l info
# ==============================================================================

import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for Celery
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# 'axisphere' is the app name (appears in logs and monitoring)
app = Celery('axisphere')

# All settings prefixed with 'CELERY_' will be used
# Example: CELERY_BROKER_URL, CELERY_RESULT_BACKEND
app.config_from_object('django.conf:settings', namespace='CELERY')

# Looks for tasks.py file in each installed app
app.autodiscover_tasks()


# CELERY BEAT SCHEDULE (Periodic Tasks)

app.conf.beat_schedule = {
    # Notify sales persons about due lead reminders every 15 minutes
    'send-lead-reminders': {
        'task': 'apps.leads.tasks.send_reminder_notifications',
        'schedule': crontab(minute='*/15'),
    },
}


# CELERY TASK ANNOTATIONS

app.conf.task_annotations = {
    # One bulk distribution at a time is plenty
    'apps.leads.tasks.auto_assign_leads_task': {
        'rate_limit': '6/m',
    },
}
