import logging

from celery import shared_task
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.utils import timezone
from .models import Lead
from .services import auto_assign_leads

logger = logging.getLogger(__name__)


@shared_task
def send_reminder_notifications():
    """
    Notify owners of leads whose next_reminder is due.

    Each due reminder is handled once: it is logged on the lead, mailed to
    the assigned sales person (if any) and stamped with reminder_sent_at.
    """
    now = timezone.now()
    leads = Lead.objects.filter(
        next_reminder__isnull=False,
        next_reminder__lte=now,
        reminder_sent_at__isnull=True,
    ).select_related('assigned_to', 'status')

    notifications_sent = 0

    for lead in leads:
        lead.activities.create(
            user=None,
            activity_type='reminder_due',
            description=f'Follow-up reminder for lead "{lead.name}"'
        )

        if lead.assigned_to and lead.assigned_to.email:
            try:
                send_mail(
                    subject=f'Reminder: follow up with {lead.name} ({lead.company})',
                    message=(
                        f'Your follow-up with {lead.name} at {lead.company} is due.\n'
                        f'Stage: {lead.status.name}\n'
                        f'Scheduled for: {timezone.localtime(lead.next_reminder):%Y-%m-%d %H:%M}\n'
                    ),
                    from_email=settings.DEFAULT_FROM_EMAIL,
                    recipient_list=[lead.assigned_to.email],
                )
            except Exception as e:
                # The reminder is still logged on the lead
                logger.error("Reminder mail for lead %s failed: %s", lead.pk, e)

        # update() skips the pre_save hook that clears reminder_sent_at
        Lead.objects.filter(pk=lead.pk).update(reminder_sent_at=now)
        notifications_sent += 1

    if notifications_sent:
        logger.info("Sent %d lead reminder(s)", notifications_sent)

    return f'{notifications_sent} reminder notifications sent.'


@shared_task
def auto_assign_leads_task(assigned_by_id=None):
    """Background run of the auto-assign pass"""
    assigned_by = None
    if assigned_by_id is not None:
        assigned_by = get_user_model().objects.filter(pk=assigned_by_id).first()

    result = auto_assign_leads(assigned_by=assigned_by)
    return f"{result['assigned']} leads assigned across {result['candidates']} sales persons."
