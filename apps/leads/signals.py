from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from .models import Lead, Activity


@receiver(post_save, sender=Lead)
def create_lead_activity(sender, instance, created, **kwargs):

    # Only run for newly created leads (not updates)
    if created:
        Activity.objects.create(
            lead=instance,
            user=instance.created_by,
            activity_type='created',
            description='Lead created'
        )


@receiver(pre_save, sender=Lead)
def reset_reminder_on_reschedule(sender, instance, **kwargs):
    """A new next_reminder has to be notified again"""
    if not instance.pk:
        return

    old_reminder = (
        Lead.objects.filter(pk=instance.pk)
        .values_list('next_reminder', flat=True)
        .first()
    )

    if old_reminder != instance.next_reminder:
        instance.reminder_sent_at = None
