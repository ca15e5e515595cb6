from django.db import models
from django.utils import timezone
from django.urls import reverse
from apps.accounts.models import User
from apps.core.models import PipelineStage
from apps.sales.models import SalesPerson
from taggit.managers import TaggableManager


class Lead(models.Model):

    COMPANY_SIZE_CHOICES = [
        ('1-10', '1-10'),
        ('11-50', '11-50'),
        ('51-200', '51-200'),
        ('201-1000', '201-1000'),
        ('1000+', '1000+'),
    ]

    # Basic Information
    name = models.CharField(max_length=200, help_text="Lead's full name")
    job_title = models.CharField(max_length=200, blank=True, help_text='Role at their company (e.g. Head of Marketing)')
    company = models.CharField(max_length=200, help_text='Company the lead works for')
    location = models.CharField(max_length=200, blank=True, help_text='City / country')
    company_size = models.CharField(max_length=20, choices=COMPANY_SIZE_CHOICES, blank=True, help_text='Employee head-count bracket')

    # Classification
    industries = models.JSONField(default=list, blank=True, help_text='Industries the company operates in')
    keywords = TaggableManager(blank=True)
    links = models.JSONField(default=list, blank=True, help_text='Website, LinkedIn and other URLs')
    notes = models.TextField(blank=True, help_text='General notes about this lead')

    # Pipeline
    status = models.ForeignKey(PipelineStage, on_delete=models.PROTECT, related_name='leads', help_text='Current pipeline stage')
    assigned_to = models.ForeignKey(SalesPerson, on_delete=models.SET_NULL, null=True, blank=True, related_name='leads', db_index=True, help_text='Sales person responsible for this lead')
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_leads', help_text='Who entered this lead')

    # Follow-up & deal value
    next_reminder = models.DateTimeField(null=True, blank=True, db_index=True, help_text='When should the owner follow up?')
    reminder_sent_at = models.DateTimeField(null=True, blank=True, help_text='When the reminder for next_reminder was sent')
    amount_inr = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, help_text='Expected deal value (INR)')
    amount_usd = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, help_text='Expected deal value (USD)')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True, help_text='When was this lead created')
    updated_at = models.DateTimeField(auto_now=True, help_text='When was this lead last updated')

    class Meta:
        db_table = 'leads'
        verbose_name = 'Lead'
        verbose_name_plural = 'Leads'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'assigned_to'], name='leads_status_assigned_idx'),
            models.Index(fields=['next_reminder', 'reminder_sent_at'], name='leads_reminder_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.company})"

    def get_absolute_url(self):
        return reverse('leads:lead_detail', kwargs={'pk': self.pk})

    def get_initials(self):
        """'Priya Sharma' → 'PS'"""
        parts = self.name.split()
        if len(parts) >= 2:
            return f"{parts[0][0]}{parts[1][0]}".upper()
        elif len(parts) == 1:
            return parts[0][0].upper()
        return "?"

    # CONTACT DETAILS
    def get_emails(self):
        return [e.email for e in self.emails.all()]

    def get_phones(self):
        return [p.phone for p in self.phones.all()]

    @property
    def primary_email(self):
        emails = self.get_emails()
        return emails[0] if emails else ''

    @property
    def primary_phone(self):
        phones = self.get_phones()
        return phones[0] if phones else ''

    # PIPELINE ACTIONS
    def assign_to(self, sales_person, assigned_by=None):
        """
        Assign lead to a sales person (None unassigns)
        Updates assigned_to field and creates activity log
        """
        self.assigned_to = sales_person
        self.save(update_fields=['assigned_to', 'updated_at'])

        description = f'Assigned to {sales_person.name}' if sales_person else 'Unassigned'
        Activity.objects.create(
            lead=self,
            user=assigned_by,
            activity_type='assigned',
            description=description
        )

    def change_status(self, new_status, user=None):
        """Move the lead to another pipeline stage. Returns False if nothing changed."""
        old_status = self.status
        if old_status.pk == new_status.pk:
            return False

        self.status = new_status
        self.save(update_fields=['status', 'updated_at'])

        Activity.objects.create(
            lead=self,
            user=user,
            activity_type='stage_changed',
            description=f'Stage changed from "{old_status.name}" to "{new_status.name}"'
        )
        return True

    def get_activities(self):
        """Get all activities for this lead (ordered newest first)"""
        return self.activities.all().select_related('user').order_by('-created_at')

    def time_since_created(self):
        """Returns time elapsed since lead was created"""
        delta = timezone.now() - self.created_at

        if delta.days > 30:
            months = delta.days // 30
            return f"{months} month{'s' if months > 1 else ''} ago"
        elif delta.days > 0:
            return f"{delta.days} day{'s' if delta.days > 1 else ''} ago"
        elif delta.seconds >= 3600:
            hours = delta.seconds // 3600
            return f"{hours} hour{'s' if hours > 1 else ''} ago"
        elif delta.seconds >= 60:
            minutes = delta.seconds // 60
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
        else:
            return "Just now"

    def time_until_reminder(self):
        if not self.next_reminder:
            return None

        delta = self.next_reminder - timezone.now()

        if delta.total_seconds() < 0:
            return "Overdue"

        if delta.days > 0:
            return f"In {delta.days} day{'s' if delta.days > 1 else ''}"
        elif delta.seconds >= 3600:
            hours = delta.seconds // 3600
            return f"In {hours} hour{'s' if hours > 1 else ''}"
        else:
            minutes = delta.seconds // 60
            return f"In {minutes} minute{'s' if minutes > 1 else ''}"


class LeadEmail(models.Model):

    lead = models.ForeignKey(Lead, on_delete=models.CASCADE, related_name='emails')
    email = models.CharField(max_length=255, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lead_emails'
        ordering = ['id']

    def __str__(self):
        return self.email


class LeadPhone(models.Model):

    lead = models.ForeignKey(Lead, on_delete=models.CASCADE, related_name='phones')
    phone = models.CharField(max_length=30, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lead_phones'
        ordering = ['id']

    def __str__(self):
        return self.phone


class Activity(models.Model):

    ACTIVITY_TYPE_CHOICES = [
        ('created', 'Created'),
        ('updated', 'Updated'),
        ('assigned', 'Assigned'),
        ('stage_changed', 'Stage Changed'),
        ('reminder_due', 'Reminder Due'),
    ]

    lead = models.ForeignKey(Lead, on_delete=models.CASCADE, related_name='activities', help_text='Which lead this activity is for')
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='activities', help_text='Who performed this action')
    activity_type = models.CharField(max_length=30, choices=ACTIVITY_TYPE_CHOICES, help_text='Type of activity/action')
    description = models.TextField(help_text='Human-readable description of what happened')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True, help_text='When did this activity occur')

    class Meta:
        verbose_name = 'Activity'
        verbose_name_plural = 'Activities'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['lead', '-created_at'], name='activity_lead_created_idx'),
        ]

    def __str__(self):
        user_name = self.user.get_full_name() if self.user else 'System'
        return f"{user_name}: {self.description}"
