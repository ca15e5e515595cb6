"""
Lead Models Tests
=================

Test Coverage:
1. Lead Model
   - Contact helpers (emails, phones, primary contact)
   - assign_to / change_status with activity logging
   - Utility methods (get_initials, time_since_created, time_until_reminder)

2. Signals
   - Auto-create activity on lead creation
   - Rescheduling a reminder re-arms it

Run tests:
    python manage.py test apps.leads.tests.test_models
"""

from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from apps.accounts.models import User
from apps.core.models import PipelineStage
from apps.core.seeding import ensure_pipeline_stages
from apps.leads.models import Lead, LeadEmail, LeadPhone, Activity
from apps.sales.models import SalesPerson


class LeadModelTest(TestCase):

    def setUp(self):
        ensure_pipeline_stages()
        self.no_stage = PipelineStage.objects.get(name='No Stage')
        self.qualified = PipelineStage.objects.get(name='Qualified')

        self.admin = User.objects.create_user(
            email='admin@test.com',
            password='testpass123',
            first_name='Admin',
            last_name='User',
            role='admin'
        )
        self.sales_person = SalesPerson.objects.create(
            name='Sarah Johnson',
            email='sarah@axisphere.in',
        )

        self.lead = Lead.objects.create(
            name='Priya Sharma',
            company='Acme Pvt Ltd',
            status=self.no_stage,
            created_by=self.admin,
        )
        LeadEmail.objects.create(lead=self.lead, email='priya@acme.com')
        LeadEmail.objects.create(lead=self.lead, email='priya.sharma@gmail.com')
        LeadPhone.objects.create(lead=self.lead, phone='+91 98765 43210')

    def test_str(self):
        self.assertEqual(str(self.lead), 'Priya Sharma (Acme Pvt Ltd)')

    def test_contact_helpers(self):
        """
        Test: Lead with two emails and one phone
        Expected: Lists in insertion order, first entry is primary
        """
        self.assertEqual(self.lead.get_emails(), ['priya@acme.com', 'priya.sharma@gmail.com'])
        self.assertEqual(self.lead.get_phones(), ['+91 98765 43210'])
        self.assertEqual(self.lead.primary_email, 'priya@acme.com')
        self.assertEqual(self.lead.primary_phone, '+91 98765 43210')

    def test_primary_contact_empty(self):
        lead = Lead.objects.create(name='No Contact', company='Acme', status=self.no_stage)
        self.assertEqual(lead.primary_email, '')
        self.assertEqual(lead.primary_phone, '')

    def test_created_activity_logged(self):
        """
        Test: Lead created
        Expected: One 'created' activity attributed to the creator
        """
        activities = Activity.objects.filter(lead=self.lead, activity_type='created')
        self.assertEqual(activities.count(), 1)
        self.assertEqual(activities.first().user, self.admin)

    def test_assign_to(self):
        self.lead.assign_to(self.sales_person, assigned_by=self.admin)

        self.lead.refresh_from_db()
        self.assertEqual(self.lead.assigned_to, self.sales_person)

        activity = Activity.objects.get(lead=self.lead, activity_type='assigned')
        self.assertIn('Sarah Johnson', activity.description)
        self.assertEqual(activity.user, self.admin)

    def test_unassign(self):
        self.lead.assign_to(self.sales_person)
        self.lead.assign_to(None)

        self.lead.refresh_from_db()
        self.assertIsNone(self.lead.assigned_to)
        self.assertTrue(
            Activity.objects.filter(lead=self.lead, description='Unassigned').exists()
        )

    def test_change_status(self):
        """
        Test: Move lead from 'No Stage' to 'Qualified'
        Expected: Stage saved and a stage_changed activity naming both stages
        """
        changed = self.lead.change_status(self.qualified, user=self.admin)

        self.assertTrue(changed)
        self.lead.refresh_from_db()
        self.assertEqual(self.lead.status, self.qualified)

        activity = Activity.objects.get(lead=self.lead, activity_type='stage_changed')
        self.assertEqual(activity.description, 'Stage changed from "No Stage" to "Qualified"')

    def test_change_status_same_stage_is_noop(self):
        changed = self.lead.change_status(self.no_stage, user=self.admin)

        self.assertFalse(changed)
        self.assertFalse(
            Activity.objects.filter(lead=self.lead, activity_type='stage_changed').exists()
        )

    def test_get_initials(self):
        self.assertEqual(self.lead.get_initials(), 'PS')

        self.lead.name = 'Priya'
        self.assertEqual(self.lead.get_initials(), 'P')

    def test_time_since_created(self):
        self.assertEqual(self.lead.time_since_created(), 'Just now')

    def test_time_until_reminder(self):
        self.assertIsNone(self.lead.time_until_reminder())

        self.lead.next_reminder = timezone.now() - timedelta(minutes=5)
        self.assertEqual(self.lead.time_until_reminder(), 'Overdue')

        self.lead.next_reminder = timezone.now() + timedelta(days=2, hours=1)
        self.assertEqual(self.lead.time_until_reminder(), 'In 2 days')

    def test_contacts_cascade_on_delete(self):
        lead_id = self.lead.pk
        self.lead.delete()

        self.assertFalse(LeadEmail.objects.filter(lead_id=lead_id).exists())
        self.assertFalse(LeadPhone.objects.filter(lead_id=lead_id).exists())
        self.assertFalse(Activity.objects.filter(lead_id=lead_id).exists())

    def test_sales_person_delete_unassigns(self):
        self.lead.assign_to(self.sales_person)
        self.sales_person.delete()

        self.lead.refresh_from_db()
        self.assertIsNone(self.lead.assigned_to)


class ReminderResetSignalTest(TestCase):

    def setUp(self):
        ensure_pipeline_stages()
        self.stage = PipelineStage.objects.get(name='Lead')

    def test_rescheduling_clears_sent_marker(self):
        """
        Test: Reminder already sent, then next_reminder moved
        Expected: reminder_sent_at cleared so the new time is notified
        """
        sent_at = timezone.now()
        lead = Lead.objects.create(
            name='Priya Sharma',
            company='Acme',
            status=self.stage,
            next_reminder=sent_at - timedelta(hours=1),
            reminder_sent_at=sent_at,
        )

        lead.next_reminder = sent_at + timedelta(days=1)
        lead.save()

        lead.refresh_from_db()
        self.assertIsNone(lead.reminder_sent_at)

    def test_other_edits_keep_sent_marker(self):
        sent_at = timezone.now()
        lead = Lead.objects.create(
            name='Priya Sharma',
            company='Acme',
            status=self.stage,
            next_reminder=sent_at - timedelta(hours=1),
            reminder_sent_at=sent_at,
        )

        lead.notes = 'Called, no answer'
        lead.save()

        lead.refresh_from_db()
        self.assertIsNotNone(lead.reminder_sent_at)
