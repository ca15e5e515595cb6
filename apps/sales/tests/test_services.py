"""
Tests for Sales-Person Onboarding
=================================

Covers:
- split_name
- onboard_sales_person (user + record in one transaction, duplicate email)
- update_sales_person (sync to login, optional password, status)
- delete_sales_person (login removed, leads unassigned)

Run tests:
    python manage.py test apps.sales.tests.test_services
"""

from django.test import TestCase
from django.contrib.auth import get_user_model

from apps.core.models import PipelineStage
from apps.core.seeding import ensure_pipeline_stages
from apps.leads.models import Lead
from apps.sales.models import SalesPerson
from apps.sales.services import (
    OnboardingError,
    split_name,
    onboard_sales_person,
    update_sales_person,
    delete_sales_person,
)

User = get_user_model()


class SplitNameTest(TestCase):

    def test_first_word_and_rest(self):
        self.assertEqual(split_name('Sarah Anne Johnson'), ('Sarah', 'Anne Johnson'))

    def test_single_word(self):
        self.assertEqual(split_name('Sarah'), ('Sarah', ''))

    def test_blank(self):
        self.assertEqual(split_name('   '), ('', ''))


class OnboardSalesPersonTest(TestCase):

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@test.com',
            password='testpass123',
            role='admin'
        )

    def test_creates_login_and_record(self):
        """
        Test: Admin onboards a sales person
        Expected: Sales-role user and linked sales_persons row
        """
        sales_person = onboard_sales_person(
            name='Sarah Johnson',
            email='Sarah@Axisphere.in',
            phone='+91 98765 43210',
            password='secret1',
            created_by=self.admin,
        )

        user = sales_person.user
        self.assertEqual(user.email, 'sarah@axisphere.in')
        self.assertEqual(user.role, User.ROLE_SALES)
        self.assertEqual(user.first_name, 'Sarah')
        self.assertEqual(user.last_name, 'Johnson')
        self.assertTrue(user.check_password('secret1'))

        self.assertEqual(sales_person.email, 'sarah@axisphere.in')
        self.assertEqual(sales_person.status, SalesPerson.STATUS_ACTIVE)
        self.assertEqual(sales_person.created_by, self.admin)

    def test_duplicate_email_rejected(self):
        with self.assertRaises(OnboardingError):
            onboard_sales_person(
                name='Another Admin',
                email='ADMIN@test.com',
                phone='9876543210',
                password='secret1',
            )

        self.assertEqual(SalesPerson.objects.count(), 0)
        self.assertEqual(User.objects.count(), 1)


class UpdateSalesPersonTest(TestCase):

    def setUp(self):
        self.sales_person = onboard_sales_person(
            name='Sarah Johnson',
            email='sarah@axisphere.in',
            phone='9876543210',
            password='secret1',
        )

    def test_updates_record_and_login(self):
        update_sales_person(
            self.sales_person,
            name='Sarah Miller',
            email='sarah.miller@axisphere.in',
            phone='9876500000',
        )

        self.sales_person.refresh_from_db()
        user = User.objects.get(pk=self.sales_person.user_id)

        self.assertEqual(self.sales_person.name, 'Sarah Miller')
        self.assertEqual(user.email, 'sarah.miller@axisphere.in')
        self.assertEqual(user.last_name, 'Miller')
        # Password untouched when not supplied
        self.assertTrue(user.check_password('secret1'))

    def test_new_password_applied(self):
        update_sales_person(
            self.sales_person,
            name='Sarah Johnson',
            email='sarah@axisphere.in',
            phone='9876543210',
            password='changed1',
        )

        user = User.objects.get(pk=self.sales_person.user_id)
        self.assertTrue(user.check_password('changed1'))

    def test_deactivating_disables_login(self):
        update_sales_person(
            self.sales_person,
            name='Sarah Johnson',
            email='sarah@axisphere.in',
            phone='9876543210',
            status=SalesPerson.STATUS_INACTIVE,
        )

        user = User.objects.get(pk=self.sales_person.user_id)
        self.assertFalse(user.is_active)

    def test_email_of_other_user_rejected(self):
        User.objects.create_user(email='taken@axisphere.in', password='secret1')

        with self.assertRaises(OnboardingError):
            update_sales_person(
                self.sales_person,
                name='Sarah Johnson',
                email='taken@axisphere.in',
                phone='9876543210',
            )


class DeleteSalesPersonTest(TestCase):

    def setUp(self):
        ensure_pipeline_stages()
        self.stage = PipelineStage.objects.get(name='No Stage')
        self.sales_person = onboard_sales_person(
            name='Sarah Johnson',
            email='sarah@axisphere.in',
            phone='9876543210',
            password='secret1',
        )

    def test_delete_removes_login_and_unassigns_leads(self):
        lead = Lead.objects.create(
            name='Priya Sharma',
            company='Acme',
            status=self.stage,
            assigned_to=self.sales_person,
        )
        user_id = self.sales_person.user_id

        delete_sales_person(self.sales_person)

        self.assertFalse(SalesPerson.objects.exists())
        self.assertFalse(User.objects.filter(pk=user_id).exists())

        lead.refresh_from_db()
        self.assertIsNone(lead.assigned_to)

    def test_admin_login_survives(self):
        admin = User.objects.create_user(email='boss@test.com', password='secret1', role='admin')
        record = SalesPerson.objects.create(user=admin, name='Boss', email='boss@test.com')

        delete_sales_person(record)

        self.assertTrue(User.objects.filter(pk=admin.pk).exists())
        self.assertFalse(SalesPerson.objects.filter(pk=record.pk).exists())
