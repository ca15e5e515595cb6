"""
Tests for Dashboard & Analytics
===============================

Covers:
- Admin dashboard metrics
- Sales users redirected to their own dashboard
- Analytics funnel and industry conversion (admin only)
- Stage / industry breakdown helpers

Run tests:
    python manage.py test apps.core.tests.test_views
"""

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.core.models import PipelineStage
from apps.core.seeding import ensure_pipeline_stages
from apps.core.utils import build_stage_breakdown, build_industry_breakdown
from apps.leads.models import Lead
from apps.sales.models import SalesPerson

User = get_user_model()


class DashboardTestMixin:

    def setUp(self):
        ensure_pipeline_stages()
        self.client = Client()
        self.no_stage = PipelineStage.objects.get(name='No Stage')
        self.result = PipelineStage.objects.get(name='Result')

        self.admin = User.objects.create_user(
            email='admin@test.com', password='testpass123', role='admin'
        )
        self.sales_user = User.objects.create_user(
            email='sales@test.com', password='testpass123', role='sales'
        )
        self.sales_person = SalesPerson.objects.create(
            user=self.sales_user, name='Sarah Johnson', email='sales@test.com'
        )

        Lead.objects.create(name='A', company='Acme', status=self.no_stage, industries=['SaaS'])
        Lead.objects.create(
            name='B', company='Globex', status=self.result,
            industries=['SaaS', 'Healthcare'], assigned_to=self.sales_person,
        )
        Lead.objects.create(name='C', company='Initech', status=self.result)
        Lead.objects.create(name='D', company='Umbrella', status=self.no_stage, industries=['Healthcare'])


class DashboardViewTest(DashboardTestMixin, TestCase):

    def test_admin_dashboard(self):
        self.client.login(email='admin@test.com', password='testpass123')
        response = self.client.get(reverse('core:dashboard'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'core/dashboard.html')
        self.assertEqual(response.context['total_leads'], 4)
        self.assertEqual(response.context['unassigned_leads'], 3)
        self.assertEqual(response.context['converted_leads'], 2)
        self.assertEqual(response.context['conversion_rate'], 50.0)
        self.assertEqual(response.context['new_this_week'], 4)

    def test_sales_redirected(self):
        self.client.login(email='sales@test.com', password='testpass123')
        response = self.client.get(reverse('core:dashboard'))

        self.assertRedirects(response, reverse('sales:dashboard'))

    def test_root_redirects_to_dashboard(self):
        self.client.login(email='admin@test.com', password='testpass123')
        response = self.client.get('/')

        self.assertRedirects(response, reverse('core:dashboard'))


class AnalyticsViewTest(DashboardTestMixin, TestCase):

    def test_admin_only(self):
        self.client.login(email='sales@test.com', password='testpass123')
        response = self.client.get(reverse('core:analytics'))

        self.assertEqual(response.status_code, 302)

    def test_industry_conversion(self):
        """
        Test: B tagged SaaS + Healthcare and converted, C has no industry
        Expected: B counted under both industries, C under 'Unspecified'
        """
        self.client.login(email='admin@test.com', password='testpass123')
        response = self.client.get(reverse('core:analytics'))

        self.assertTemplateUsed(response, 'core/analytics.html')
        industries = {row['industry']: row for row in response.context['industries']}

        self.assertEqual(industries['SaaS']['total'], 2)
        self.assertEqual(industries['SaaS']['converted'], 1)
        self.assertEqual(industries['SaaS']['conversion_rate'], 50.0)
        self.assertEqual(industries['Healthcare']['total'], 2)
        self.assertEqual(industries['Unspecified']['converted'], 1)
        self.assertEqual(industries['Unspecified']['conversion_rate'], 100.0)


class BreakdownHelpersTest(DashboardTestMixin, TestCase):

    def test_stage_breakdown_in_board_order(self):
        rows = build_stage_breakdown(Lead.objects.all())

        self.assertEqual([row['name'] for row in rows][0], 'No Stage')
        counts = {row['name']: row['count'] for row in rows}
        self.assertEqual(counts['No Stage'], 2)
        self.assertEqual(counts['Result'], 2)
        self.assertEqual(counts['Lead'], 0)
        self.assertEqual(sum(row['percentage'] for row in rows), 100.0)

    def test_empty_queryset(self):
        rows = build_stage_breakdown(Lead.objects.none())
        self.assertTrue(all(row['percentage'] == 0 for row in rows))
        self.assertEqual(build_industry_breakdown(Lead.objects.none()), [])
