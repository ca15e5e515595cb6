"""
Lead Views Tests
================

Test Coverage:
1. List View - search, stage and unassigned filters, visibility
2. Kanban View - one column per stage
3. Create / Edit / Detail Views
4. Delete / Assign / Auto-assign (admin only)
5. Change Status View - form post and AJAX drop
6. Export View - Excel and CSV

Run tests:
    python manage.py test apps.leads.tests.test_views
"""

import json

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages

from apps.core.models import PipelineStage
from apps.core.seeding import ensure_pipeline_stages
from apps.leads.models import Lead, LeadEmail, Activity
from apps.leads.services import create_lead
from apps.sales.models import SalesPerson
from apps.sales.services import onboard_sales_person

User = get_user_model()


class LeadViewTestMixin:

    def setUp(self):
        ensure_pipeline_stages()
        self.client = Client()
        self.no_stage = PipelineStage.objects.get(name='No Stage')
        self.lead_stage = PipelineStage.objects.get(name='Lead')

        self.admin = User.objects.create_user(
            email='admin@test.com',
            password='testpass123',
            first_name='Admin',
            role='admin'
        )

        self.sales_person = onboard_sales_person(
            name='Sarah Johnson',
            email='sarah@axisphere.in',
            phone='9876543210',
            password='secret1',
        )
        self.sales_user = self.sales_person.user

        self.other_sales_person = onboard_sales_person(
            name='Ravi Kumar',
            email='ravi@axisphere.in',
            phone='9876543211',
            password='secret1',
        )

        self.own_lead = create_lead(
            emails=['priya@acme.com'],
            name='Priya Sharma',
            company='Acme',
            assigned_to=self.sales_person,
        )
        self.other_lead = create_lead(
            phones=['9988776655'],
            name='Arjun Mehta',
            company='Globex',
            assigned_to=self.other_sales_person,
        )
        self.unassigned_lead = create_lead(
            emails=['neha@initech.in'],
            name='Neha Gupta',
            company='Initech',
        )

    def login_admin(self):
        self.client.login(email='admin@test.com', password='testpass123')

    def login_sales(self):
        self.client.login(email='sarah@axisphere.in', password='secret1')


class LeadListViewTest(LeadViewTestMixin, TestCase):

    def test_requires_login(self):
        response = self.client.get(reverse('leads:lead_list'))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse('accounts:login'), response.url)

    def test_admin_sees_all(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_list'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'leads/lead_list.html')
        self.assertEqual(response.context['total_count'], 3)
        self.assertEqual(response.context['unassigned_count'], 1)

    def test_sales_sees_own_leads(self):
        """
        Test: Sales user opens the list
        Expected: Only the lead assigned to them
        """
        self.login_sales()
        response = self.client.get(reverse('leads:lead_list'))

        self.assertEqual(response.context['total_count'], 1)
        self.assertContains(response, 'Priya Sharma')
        self.assertNotContains(response, 'Arjun Mehta')

    def test_sales_sees_leads_they_created(self):
        create_lead(
            created_by=self.sales_user,
            emails=['new@lead.com'],
            name='Self Sourced',
            company='Umbrella',
        )
        self.login_sales()
        response = self.client.get(reverse('leads:lead_list'))

        self.assertEqual(response.context['total_count'], 2)

    def test_search_by_email(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_list'), {'search': 'initech'})

        self.assertEqual(response.context['total_count'], 1)
        self.assertContains(response, 'Neha Gupta')

    def test_search_by_phone(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_list'), {'search': '99887'})

        self.assertEqual(response.context['total_count'], 1)

    def test_search_with_several_contacts_not_duplicated(self):
        LeadEmail.objects.create(lead=self.own_lead, email='priya.alt@acme.com')
        self.login_admin()
        response = self.client.get(reverse('leads:lead_list'), {'search': 'acme'})

        self.assertEqual(response.context['total_count'], 1)

    def test_filter_by_stage(self):
        self.own_lead.change_status(self.lead_stage)
        self.login_admin()
        response = self.client.get(reverse('leads:lead_list'), {'status': self.lead_stage.pk})

        self.assertEqual(response.context['total_count'], 1)

    def test_filter_unassigned(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_list'), {'unassigned': 'on'})

        self.assertEqual(response.context['total_count'], 1)
        self.assertContains(response, 'Neha Gupta')


class LeadKanbanViewTest(LeadViewTestMixin, TestCase):

    def test_columns_in_stage_order(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_kanban'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'leads/lead_kanban.html')

        stages_data = response.context['stages_data']
        self.assertEqual(
            [column['stage'] for column in stages_data],
            list(PipelineStage.objects.order_by('order_index', 'id'))
        )
        self.assertEqual(stages_data[0]['count'], 3)
        self.assertEqual(response.context['total_count'], 3)


class LeadCreateViewTest(LeadViewTestMixin, TestCase):

    def test_get_form(self):
        self.login_sales()
        response = self.client.get(reverse('leads:lead_create'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'leads/lead_form.html')

    def test_create_lead(self):
        """
        Test: Sales user submits a lead with two emails
        Expected: Lead stored with contacts, default stage, redirect to detail
        """
        self.login_sales()
        response = self.client.post(reverse('leads:lead_create'), {
            'name': 'Kiran Rao',
            'company': 'Wayne Enterprises',
            'emails': 'kiran@wayne.com\nkiran.rao@gmail.com',
            'phones': '',
            'industries': 'Manufacturing',
            'keywords': 'ai, automation',
        })

        lead = Lead.objects.get(name='Kiran Rao')
        self.assertRedirects(response, reverse('leads:lead_detail', kwargs={'pk': lead.pk}))
        self.assertEqual(lead.get_emails(), ['kiran@wayne.com', 'kiran.rao@gmail.com'])
        self.assertEqual(lead.status, self.no_stage)
        self.assertEqual(lead.created_by, self.sales_user)
        self.assertEqual(lead.industries, ['Manufacturing'])
        self.assertEqual(sorted(lead.keywords.names()), ['ai', 'automation'])

    def test_create_without_contact_fails(self):
        self.login_sales()
        response = self.client.post(reverse('leads:lead_create'), {
            'name': 'Kiran Rao',
            'company': 'Wayne Enterprises',
            'emails': '',
            'phones': '',
        })

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Lead.objects.filter(name='Kiran Rao').exists())


class LeadDetailEditViewTest(LeadViewTestMixin, TestCase):

    def test_detail_visible_to_owner(self):
        self.login_sales()
        response = self.client.get(reverse('leads:lead_detail', kwargs={'pk': self.own_lead.pk}))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'leads/lead_detail.html')
        self.assertEqual(response.context['emails'], ['priya@acme.com'])

    def test_detail_hidden_from_other_sales(self):
        self.login_sales()
        response = self.client.get(reverse('leads:lead_detail', kwargs={'pk': self.other_lead.pk}))

        self.assertRedirects(response, reverse('leads:lead_list'))

    def test_edit_lead(self):
        self.login_sales()
        response = self.client.post(
            reverse('leads:lead_edit', kwargs={'pk': self.own_lead.pk}),
            {
                'name': 'Priya Sharma',
                'company': 'Acme Global',
                'emails': 'priya@acme.com',
                'phones': '9876500000',
                'status': self.lead_stage.pk,
            }
        )

        self.assertRedirects(response, reverse('leads:lead_detail', kwargs={'pk': self.own_lead.pk}))
        self.own_lead.refresh_from_db()
        self.assertEqual(self.own_lead.company, 'Acme Global')
        self.assertEqual(self.own_lead.get_phones(), ['9876500000'])
        # Sales users cannot reassign via the edit form
        self.assertEqual(self.own_lead.assigned_to, self.sales_person)


class LeadAdminActionsTest(LeadViewTestMixin, TestCase):

    def test_delete_admin_only(self):
        self.login_sales()
        self.client.post(reverse('leads:lead_delete', kwargs={'pk': self.own_lead.pk}))
        self.assertTrue(Lead.objects.filter(pk=self.own_lead.pk).exists())

        self.client.logout()
        self.login_admin()
        response = self.client.post(reverse('leads:lead_delete', kwargs={'pk': self.own_lead.pk}))

        self.assertRedirects(response, reverse('leads:lead_list'))
        self.assertFalse(Lead.objects.filter(pk=self.own_lead.pk).exists())

    def test_delete_requires_post(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_delete', kwargs={'pk': self.own_lead.pk}))

        self.assertEqual(response.status_code, 405)

    def test_assign(self):
        self.login_admin()
        response = self.client.post(
            reverse('leads:lead_assign', kwargs={'pk': self.unassigned_lead.pk}),
            {'assigned_to': self.other_sales_person.pk}
        )

        self.assertRedirects(response, reverse('leads:lead_detail', kwargs={'pk': self.unassigned_lead.pk}))
        self.unassigned_lead.refresh_from_db()
        self.assertEqual(self.unassigned_lead.assigned_to, self.other_sales_person)

    def test_auto_assign(self):
        """
        Test: Admin runs auto-assign with one unassigned lead
        Expected: Lead handed to a sales person, JSON summary for AJAX
        """
        self.login_admin()
        response = self.client.post(
            reverse('leads:lead_auto_assign'),
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertTrue(data['success'])
        self.assertEqual(data['assigned'], 1)
        self.assertEqual(data['candidates'], 2)
        self.assertEqual(list(get_messages(response.wsgi_request)), [])

        self.unassigned_lead.refresh_from_db()
        self.assertIsNotNone(self.unassigned_lead.assigned_to)

    def test_auto_assign_forbidden_for_sales(self):
        self.login_sales()
        response = self.client.post(
            reverse('leads:lead_auto_assign'),
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(list(get_messages(response.wsgi_request)), [])
        self.unassigned_lead.refresh_from_db()
        self.assertIsNone(self.unassigned_lead.assigned_to)

    def test_auto_assign_form_post_flashes_summary(self):
        self.login_admin()
        response = self.client.post(reverse('leads:lead_auto_assign'))

        self.assertRedirects(response, reverse('leads:lead_list'), fetch_redirect_response=False)
        self.assertEqual(
            [str(m) for m in get_messages(response.wsgi_request)],
            ['1 lead(s) assigned across 2 sales person(s)']
        )

    def test_assign_ajax(self):
        self.login_admin()
        response = self.client.post(
            reverse('leads:lead_assign', kwargs={'pk': self.unassigned_lead.pk}),
            {'assigned_to': self.sales_person.pk},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        self.assertEqual(json.loads(response.content), {'success': True, 'assigned_to': 'Sarah Johnson'})
        self.assertEqual(list(get_messages(response.wsgi_request)), [])


class LeadChangeStatusViewTest(LeadViewTestMixin, TestCase):

    def test_ajax_drop(self):
        """
        Test: Kanban card dropped on 'Lead' column
        Expected: JSON with the new stage, activity logged
        """
        self.login_sales()
        response = self.client.post(
            reverse('leads:lead_change_status', kwargs={'pk': self.own_lead.pk}),
            {'status': self.lead_stage.pk},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertTrue(data['success'])
        self.assertTrue(data['changed'])
        self.assertEqual(data['status'], self.lead_stage.pk)
        self.assertEqual(data['status_display'], 'Lead')

        self.own_lead.refresh_from_db()
        self.assertEqual(self.own_lead.status, self.lead_stage)
        self.assertTrue(
            Activity.objects.filter(lead=self.own_lead, activity_type='stage_changed').exists()
        )

    def test_same_stage_is_noop(self):
        self.login_sales()
        response = self.client.post(
            reverse('leads:lead_change_status', kwargs={'pk': self.own_lead.pk}),
            {'status': self.no_stage.pk},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        data = json.loads(response.content)
        self.assertFalse(data['changed'])
        self.assertFalse(
            Activity.objects.filter(lead=self.own_lead, activity_type='stage_changed').exists()
        )

    def test_invalid_stage(self):
        self.login_sales()
        response = self.client.post(
            reverse('leads:lead_change_status', kwargs={'pk': self.own_lead.pk}),
            {'status': 999999},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(list(get_messages(response.wsgi_request)), [])

    def test_other_users_lead_forbidden(self):
        self.login_sales()
        response = self.client.post(
            reverse('leads:lead_change_status', kwargs={'pk': self.other_lead.pk}),
            {'status': self.lead_stage.pk},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(list(get_messages(response.wsgi_request)), [])
        self.other_lead.refresh_from_db()
        self.assertEqual(self.other_lead.status, self.no_stage)


class LeadExportViewTest(LeadViewTestMixin, TestCase):

    def test_excel_export(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_export'), {'format': 'excel'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        self.assertIn('.xlsx', response['Content-Disposition'])

    def test_csv_export_respects_visibility(self):
        self.login_sales()
        response = self.client.get(reverse('leads:lead_export'), {'format': 'csv'})

        content = response.content.decode('utf-8-sig')
        self.assertIn('Priya Sharma', content)
        self.assertIn('priya@acme.com', content)
        self.assertNotIn('Arjun Mehta', content)

    def test_invalid_format(self):
        self.login_admin()
        response = self.client.get(reverse('leads:lead_export'), {'format': 'pdf'})

        self.assertRedirects(response, reverse('leads:lead_list'))
