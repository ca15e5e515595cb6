"""
Tests for Invoice Services
==========================

Covers:
- calculate_totals (GST arithmetic, half-up rounding)
- generate_invoice_number (format, collision retry)
- create_invoice (snapshot of package, default features and GST)

Run tests:
    python manage.py test apps.invoices.tests.test_services
"""

import re
from datetime import date
from decimal import Decimal
from unittest import mock

from django.test import TestCase, override_settings

from apps.accounts.models import User
from apps.invoices.models import Package, Invoice
from apps.invoices.services import (
    InvoiceError,
    calculate_totals,
    generate_invoice_number,
    create_invoice,
)


class CalculateTotalsTest(TestCase):

    def test_default_rate(self):
        """
        Test: 75000 at 18% GST
        Expected: 13500.00 GST, 88500.00 total
        """
        self.assertEqual(
            calculate_totals(Decimal('75000'), Decimal('18')),
            (Decimal('13500.00'), Decimal('88500.00'))
        )

    def test_zero_rate(self):
        self.assertEqual(
            calculate_totals(Decimal('30000'), Decimal('0')),
            (Decimal('0.00'), Decimal('30000.00'))
        )

    def test_rounds_half_up(self):
        # 0.25 * 18% = 0.045 -> 0.05
        gst, total = calculate_totals(Decimal('0.25'), Decimal('18'))
        self.assertEqual(gst, Decimal('0.05'))
        self.assertEqual(total, Decimal('0.30'))

    def test_fractional_rate(self):
        gst, total = calculate_totals(Decimal('999.99'), Decimal('12.5'))
        self.assertEqual(gst, Decimal('125.00'))
        self.assertEqual(total, Decimal('1124.99'))


class GenerateInvoiceNumberTest(TestCase):

    @override_settings(INVOICE_NUMBER_PREFIX='AXI')
    def test_format(self):
        number = generate_invoice_number(today=date(2024, 1, 15))
        self.assertRegex(number, r'^AXI-20240115-\d{4}$')

    @override_settings(INVOICE_NUMBER_PREFIX='INV')
    def test_prefix_configurable(self):
        self.assertTrue(generate_invoice_number().startswith('INV-'))

    @override_settings(INVOICE_NUMBER_PREFIX='AXI')
    def test_collision_regenerated(self):
        """
        Test: First random suffix already taken
        Expected: Second suffix used
        """
        package = Package.objects.create(name='Collision Test Package', price=Decimal('100'))
        Invoice.objects.create(
            invoice_number='AXI-20240115-0001',
            customer_name='Existing',
            customer_email='existing@test.com',
            package=package,
            package_name=package.name,
            base_price=Decimal('100'),
            gst_amount=Decimal('18'),
            total_amount=Decimal('118'),
        )

        with mock.patch('apps.invoices.services.random.randint', side_effect=[1, 2]):
            number = generate_invoice_number(today=date(2024, 1, 15))

        self.assertEqual(number, 'AXI-20240115-0002')

    def test_gives_up_eventually(self):
        with mock.patch.object(Invoice.objects, 'filter') as mocked_filter:
            mocked_filter.return_value.exists.return_value = True
            with self.assertRaises(InvoiceError):
                generate_invoice_number()


class CreateInvoiceTest(TestCase):

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@test.com', password='testpass123', role='admin'
        )
        self.package = Package.objects.create(
            name='Test Growth Package',
            price=Decimal('75000'),
            features=['Feature A', 'Feature B', 'Feature C'],
        )

    def test_snapshot_and_totals(self):
        invoice = create_invoice(
            package=self.package,
            customer_name='Priya Sharma',
            customer_email='Priya@Acme.com',
            company_name='Acme',
            created_by=self.admin,
        )

        self.assertRegex(invoice.invoice_number, r'^[A-Z]+-\d{8}-\d{4}$')
        self.assertEqual(invoice.customer_email, 'priya@acme.com')
        self.assertEqual(invoice.package_name, 'Test Growth Package')
        self.assertEqual(invoice.features, ['Feature A', 'Feature B', 'Feature C'])
        self.assertEqual(invoice.base_price, Decimal('75000.00'))
        self.assertEqual(invoice.gst_percentage, Decimal('18'))
        self.assertEqual(invoice.gst_amount, Decimal('13500.00'))
        self.assertEqual(invoice.total_amount, Decimal('88500.00'))
        self.assertEqual(invoice.created_by, self.admin)

    def test_selected_features_and_rate(self):
        invoice = create_invoice(
            package=self.package,
            customer_name='Priya Sharma',
            customer_email='priya@acme.com',
            gst_percentage=Decimal('5'),
            features=['Feature B'],
        )

        self.assertEqual(invoice.features, ['Feature B'])
        self.assertEqual(invoice.total_amount, Decimal('78750.00'))

    def test_later_package_edit_does_not_change_invoice(self):
        invoice = create_invoice(
            package=self.package,
            customer_name='Priya Sharma',
            customer_email='priya@acme.com',
        )

        self.package.name = 'Renamed Package'
        self.package.price = Decimal('1')
        self.package.save()

        invoice.refresh_from_db()
        self.assertEqual(invoice.package_name, 'Test Growth Package')
        self.assertEqual(invoice.base_price, Decimal('75000.00'))

    def test_inactive_package_rejected(self):
        self.package.is_active = False
        self.package.save()

        with self.assertRaises(InvoiceError):
            create_invoice(
                package=self.package,
                customer_name='Priya Sharma',
                customer_email='priya@acme.com',
            )

    def test_package_delete_keeps_invoice(self):
        invoice = create_invoice(
            package=self.package,
            customer_name='Priya Sharma',
            customer_email='priya@acme.com',
        )

        self.package.delete()

        invoice.refresh_from_db()
        self.assertIsNone(invoice.package)
        self.assertEqual(invoice.package_name, 'Test Growth Package')
        self.assertTrue(re.match(r'^\w+-\d{8}-\d{4}$', invoice.invoice_number))
