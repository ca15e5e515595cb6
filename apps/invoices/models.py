from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.urls import reverse


class Package(models.Model):
    """A service package that can be invoiced."""

    name = models.CharField(max_length=200, unique=True, help_text='Package name (e.g. AI Growth Package)')
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))], help_text='Base price in INR, before GST')
    description = models.TextField(blank=True, help_text='Short marketing description')
    features = models.JSONField(default=list, blank=True, help_text='List of feature lines shown on the invoice')
    is_active = models.BooleanField(default=True, db_index=True, help_text='Inactive packages cannot be invoiced')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'packages'
        verbose_name = 'Package'
        verbose_name_plural = 'Packages'
        ordering = ['price', 'name']

    def __str__(self):
        return self.name


class Invoice(models.Model):
    """
    An invoice for one package.

    The package name, selected features and price are copied onto the
    invoice so later catalogue edits do not change issued invoices.
    """

    invoice_number = models.CharField(max_length=30, unique=True, help_text='e.g. AXI-20240115-0427')

    # Customer
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField(max_length=255)
    customer_phone = models.CharField(max_length=30, blank=True)
    company_name = models.CharField(max_length=200, blank=True)

    # Package snapshot
    package = models.ForeignKey(Package, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    package_name = models.CharField(max_length=200)
    features = models.JSONField(default=list, blank=True, help_text='Features selected when the invoice was created')

    # Amounts
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    gst_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('18'),
                                         validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))])
    gst_amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)

    additional_notes = models.TextField(blank=True)

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'invoices'
        verbose_name = 'Invoice'
        verbose_name_plural = 'Invoices'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.invoice_number} - {self.customer_name}"

    def get_absolute_url(self):
        return reverse('invoices:invoice_detail', kwargs={'pk': self.pk})
