from django.conf import settings
from django.db import models
from django.urls import reverse


class SalesPerson(models.Model):
    """
    A member of the sales team.

    Every sales person is backed by a login (`user`, role 'sales').
    Leads point here through `Lead.assigned_to`.
    """

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name='sales_person', help_text='Login account of this sales person')
    name = models.CharField(max_length=200, help_text="Sales person's full name")
    email = models.EmailField(max_length=255, unique=True, help_text='Work email (also the login email)')
    phone = models.CharField(max_length=30, blank=True, help_text='Contact number, at least 10 digits')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True, help_text='Inactive sales persons are skipped by auto-assign')

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_sales_persons', help_text='Admin who onboarded this sales person')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sales_persons'
        verbose_name = 'Sales Person'
        verbose_name_plural = 'Sales Persons'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.name} ({self.email})"

    def get_absolute_url(self):
        return reverse('sales:edit', kwargs={'pk': self.pk})

    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    def get_initials(self):
        parts = self.name.split()
        if len(parts) >= 2:
            return f"{parts[0][0]}{parts[1][0]}".upper()
        return self.name[:1].upper()
