from django.contrib import admin
from django.utils.html import format_html
from .models import Package, Invoice


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):

    list_display = ['name', 'price', 'feature_count', 'is_active_badge', 'updated_at']
    list_filter = ['is_active']
    search_fields = ['name', 'description']
    ordering = ['price', 'name']
    readonly_fields = ['created_at', 'updated_at']

    def feature_count(self, obj):
        return len(obj.features or [])
    feature_count.short_description = 'Features'

    def is_active_badge(self, obj):
        if obj.is_active:
            return format_html('<span style="color: #28a745;">Active</span>')
        return format_html('<span style="color: #dc3545;">Inactive</span>')
    is_active_badge.short_description = 'Status'


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):

    list_display = ['invoice_number', 'customer_name', 'package_name', 'total_amount', 'created_at']
    list_filter = ['package', 'created_at']
    search_fields = ['invoice_number', 'customer_name', 'customer_email', 'company_name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'
    list_per_page = 50

    fieldsets = [
        ('Invoice', {
            'fields': ['invoice_number', 'created_by', 'created_at']
        }),
        ('Customer', {
            'fields': ['customer_name', 'customer_email', 'customer_phone', 'company_name']
        }),
        ('Package', {
            'fields': ['package', 'package_name', 'features']
        }),
        ('Amounts', {
            'fields': ['base_price', 'gst_percentage', 'gst_amount', 'total_amount']
        }),
        ('Notes', {
            'fields': ['additional_notes'],
            'classes': ['collapse'],
        }),
    ]

    # Issued invoices are fixed
    readonly_fields = [
        'invoice_number', 'created_by', 'created_at', 'package', 'package_name', 'features',
        'base_price', 'gst_percentage', 'gst_amount', 'total_amount',
    ]

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('package', 'created_by')
