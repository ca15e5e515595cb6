from django.contrib import admin
from django.db.models import Count
from django.utils.html import format_html
from .models import SalesPerson


@admin.register(SalesPerson)
class SalesPersonAdmin(admin.ModelAdmin):

    list_display = ['name', 'email', 'phone', 'status_badge', 'lead_count', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'email', 'phone']
    raw_id_fields = ['user', 'created_by']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Sales Person', {
            'fields': ('name', 'email', 'phone', 'status')
        }),
        ('Login', {
            'fields': ('user',),
            'description': 'Changing the email here does not update the login email'
        }),
        ('Timestamps', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_lead_count=Count('leads'))

    def status_badge(self, obj):
        color = '#28a745' if obj.is_active() else '#dc3545'
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            color, obj.get_status_display()
        )

    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def lead_count(self, obj):
        return obj._lead_count

    lead_count.short_description = 'Leads'
    lead_count.admin_order_field = '_lead_count'
