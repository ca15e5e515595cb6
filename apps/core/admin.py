from django.contrib import admin
from django.utils.html import format_html
from .models import PipelineStage


# Swatches for the stage colour names
STAGE_COLOR_HEX = {
    'gray': '#6c757d',
    'blue': '#0d6efd',
    'purple': '#6f42c1',
    'yellow': '#ffc107',
    'green': '#28a745',
    'red': '#dc3545',
}


@admin.register(PipelineStage)
class PipelineStageAdmin(admin.ModelAdmin):

    list_display = [
        'order_index',
        'name',
        'color_preview',
        'leads_count',
    ]
    list_display_links = ['name']
    search_fields = ['name']
    ordering = ['order_index', 'name']
    readonly_fields = ['created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name',)
        }),
        ('Board', {
            'fields': ('order_index', 'color'),
            'description': 'Order determines position in Kanban board (lower = left). The last stage counts as converted.'
        }),
        ('Timestamps', {
            'fields': ('created_at',),
            'classes': ('collapse',)
        }),
    )

    def color_preview(self, obj):
        return format_html(
            '<div style="width: 40px; height: 20px; background-color: {}; '
            'border-radius: 3px; border: 1px solid #ddd;"></div>',
            STAGE_COLOR_HEX.get(obj.color, '#6c757d')
        )

    color_preview.short_description = 'Color'

    def leads_count(self, obj):
        return format_html(
            '<span style="color: #667eea; font-weight: bold;">{} leads</span>',
            obj.leads.count()
        )

    leads_count.short_description = 'Leads'
