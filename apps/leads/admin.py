from django.contrib import admin
from django.utils.html import format_html
from .models import Lead, LeadEmail, LeadPhone, Activity


STAGE_COLORS = {
    'gray': '#6c757d',
    'blue': '#0d6efd',
    'purple': '#6f42c1',
    'yellow': '#ffc107',
    'green': '#28a745',
    'red': '#dc3545',
}


class LeadEmailInline(admin.TabularInline):

    model = LeadEmail
    extra = 1
    fields = ['email']


class LeadPhoneInline(admin.TabularInline):

    model = LeadPhone
    extra = 1
    fields = ['phone']


class ActivityInline(admin.TabularInline):

    model = Activity
    extra = 0  # activities are auto-created
    readonly_fields = ['user', 'activity_type', 'description', 'created_at']
    fields = ['created_at', 'user', 'activity_type', 'description']
    classes = ['collapse']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user')


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'name',
        'company',
        'stage_badge',
        'assigned_to_display',
        'created_at_display',
        'next_reminder_display',
    ]

    list_filter = [
        'status',
        'assigned_to',
        'company_size',
        'created_at',
    ]

    search_fields = [
        'name',
        'company',
        'job_title',
        'emails__email',
        'phones__phone',
    ]

    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['name', 'job_title', 'company', 'location', 'company_size']
        }),
        ('Classification', {
            'fields': ['industries', 'keywords', 'links']
        }),
        ('Pipeline', {
            'fields': ['status', 'assigned_to', 'next_reminder', 'reminder_sent_at']
        }),
        ('Deal Value', {
            'fields': ['amount_inr', 'amount_usd']
        }),
        ('Additional Info', {
            'fields': ['notes', 'created_by'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['reminder_sent_at', 'created_at', 'updated_at']
    inlines = [LeadEmailInline, LeadPhoneInline, ActivityInline]

    def stage_badge(self, obj):
        """Display stage with colored badge"""
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            STAGE_COLORS.get(obj.status.color, '#6c757d'),
            obj.status.name
        )
    stage_badge.short_description = 'Stage'

    def assigned_to_display(self, obj):
        if obj.assigned_to:
            return format_html(
                '<span style="background-color: #667eea; color: white; '
                'padding: 2px 6px; border-radius: 50%; font-size: 10px; '
                'margin-right: 5px;">{}</span> {}',
                obj.assigned_to.get_initials(),
                obj.assigned_to.name
            )
        return format_html('<span style="color: #999;">Unassigned</span>')
    assigned_to_display.short_description = 'Assigned To'

    def created_at_display(self, obj):
        return format_html(
            '<span title="{}">{}</span>',
            obj.created_at.strftime('%Y-%m-%d %H:%M:%S'),
            obj.time_since_created()
        )
    created_at_display.short_description = 'Created'

    def next_reminder_display(self, obj):
        """Reminder with urgency colour"""
        if not obj.next_reminder:
            return format_html('<span style="color: #999;">-</span>')

        time_str = obj.time_until_reminder()

        if time_str == "Overdue":
            color = '#dc3545'
        elif 'hour' in time_str or 'minute' in time_str:
            color = '#ffc107'
        else:
            color = '#28a745'

        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            time_str
        )
    next_reminder_display.short_description = 'Next Reminder'

    actions = ['unassign_leads']

    def unassign_leads(self, request, queryset):
        count = 0
        for lead in queryset.filter(assigned_to__isnull=False):
            lead.assign_to(None, assigned_by=request.user)
            count += 1

        self.message_user(request, f'Unassigned {count} leads')
    unassign_leads.short_description = 'Unassign selected leads'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('status', 'assigned_to', 'created_by')


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'lead',
        'user',
        'activity_type',
        'description',
        'created_at'
    ]

    list_filter = [
        'activity_type',
        'created_at',
    ]

    search_fields = [
        'description',
        'lead__name',
        'lead__company',
    ]

    ordering = ['-created_at']
    list_per_page = 100
    readonly_fields = ['lead', 'user', 'activity_type', 'description', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('lead', 'user')
