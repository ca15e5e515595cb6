from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.utils import timezone
from datetime import timedelta
from apps.accounts.decorators import admin_required
from apps.leads.models import Lead
from apps.sales.models import SalesPerson
from .models import PipelineStage
from .utils import build_stage_breakdown, build_industry_breakdown, percentage


@login_required
def dashboard_view(request):
    """
    Admin dashboard
    - Admins: team-wide numbers
    - Sales users: sent to their own dashboard
    """
    if not request.user.is_admin():
        return redirect('sales:dashboard')

    today = timezone.localdate()
    leads_qs = Lead.objects.all()

    # 1. Key Metrics
    total_leads = leads_qs.count()
    total_sales_persons = SalesPerson.objects.count()
    active_sales_persons = SalesPerson.objects.filter(status=SalesPerson.STATUS_ACTIVE).count()
    unassigned_leads = leads_qs.filter(assigned_to__isnull=True).count()

    start_of_week = today - timedelta(days=today.weekday())
    new_this_week = leads_qs.filter(created_at__date__gte=start_of_week).count()

    # Leads sitting in the last pipeline stage count as converted
    converted_stage = PipelineStage.converted_stage()
    converted_leads = leads_qs.filter(status=converted_stage).count() if converted_stage else 0
    conversion_rate = percentage(converted_leads, total_leads)

    # 2. Lead Distribution by Stage
    leads_by_stage = build_stage_breakdown(leads_qs)

    # 3. Recent Leads
    recent_leads = leads_qs.select_related('status', 'assigned_to').order_by('-created_at')[:5]

    context = {
        'total_leads': total_leads,
        'total_sales_persons': total_sales_persons,
        'active_sales_persons': active_sales_persons,
        'unassigned_leads': unassigned_leads,
        'new_this_week': new_this_week,
        'converted_leads': converted_leads,
        'conversion_rate': conversion_rate,
        'leads_by_stage': leads_by_stage,
        'recent_leads': recent_leads,
    }

    return render(request, 'core/dashboard.html', context)


@admin_required
def analytics_view(request):
    """Pipeline funnel and industry conversion"""
    leads_qs = Lead.objects.all()

    context = {
        'total_leads': leads_qs.count(),
        'funnel': build_stage_breakdown(leads_qs),
        'industries': build_industry_breakdown(leads_qs),
        'converted_stage': PipelineStage.converted_stage(),
    }

    return render(request, 'core/analytics.html', context)
