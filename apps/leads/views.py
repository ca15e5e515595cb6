import csv
import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.conf import settings
from django.db.models import Q
from django.core.paginator import Paginator
from django.http import JsonResponse, HttpResponse
from django.utils import timezone
from django.views.decorators.http import require_POST
from apps.accounts.decorators import admin_required
from apps.core.models import PipelineStage
from apps.sales.models import SalesPerson
from .models import Lead
from .forms import LeadForm, LeadAssignForm, LeadStatusChangeForm, LeadFilterForm
from .services import LeadCreationError, create_lead, update_lead, auto_assign_leads
from .utils import get_visible_leads, can_view_lead

logger = logging.getLogger(__name__)


def _is_ajax(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def _search_leads(leads, search_query):
    """Name, company, job title, emails and phones"""
    if not search_query:
        return leads
    return leads.filter(
        Q(name__icontains=search_query) |
        Q(company__icontains=search_query) |
        Q(job_title__icontains=search_query) |
        Q(emails__email__icontains=search_query) |
        Q(phones__phone__icontains=search_query)
    ).distinct()


def _filter_leads(request, leads):
    search_query = request.GET.get('search', '').strip()
    leads = _search_leads(leads, search_query)

    filter_form = LeadFilterForm(request.GET)

    if filter_form.is_valid():
        if filter_form.cleaned_data.get('status'):
            leads = leads.filter(status=filter_form.cleaned_data['status'])

        if filter_form.cleaned_data.get('unassigned'):
            leads = leads.filter(assigned_to__isnull=True)
        elif filter_form.cleaned_data.get('assigned_to'):
            leads = leads.filter(assigned_to=filter_form.cleaned_data['assigned_to'])

    return leads, filter_form, search_query


def _get_lead_for_user(request, pk):
    """The lead, or None if the user may not see it (flashes an error unless AJAX)"""
    lead = get_object_or_404(
        Lead.objects.select_related('status', 'assigned_to', 'created_by'),
        pk=pk
    )

    if not can_view_lead(request.user, lead):
        if not _is_ajax(request):
            messages.error(request, 'You do not have permission to view this lead')
        return None

    return lead


@login_required
def lead_list_view(request):
    leads = get_visible_leads(request.user).prefetch_related('emails', 'phones').order_by('-created_at', '-id')
    leads, filter_form, search_query = _filter_leads(request, leads)

    paginator = Paginator(leads, settings.PAGINATION_SIZE)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    context = {
        'leads': page_obj,
        'page_obj': page_obj,
        'filter_form': filter_form,
        'total_count': paginator.count,
        'search_query': search_query,
        'is_paginated': page_obj.has_other_pages(),
        'page_range': paginator.get_elided_page_range(
            page_obj.number,
            on_each_side=2,
            on_ends=1
        ),
        'unassigned_count': get_visible_leads(request.user).filter(assigned_to__isnull=True).count(),
        'stages': PipelineStage.objects.order_by('order_index', 'id'),
    }

    return render(request, 'leads/lead_list.html', context)


@login_required
def lead_kanban_view(request):
    """One column per pipeline stage, in board order"""
    stages = PipelineStage.objects.order_by('order_index', 'id')

    leads_queryset = get_visible_leads(request.user)
    leads_queryset, filter_form, search_query = _filter_leads(request, leads_queryset)

    stages_data = []
    total_count = 0

    for stage in stages:
        stage_leads = leads_queryset.filter(status=stage).order_by('-updated_at')
        count = stage_leads.count()
        total_count += count

        stages_data.append({
            'stage': stage,
            'leads': stage_leads,
            'count': count,
        })

    context = {
        'stages_data': stages_data,
        'filter_form': filter_form,
        'total_count': total_count,
        'search_query': search_query,
    }

    return render(request, 'leads/lead_kanban.html', context)


@login_required
def lead_create_view(request):
    if request.method == 'POST':
        form = LeadForm(request.POST, user=request.user)

        if form.is_valid():
            try:
                lead = create_lead(
                    created_by=request.user,
                    emails=form.cleaned_data['emails'],
                    phones=form.cleaned_data['phones'],
                    keywords=form.cleaned_data.get('keywords') or [],
                    **form.get_lead_fields()
                )
            except LeadCreationError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, f'Lead "{lead.name}" created successfully')
                return redirect('leads:lead_detail', pk=lead.pk)
        else:
            messages.error(request, 'Please correct the errors in the form')
    else:
        form = LeadForm(user=request.user)

    context = {
        'form': form,
        'form_title': 'Create New Lead',
        'submit_text': 'Create',
    }
    return render(request, 'leads/lead_form.html', context)


@login_required
def lead_detail_view(request, pk):
    lead = _get_lead_for_user(request, pk)
    if lead is None:
        return redirect('leads:lead_list')

    context = {
        'lead': lead,
        'emails': lead.get_emails(),
        'phones': lead.get_phones(),
        'keywords': lead.keywords.names(),
        'activities': lead.get_activities(),
        'can_delete': request.user.is_admin(),
        'can_assign': request.user.is_admin(),
        'assign_form': LeadAssignForm(initial={'assigned_to': lead.assigned_to}),
        'stages': PipelineStage.objects.order_by('order_index', 'id'),
    }

    return render(request, 'leads/lead_detail.html', context)


@login_required
def lead_edit_view(request, pk):
    lead = _get_lead_for_user(request, pk)
    if lead is None:
        return redirect('leads:lead_list')

    if request.method == 'POST':
        form = LeadForm(request.POST, instance=lead, user=request.user)

        if form.is_valid():
            lead = update_lead(form, user=request.user)
            messages.success(request, f'Lead "{lead.name}" updated successfully')
            return redirect('leads:lead_detail', pk=lead.pk)

        messages.error(request, 'Please correct the errors in the form')
    else:
        form = LeadForm(instance=lead, user=request.user)

    context = {
        'form': form,
        'lead': lead,
        'form_title': f'Edit Lead: {lead.name}',
        'submit_text': 'Save Changes',
    }

    return render(request, 'leads/lead_form.html', context)


@admin_required
@require_POST
def lead_delete_view(request, pk):
    lead = get_object_or_404(Lead, pk=pk)

    lead_name = lead.name
    lead.delete()
    logger.info("Lead %s deleted by %s", pk, request.user.email)

    messages.success(request, f'Lead "{lead_name}" deleted successfully')
    return redirect('leads:lead_list')


@admin_required
@require_POST
def lead_assign_view(request, pk):
    lead = get_object_or_404(Lead, pk=pk)
    form = LeadAssignForm(request.POST)

    if not form.is_valid():
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': 'Invalid sales person'}, status=400)
        messages.error(request, 'Invalid sales person')
        return redirect('leads:lead_detail', pk=lead.pk)

    sales_person = form.cleaned_data['assigned_to']
    lead.assign_to(sales_person, assigned_by=request.user)

    if _is_ajax(request):
        return JsonResponse({
            'success': True,
            'assigned_to': sales_person.name if sales_person else None,
        })

    if sales_person:
        messages.success(request, f'Lead assigned to {sales_person.name}')
    else:
        messages.success(request, 'Lead is now unassigned')

    return redirect('leads:lead_detail', pk=lead.pk)


@login_required
@require_POST
def lead_change_status_view(request, pk):
    """Kanban drop target: move a lead to another stage"""
    lead = _get_lead_for_user(request, pk)
    if lead is None:
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': 'Permission denied'}, status=403)
        return redirect('leads:lead_list')

    form = LeadStatusChangeForm(request.POST)

    if not form.is_valid():
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': 'Invalid stage'}, status=400)
        messages.error(request, 'Invalid stage')
        return redirect('leads:lead_detail', pk=lead.pk)

    new_status = form.cleaned_data['status']
    changed = lead.change_status(new_status, user=request.user)

    if _is_ajax(request):
        return JsonResponse({
            'success': True,
            'changed': changed,
            'status': new_status.id,
            'status_display': new_status.name,
        })

    if changed:
        messages.success(request, f'Stage changed to "{new_status.name}"')

    next_url = request.POST.get('next')
    if next_url == 'kanban':
        return redirect('leads:lead_kanban')
    return redirect('leads:lead_detail', pk=lead.pk)


@admin_required
@require_POST
def lead_auto_assign_view(request):
    try:
        result = auto_assign_leads(assigned_by=request.user)
    except Exception as e:
        logger.exception("Auto-assign failed")
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': str(e)}, status=500)
        messages.error(request, f'Auto-assign failed: {e}')
        return redirect('leads:lead_list')

    if not result['candidates']:
        level, message = messages.WARNING, 'No active sales persons to assign leads to'
    elif not result['assigned']:
        level, message = messages.INFO, 'There are no unassigned leads'
    else:
        level = messages.SUCCESS
        message = f"{result['assigned']} lead(s) assigned across {result['candidates']} sales person(s)"

    if _is_ajax(request):
        return JsonResponse({'success': True, 'message': message, **result})

    messages.add_message(request, level, message)
    return redirect('leads:lead_list')


EXPORT_HEADERS = [
    'ID', 'Name', 'Company', 'Job Title', 'Emails', 'Phones',
    'Location', 'Company Size', 'Industries', 'Keywords', 'Stage',
    'Assigned To', 'Amount (INR)', 'Amount (USD)', 'Next Reminder', 'Created Date',
]


def _export_row(lead):
    return [
        lead.id,
        lead.name,
        lead.company,
        lead.job_title,
        ', '.join(lead.get_emails()),
        ', '.join(lead.get_phones()),
        lead.location,
        lead.company_size,
        ', '.join(lead.industries or []),
        ', '.join(lead.keywords.names()),
        lead.status.name,
        lead.assigned_to.name if lead.assigned_to else '',
        float(lead.amount_inr) if lead.amount_inr is not None else '',
        float(lead.amount_usd) if lead.amount_usd is not None else '',
        timezone.localtime(lead.next_reminder).strftime('%Y-%m-%d %H:%M') if lead.next_reminder else '',
        timezone.localtime(lead.created_at).strftime('%Y-%m-%d %H:%M'),
    ]


@login_required
def lead_export_view(request):
    export_format = request.GET.get('format', 'excel')

    leads = get_visible_leads(request.user).prefetch_related('emails', 'phones').order_by('-created_at', '-id')
    leads, _, _ = _filter_leads(request, leads)

    filename = f'leads_{timezone.now().strftime("%Y%m%d_%H%M%S")}'

    if export_format == 'excel':
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Leads"

        header_color = settings.LEAD_EXPORT_HEADER_COLOR
        for col, header in enumerate(EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color=header_color, end_color=header_color, fill_type="solid")

        widths = [len(header) for header in EXPORT_HEADERS]
        for row, lead in enumerate(leads, start=2):
            for col, value in enumerate(_export_row(lead), start=1):
                ws.cell(row=row, column=col, value=value)
                widths[col - 1] = max(widths[col - 1], len(str(value)))

        for col, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = min(width + 2, 50)

        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="{filename}.xlsx"'
        wb.save(response)

        return response

    elif export_format == 'csv':
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}.csv"'

        # BOM so Excel opens the file as UTF-8
        response.write('\ufeff')

        writer = csv.writer(response)
        writer.writerow(EXPORT_HEADERS)
        for lead in leads:
            writer.writerow(_export_row(lead))

        return response

    else:
        messages.error(request, 'Invalid export format')
        return redirect('leads:lead_list')
