import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.db.models import Q, Count
from django.core.paginator import Paginator
from django.conf import settings
from django.utils import timezone
from django.views.decorators.http import require_POST
from apps.accounts.decorators import admin_required, sales_required, role_required
from apps.core.utils import build_stage_breakdown
from apps.leads.utils import get_visible_leads
from .models import SalesPerson
from .forms import SalesPersonForm, SalesProfileForm
from .services import (
    OnboardingError,
    onboard_sales_person,
    update_sales_person,
    delete_sales_person,
    split_name,
)

logger = logging.getLogger(__name__)


@admin_required
def sales_person_list_view(request):
    sales_persons = SalesPerson.objects.select_related('user').annotate(
        lead_count=Count('leads')
    ).order_by('created_at', 'id')

    search_query = request.GET.get('search', '').strip()
    if search_query:
        sales_persons = sales_persons.filter(
            Q(name__icontains=search_query) |
            Q(email__icontains=search_query) |
            Q(phone__icontains=search_query)
        )

    paginator = Paginator(sales_persons, settings.PAGINATION_SIZE)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    context = {
        'sales_persons': page_obj,
        'page_obj': page_obj,
        'is_paginated': page_obj.has_other_pages(),
        'search_query': search_query,
        'total_count': paginator.count,
    }

    return render(request, 'sales/sales_person_list.html', context)


@admin_required
def sales_person_create_view(request):
    if request.method == 'POST':
        form = SalesPersonForm(request.POST)

        if form.is_valid():
            try:
                sales_person = onboard_sales_person(
                    name=form.cleaned_data['name'],
                    email=form.cleaned_data['email'],
                    phone=form.cleaned_data['phone'],
                    password=form.cleaned_data['password'],
                    created_by=request.user,
                )
            except OnboardingError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, f'Sales person "{sales_person.name}" added successfully')
                return redirect('sales:list')
        else:
            messages.error(request, 'Please correct the errors in the form')
    else:
        form = SalesPersonForm()

    context = {
        'form': form,
        'form_title': 'Add Sales Person',
    }
    return render(request, 'sales/sales_person_form.html', context)


@admin_required
def sales_person_edit_view(request, pk):
    sales_person = get_object_or_404(SalesPerson, pk=pk)

    if request.method == 'POST':
        form = SalesPersonForm(request.POST, instance=sales_person)

        if form.is_valid():
            try:
                update_sales_person(
                    sales_person,
                    name=form.cleaned_data['name'],
                    email=form.cleaned_data['email'],
                    phone=form.cleaned_data['phone'],
                    password=form.cleaned_data.get('password') or None,
                    status=form.cleaned_data.get('status') or None,
                )
            except OnboardingError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, f'Sales person "{sales_person.name}" updated successfully')
                return redirect('sales:list')
        else:
            messages.error(request, 'Please correct the errors in the form')
    else:
        form = SalesPersonForm(instance=sales_person)

    context = {
        'form': form,
        'sales_person': sales_person,
        'form_title': f'Edit Sales Person: {sales_person.name}',
    }
    return render(request, 'sales/sales_person_form.html', context)


@admin_required
@require_POST
def sales_person_delete_view(request, pk):
    sales_person = get_object_or_404(SalesPerson, pk=pk)

    if sales_person.user_id == request.user.id:
        messages.error(request, 'You cannot delete your own sales person record')
        return redirect('sales:list')

    name = sales_person.name
    delete_sales_person(sales_person)

    messages.success(request, f'Sales person "{name}" deleted successfully')
    return redirect('sales:list')


@role_required('admin', 'sales')
def profile_view(request):
    """A sales user's own record: view and edit name/phone"""
    sales_person = request.user.get_sales_person()

    if sales_person is None:
        messages.error(request, 'No sales person profile is linked to your account')
        return redirect('core:dashboard' if request.user.is_admin() else 'sales:dashboard')

    if request.method == 'POST':
        form = SalesProfileForm(request.POST, instance=sales_person)

        if form.is_valid():
            sales_person = form.save()

            # Keep the login's display name in step
            user = request.user
            user.first_name, user.last_name = split_name(sales_person.name)
            user.save(update_fields=['first_name', 'last_name', 'updated_at'])

            messages.success(request, 'Profile updated successfully')
            return redirect('sales:profile')

        messages.error(request, 'Please correct the errors in the form')
    else:
        form = SalesProfileForm(instance=sales_person)

    context = {
        'form': form,
        'sales_person': sales_person,
        'lead_count': sales_person.leads.count(),
    }
    return render(request, 'sales/profile.html', context)


@sales_required
def sales_dashboard_view(request):
    """
    Dashboard for sales users
    - Upcoming reminders (today onwards) for own leads
    - Own leads per pipeline stage
    """
    leads_qs = get_visible_leads(request.user)

    start_of_today = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    upcoming_reminders = leads_qs.filter(
        next_reminder__isnull=False,
        next_reminder__gte=start_of_today,
    ).order_by('next_reminder')[:20]

    context = {
        'sales_person': request.user.get_sales_person(),
        'total_leads': leads_qs.count(),
        'leads_by_stage': build_stage_breakdown(leads_qs),
        'upcoming_reminders': upcoming_reminders,
        'recent_leads': leads_qs.order_by('-created_at')[:10],
    }
    return render(request, 'sales/dashboard.html', context)
