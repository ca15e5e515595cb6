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
from django.http import HttpResponse
from django.utils import timezone
from django.views.decorators.http import require_POST
from apps.accounts.decorators import admin_required
from .models import Package, Invoice
from .forms import PackageForm, InvoiceForm
from .services import InvoiceError, create_invoice

logger = logging.getLogger(__name__)


# PACKAGES
@login_required
def package_list_view(request):
    """Active packages by price; admins also see inactive ones"""
    packages = Package.objects.order_by('price', 'name')
    if not request.user.is_admin():
        packages = packages.filter(is_active=True)

    context = {
        'packages': packages,
        'can_manage': request.user.is_admin(),
    }
    return render(request, 'invoices/package_list.html', context)


@admin_required
def package_create_view(request):
    if request.method == 'POST':
        form = PackageForm(request.POST)

        if form.is_valid():
            package = form.save()
            logger.info("Package %s created by %s", package.name, request.user.email)
            messages.success(request, f'Package "{package.name}" created successfully')
            return redirect('invoices:package_list')

        messages.error(request, 'Please correct the errors in the form')
    else:
        form = PackageForm()

    context = {
        'form': form,
        'form_title': 'Add Package',
    }
    return render(request, 'invoices/package_form.html', context)


@admin_required
def package_edit_view(request, pk):
    package = get_object_or_404(Package, pk=pk)

    if request.method == 'POST':
        form = PackageForm(request.POST, instance=package)

        if form.is_valid():
            package = form.save()
            messages.success(request, f'Package "{package.name}" updated successfully')
            return redirect('invoices:package_list')

        messages.error(request, 'Please correct the errors in the form')
    else:
        form = PackageForm(instance=package)

    context = {
        'form': form,
        'package': package,
        'form_title': f'Edit Package: {package.name}',
    }
    return render(request, 'invoices/package_form.html', context)


@admin_required
@require_POST
def package_toggle_view(request, pk):
    package = get_object_or_404(Package, pk=pk)

    package.is_active = not package.is_active
    package.save(update_fields=['is_active', 'updated_at'])

    state = 'activated' if package.is_active else 'deactivated'
    messages.success(request, f'Package "{package.name}" {state}')
    return redirect('invoices:package_list')


# INVOICES
def _search_invoices(invoices, search_query):
    if not search_query:
        return invoices
    return invoices.filter(
        Q(invoice_number__icontains=search_query) |
        Q(customer_name__icontains=search_query) |
        Q(customer_email__icontains=search_query)
    )


@admin_required
def invoice_list_view(request):
    search_query = request.GET.get('search', '').strip()
    invoices = _search_invoices(
        Invoice.objects.select_related('package', 'created_by').order_by('-created_at', '-id'),
        search_query
    )

    paginator = Paginator(invoices, settings.PAGINATION_SIZE)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    context = {
        'invoices': page_obj,
        'page_obj': page_obj,
        'total_count': paginator.count,
        'search_query': search_query,
        'is_paginated': page_obj.has_other_pages(),
    }
    return render(request, 'invoices/invoice_list.html', context)


@admin_required
def invoice_create_view(request):
    if request.method == 'POST':
        form = InvoiceForm(request.POST)

        if form.is_valid():
            data = form.cleaned_data
            try:
                invoice = create_invoice(
                    package=data['package'],
                    customer_name=data['customer_name'],
                    customer_email=data['customer_email'],
                    customer_phone=data.get('customer_phone', ''),
                    company_name=data.get('company_name', ''),
                    gst_percentage=data['gst_percentage'],
                    features=data['features'],
                    additional_notes=data.get('additional_notes', ''),
                    created_by=request.user,
                )
            except InvoiceError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, f'Invoice {invoice.invoice_number} created successfully')
                return redirect('invoices:invoice_detail', pk=invoice.pk)
        else:
            messages.error(request, 'Please correct the errors in the form')
    else:
        initial = {}
        package_id = request.GET.get('package')
        if package_id and package_id.isdigit():
            initial['package'] = package_id
        form = InvoiceForm(initial=initial)

    packages = Package.objects.filter(is_active=True).order_by('price', 'name')

    context = {
        'form': form,
        'packages': packages,
        'selected_features': request.POST.getlist('features') if request.method == 'POST' else [],
    }
    return render(request, 'invoices/invoice_form.html', context)


@admin_required
def invoice_detail_view(request, pk):
    invoice = get_object_or_404(Invoice.objects.select_related('package', 'created_by'), pk=pk)
    return render(request, 'invoices/invoice_detail.html', {'invoice': invoice})


@admin_required
def invoice_print_view(request, pk):
    """Stand-alone page the browser prints to PDF"""
    invoice = get_object_or_404(Invoice, pk=pk)
    return render(request, 'invoices/invoice_print.html', {'invoice': invoice})


@admin_required
@require_POST
def invoice_delete_view(request, pk):
    invoice = get_object_or_404(Invoice, pk=pk)

    invoice_number = invoice.invoice_number
    invoice.delete()
    logger.info("Invoice %s deleted by %s", invoice_number, request.user.email)

    messages.success(request, f'Invoice {invoice_number} deleted successfully')
    return redirect('invoices:invoice_list')


EXPORT_HEADERS = [
    'Invoice Number', 'Date', 'Customer Name', 'Customer Email', 'Customer Phone',
    'Company', 'Package', 'Base Price', 'GST %', 'GST Amount', 'Total Amount',
]


def _export_row(invoice):
    return [
        invoice.invoice_number,
        timezone.localtime(invoice.created_at).strftime('%Y-%m-%d'),
        invoice.customer_name,
        invoice.customer_email,
        invoice.customer_phone,
        invoice.company_name,
        invoice.package_name,
        float(invoice.base_price),
        float(invoice.gst_percentage),
        float(invoice.gst_amount),
        float(invoice.total_amount),
    ]


@admin_required
def invoice_export_view(request):
    export_format = request.GET.get('format', 'excel')

    invoices = _search_invoices(
        Invoice.objects.order_by('-created_at', '-id'),
        request.GET.get('search', '').strip()
    )

    filename = f'invoices_{timezone.now().strftime("%Y%m%d_%H%M%S")}'

    if export_format == 'excel':
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Invoices"

        header_color = settings.LEAD_EXPORT_HEADER_COLOR
        for col, header in enumerate(EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color=header_color, end_color=header_color, fill_type="solid")
            ws.column_dimensions[get_column_letter(col)].width = max(len(header) + 2, 14)

        for row, invoice in enumerate(invoices, start=2):
            for col, value in enumerate(_export_row(invoice), start=1):
                ws.cell(row=row, column=col, value=value)

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
        for invoice in invoices:
            writer.writerow(_export_row(invoice))

        return response

    else:
        messages.error(request, 'Invalid export format')
        return redirect('invoices:invoice_list')
