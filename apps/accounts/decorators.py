# Decorators in this file:
# 1. admin_required - Only admins can access
# 2. sales_required - Only sales users can access
# 3. role_required - Any of the given roles can access
#
# AJAX callers get a JSON 403 instead of a redirect
# ==============================================================================

from functools import wraps
from django.shortcuts import redirect
from django.contrib import messages
from django.http import JsonResponse
from django.utils.translation import gettext_lazy as _


def _is_ajax(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def _deny(request, message, error):
    if _is_ajax(request):
        return JsonResponse({
            'success': False,
            'error': error
        }, status=403)

    messages.error(request, message)
    return redirect('core:dashboard')


# ROLE-BASED DECORATORS
def admin_required(view_func):
    """
    Decorator: Only admins can access this view

    Checks:
    1. User is authenticated (logged in)
    2. User role is 'admin' OR is superuser
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            messages.error(request, _('Please login to continue.'))
            return redirect('accounts:login')

        if request.user.is_admin():
            return view_func(request, *args, **kwargs)

        return _deny(
            request,
            _('You do not have permission to access this page. Admin access required.'),
            'Admin access required'
        )

    return wrapper


def sales_required(view_func):
    """
    Checks:
    1. User is authenticated
    2. User role is 'sales'
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            messages.error(request, _('Please login to continue.'))
            return redirect('accounts:login')

        if request.user.is_sales():
            return view_func(request, *args, **kwargs)

        return _deny(
            request,
            _('This page is only accessible to sales persons.'),
            'Sales access required'
        )

    return wrapper


def role_required(*allowed_roles):
    """
    Decorator: Only specific roles can access

    Usage:
        @role_required('admin', 'sales')
        def lead_kanban_view(request):
            ...
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                messages.error(request, _('Please login to continue.'))
                return redirect('accounts:login')

            if request.user.role in allowed_roles or request.user.is_superuser:
                return view_func(request, *args, **kwargs)

            return _deny(
                request,
                _('You do not have permission to access this page.'),
                'Permission denied'
            )

        return wrapper

    return decorator
