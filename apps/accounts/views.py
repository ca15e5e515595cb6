import logging

from django.shortcuts import render, redirect
from django.contrib.auth import authenticate, login, logout, get_user_model
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext_lazy as _
from django.views.decorators.cache import never_cache

from .forms import LoginForm, RegisterForm

logger = logging.getLogger(__name__)

User = get_user_model()


# HELPER FUNCTIONS
def get_client_ip(request):

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        # First entry of the proxy chain is the original client
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


def home_url_name(user):
    """Landing page for a freshly logged-in user"""
    if user.is_admin():
        return 'core:dashboard'
    return 'sales:dashboard'


def _is_inactive_account(email, password):
    """
    ModelBackend refuses inactive users outright, so look the account up
    to tell "wrong password" apart from "disabled account".
    """
    user = User.objects.filter(email=email).first()
    return user is not None and not user.is_active and user.check_password(password)


# AUTHENTICATION VIEWS
@never_cache
def login_view(request):
    if request.user.is_authenticated:
        return redirect(home_url_name(request.user))

    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            email = form.cleaned_data['email']
            password = form.cleaned_data['password']
            remember = form.cleaned_data.get('remember', False)

            user = authenticate(request, username=email, password=password)

            if user is not None:
                login(request, user)

                if remember:
                    # 30 days
                    request.session.set_expiry(30 * 24 * 60 * 60)
                else:
                    # Until the browser closes
                    request.session.set_expiry(0)

                user.increment_login_count(ip_address=get_client_ip(request))
                logger.info("User %s logged in", user.email)

                messages.success(
                    request,
                    _('Welcome back, {}!').format(user.get_full_name())
                )

                next_url = request.GET.get('next')
                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect(home_url_name(user))

            if _is_inactive_account(email, password):
                logger.warning("Inactive account %s tried to log in", email)
                messages.error(
                    request,
                    _('Your account is inactive. Please contact administrator.')
                )
            else:
                messages.error(
                    request,
                    _('Invalid email or password. Please try again.')
                )
        else:
            messages.error(request, _('Please correct the errors below.'))

    else:
        form = LoginForm()

    context = {
        'form': form,
        'page_title': _('Login'),
    }

    return render(request, 'accounts/login.html', context)


@never_cache
def register_view(request):
    if request.user.is_authenticated:
        return redirect(home_url_name(request.user))

    if request.method == 'POST':
        form = RegisterForm(request.POST)

        if form.is_valid():
            user = form.save()
            logger.info("Registered new %s account %s", user.role, user.email)

            login(request, user, backend='django.contrib.auth.backends.ModelBackend')
            user.increment_login_count(ip_address=get_client_ip(request))

            messages.success(
                request,
                _('Account created. Welcome, {}!').format(user.get_full_name())
            )
            return redirect(home_url_name(user))

        messages.error(request, _('Please correct the errors below.'))
    else:
        form = RegisterForm()

    context = {
        'form': form,
        'page_title': _('Create Account'),
    }

    return render(request, 'accounts/register.html', context)


@login_required
def logout_view(request):
    user_name = request.user.get_full_name()

    logout(request)

    messages.success(
        request,
        _('You have been logged out successfully. See you soon, {}!').format(user_name)
    )

    return redirect('accounts:login')
