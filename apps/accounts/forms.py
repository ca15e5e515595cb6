from django import forms
from django.contrib.auth import get_user_model
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Fieldset, Submit, Div, Field, HTML
from crispy_forms.bootstrap import FormActions

from apps.core.validators import validate_email_format

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@axisphere.in'),
            'autofocus': True,
        })
    )

    password = forms.CharField(
        label=_('Password'),
        required=True,
        # Passwords are compared exactly, never stripped
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter your password'),
        })
    )

    remember = forms.BooleanField(
        label=_('Remember me'),
        required=False,
        initial=False,
        widget=forms.CheckboxInput(attrs={
            'class': 'form-check-input',
        })
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Field('email', css_class='mb-3'),
            Field('password', css_class='mb-3'),
            Field('remember', css_class='mb-3'),
            FormActions(
                Submit('submit', _('Login'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):
        email = self.cleaned_data.get('email', '')
        return email.lower().strip()


# REGISTER FORM
class RegisterForm(forms.Form):
    """Self-service sign up: name, email, password and role."""

    first_name = forms.CharField(
        label=_('First Name'),
        max_length=50,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('First name'),
        })
    )

    last_name = forms.CharField(
        label=_('Last Name'),
        max_length=100,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Last name'),
        })
    )

    email = forms.CharField(
        label=_('Email Address'),
        max_length=255,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@axisphere.in'),
        })
    )

    password1 = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('At least 6 characters'),
        })
    )

    password2 = forms.CharField(
        label=_('Confirm Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Confirm password'),
        })
    )

    role = forms.ChoiceField(
        label=_('Role'),
        choices=User.ROLE_CHOICES,
        initial=User.ROLE_SALES,
        widget=forms.Select(attrs={
            'class': 'form-select',
        })
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Fieldset(
                _('Personal Information'),
                Div(
                    Div('first_name', css_class='col-md-6'),
                    Div('last_name', css_class='col-md-6'),
                    css_class='row'
                ),
            ),
            Fieldset(
                _('Login Information'),
                'email',
                Div(
                    Div('password1', css_class='col-md-6'),
                    Div('password2', css_class='col-md-6'),
                    css_class='row'
                ),
                'role',
            ),
            FormActions(
                Submit('submit', _('Create Account'), css_class='btn btn-primary w-100'),
                HTML('<a href="{% url \'accounts:login\' %}" class="btn btn-link w-100">Already have an account? Login</a>'),
            )
        )

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        validate_email_format(email)

        if User.objects.filter(email=email).exists():
            raise ValidationError(
                _('A user with this email already exists.')
            )

        return email

    def clean_password1(self):
        password = self.cleaned_data.get('password1', '')

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                _('Password must be at least %(min)d characters long.'),
                params={'min': MIN_PASSWORD_LENGTH},
            )

        return password

    def clean(self):
        cleaned_data = super().clean()
        password1 = cleaned_data.get('password1')
        password2 = cleaned_data.get('password2')

        if password1 and password2 and password1 != password2:
            raise ValidationError(
                _('The two password fields must match.')
            )

        return cleaned_data

    def save(self):
        return User.objects.create_user(
            email=self.cleaned_data['email'],
            password=self.cleaned_data['password1'],
            first_name=self.cleaned_data['first_name'].strip(),
            last_name=self.cleaned_data.get('last_name', '').strip(),
            role=self.cleaned_data['role'],
        )
