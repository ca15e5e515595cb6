from django import forms
from django.core.exceptions import ValidationError
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Submit, Div, HTML
from crispy_forms.bootstrap import FormActions

from apps.core.validators import validate_email_format, validate_phone_number
from .models import SalesPerson
from .services import email_in_use

MIN_PASSWORD_LENGTH = 6


class SalesPersonForm(forms.Form):
    """
    Onboard or edit a sales person

    Usage:
        form = SalesPersonForm(request.POST)                        # create
        form = SalesPersonForm(request.POST, instance=sales_person) # edit
    """

    name = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Full name (e.g. Sarah Johnson)'
        })
    )

    email = forms.CharField(
        max_length=255,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'sarah@axisphere.in'
        })
    )

    phone = forms.CharField(
        max_length=30,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': '+91 98765 43210'
        })
    )

    password = forms.CharField(
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'At least 6 characters'
        })
    )

    status = forms.ChoiceField(
        choices=SalesPerson.STATUS_CHOICES,
        initial=SalesPerson.STATUS_ACTIVE,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, **kwargs):
        self.instance = kwargs.pop('instance', None)

        if self.instance is not None and 'initial' not in kwargs:
            kwargs['initial'] = {
                'name': self.instance.name,
                'email': self.instance.email,
                'phone': self.instance.phone,
                'status': self.instance.status,
            }

        super().__init__(*args, **kwargs)

        if self.instance is None:
            # Only editing can change the status
            del self.fields['status']
        else:
            self.fields['password'].help_text = 'Leave blank to keep current password'

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        fields = [
            Div(
                Div('name', css_class='col-md-6'),
                Div('email', css_class='col-md-6'),
                css_class='row'
            ),
            Div(
                Div('phone', css_class='col-md-6'),
                Div('password', css_class='col-md-6'),
                css_class='row'
            ),
        ]
        if self.instance is not None:
            fields.append('status')

        self.helper.layout = Layout(
            *fields,
            FormActions(
                Submit('submit', 'Save Sales Person', css_class='btn btn-primary'),
                HTML('<a href="{% url \'sales:list\' %}" class="btn btn-secondary">Cancel</a>'),
            )
        )

    @property
    def is_edit(self):
        return self.instance is not None

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise ValidationError('Name is required.')
        return name

    def clean_email(self):
        email = self.cleaned_data.get('email', '').strip().lower()
        validate_email_format(email)

        if email_in_use(email, exclude_sales_person=self.instance):
            raise ValidationError('A user with this email already exists.')

        return email

    def clean_phone(self):
        phone = self.cleaned_data.get('phone', '').strip()
        validate_phone_number(phone)
        return phone

    def clean_password(self):
        password = self.cleaned_data.get('password', '')

        if not password:
            if not self.is_edit:
                raise ValidationError('Password is required.')
            return ''

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')

        return password


class SalesProfileForm(forms.ModelForm):
    """A sales user editing their own contact details"""

    class Meta:
        model = SalesPerson
        fields = ['name', 'phone']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'phone': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['phone'].required = True

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            'name',
            'phone',
            FormActions(
                Submit('submit', 'Save Profile', css_class='btn btn-primary'),
            )
        )

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise ValidationError('Name is required.')
        return name

    def clean_phone(self):
        phone = self.cleaned_data.get('phone', '').strip()
        validate_phone_number(phone)
        return phone
