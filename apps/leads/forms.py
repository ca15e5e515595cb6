from django import forms
from django.core.exceptions import ValidationError
from .models import Lead
from apps.core.models import PipelineStage
from apps.core.validators import (
    is_valid_email,
    is_valid_phone,
    split_multi_value,
    MIN_PHONE_DIGITS,
)
from apps.sales.models import SalesPerson


class LeadForm(forms.ModelForm):
    """
    Create / edit a lead

    Emails, phones, industries and links are typed one per line
    (or comma separated) and cleaned into lists.
    """

    emails = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2, 'placeholder': 'priya@acme.com'}),
        help_text='One email per line'
    )
    phones = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2, 'placeholder': '+91 98765 43210'}),
        help_text=f'One phone number per line (at least {MIN_PHONE_DIGITS} digits)'
    )
    industries = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'SaaS, Healthcare'}),
        help_text='Comma separated'
    )
    links = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2, 'placeholder': 'https://linkedin.com/in/...'}),
        help_text='One URL per line'
    )

    class Meta:
        model = Lead
        fields = [
            'name', 'job_title', 'company', 'location', 'company_size',
            'industries', 'keywords', 'links', 'notes',
            'status', 'assigned_to', 'next_reminder', 'amount_inr', 'amount_usd',
        ]

        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Priya Sharma', 'autofocus': True}),
            'job_title': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Head of Marketing'}),
            'company': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Acme Pvt Ltd'}),
            'location': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Bengaluru, India'}),
            'company_size': forms.Select(attrs={'class': 'form-select'}),
            'keywords': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'ai, marketing'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 4, 'placeholder': 'Add any notes here...'}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'assigned_to': forms.Select(attrs={'class': 'form-select'}),
            'next_reminder': forms.DateTimeInput(attrs={'class': 'form-control', 'type': 'datetime-local'}, format='%Y-%m-%dT%H:%M'),
            'amount_inr': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'min': '0'}),
            'amount_usd': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'min': '0'}),
        }

        labels = {
            'status': 'Stage',
            'amount_inr': 'Amount (INR)',
            'amount_usd': 'Amount (USD)',
        }

        error_messages = {
            'name': {'required': 'Lead name is required'},
            'company': {'required': 'Company is required'},
        }

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        self.fields['status'].queryset = PipelineStage.objects.order_by('order_index', 'id')
        self.fields['status'].empty_label = 'No Stage'

        self.fields['assigned_to'].queryset = SalesPerson.objects.filter(
            status=SalesPerson.STATUS_ACTIVE
        ).order_by('name')
        self.fields['assigned_to'].empty_label = 'Unassigned'

        # Only admins hand out leads
        if self.user is not None and not self.user.is_admin():
            del self.fields['assigned_to']

        if self.instance.pk:
            self.initial['emails'] = '\n'.join(self.instance.get_emails())
            self.initial['phones'] = '\n'.join(self.instance.get_phones())
            self.initial['industries'] = ', '.join(self.instance.industries or [])
            self.initial['links'] = '\n'.join(self.instance.links or [])
        else:
            # New leads fall back to the default stage
            self.fields['status'].required = False

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise ValidationError('Lead name is required')
        return name

    def clean_company(self):
        company = self.cleaned_data.get('company', '').strip()
        if not company:
            raise ValidationError('Company is required')
        return company

    def clean_emails(self):
        emails = []
        for email in split_multi_value(self.cleaned_data.get('emails')):
            if email.lower() not in emails:
                emails.append(email.lower())

        invalid = [e for e in emails if not is_valid_email(e)]
        if invalid:
            raise ValidationError(f'Invalid email address: {", ".join(invalid)}')

        return emails

    def clean_phones(self):
        phones = split_multi_value(self.cleaned_data.get('phones'))

        invalid = [p for p in phones if not is_valid_phone(p)]
        if invalid:
            raise ValidationError(
                f'Phone numbers need at least {MIN_PHONE_DIGITS} digits: {", ".join(invalid)}'
            )

        return phones

    def clean_industries(self):
        return split_multi_value(self.cleaned_data.get('industries'))

    def clean_links(self):
        return split_multi_value(self.cleaned_data.get('links'))

    def clean(self):
        cleaned_data = super().clean()

        # Only complain when both lists came through their own validation empty
        if (
            'emails' in cleaned_data and 'phones' in cleaned_data
            and not cleaned_data['emails'] and not cleaned_data['phones']
        ):
            raise ValidationError('At least one email or phone number is required')

        return cleaned_data

    def get_lead_fields(self):
        """Model field values for services.create_lead"""
        data = {}
        for name in self._meta.fields:
            if name == 'keywords' or name not in self.cleaned_data:
                continue
            data[name] = self.cleaned_data[name]
        return data


class LeadAssignForm(forms.Form):
    assigned_to = forms.ModelChoiceField(
        queryset=SalesPerson.objects.none(),
        label='Assign To',
        required=False,
        empty_label='Unassigned',
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['assigned_to'].queryset = SalesPerson.objects.filter(
            status=SalesPerson.STATUS_ACTIVE
        ).order_by('name')


class LeadStatusChangeForm(forms.Form):
    status = forms.ModelChoiceField(
        queryset=PipelineStage.objects.all(),
        error_messages={'invalid_choice': 'Invalid stage', 'required': 'Stage is required'}
    )


class LeadFilterForm(forms.Form):
    status = forms.ModelChoiceField(
        queryset=PipelineStage.objects.none(),
        required=False,
        empty_label='All stages',
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    assigned_to = forms.ModelChoiceField(
        queryset=SalesPerson.objects.none(),
        required=False,
        empty_label='Everyone',
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    unassigned = forms.BooleanField(
        required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['status'].queryset = PipelineStage.objects.order_by('order_index', 'id')
        self.fields['assigned_to'].queryset = SalesPerson.objects.order_by('name')
