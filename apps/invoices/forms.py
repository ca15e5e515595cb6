from decimal import Decimal

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Submit, Div, HTML
from crispy_forms.bootstrap import FormActions

from apps.core.validators import validate_email_format
from .models import Package


def split_lines(raw):
    """Non-empty, de-duplicated lines (feature text may contain commas)"""
    lines = []
    for line in (raw or '').splitlines():
        line = line.strip()
        if line and line not in lines:
            lines.append(line)
    return lines


class PackageForm(forms.ModelForm):
    """Catalogue entry; features are typed one per line"""

    features = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 6}),
        help_text='One feature per line'
    )

    class Meta:
        model = Package
        fields = ['name', 'price', 'description', 'features', 'is_active']

        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. AI Growth Package'}),
            'price': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'min': '0'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'is_active': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
        }

        labels = {
            'price': 'Price (INR, before GST)',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if self.instance.pk:
            self.initial['features'] = '\n'.join(self.instance.features or [])

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Div(
                Div('name', css_class='col-md-8'),
                Div('price', css_class='col-md-4'),
                css_class='row'
            ),
            'description',
            'features',
            'is_active',
            FormActions(
                Submit('submit', 'Save Package', css_class='btn btn-primary'),
                HTML('<a href="{% url \'invoices:package_list\' %}" class="btn btn-secondary">Cancel</a>'),
            )
        )

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise ValidationError('Package name is required')
        return name

    def clean_features(self):
        return split_lines(self.cleaned_data.get('features'))


class InvoiceForm(forms.Form):
    """
    Issue an invoice

    The feature checkboxes list every active package's features; clean()
    keeps only those that belong to the chosen package. Nothing ticked
    means the whole package.
    """

    customer_name = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Priya Sharma'}),
        error_messages={'required': 'Customer name is required'}
    )

    customer_email = forms.CharField(
        max_length=255,
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'priya@acme.com'}),
        error_messages={'required': 'Customer email is required'}
    )

    customer_phone = forms.CharField(
        max_length=30,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '+91 98765 43210'})
    )

    company_name = forms.CharField(
        max_length=200,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Acme Pvt Ltd'})
    )

    package = forms.ModelChoiceField(
        queryset=Package.objects.none(),
        empty_label='Select a package',
        widget=forms.Select(attrs={'class': 'form-select'}),
        error_messages={'required': 'Please select a package'}
    )

    gst_percentage = forms.DecimalField(
        label='GST %',
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )

    features = forms.MultipleChoiceField(
        required=False,
        widget=forms.CheckboxSelectMultiple
    )

    additional_notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        packages = Package.objects.filter(is_active=True).order_by('price', 'name')
        self.fields['package'].queryset = packages

        choices = []
        for package in packages:
            for feature in package.features or []:
                if (feature, feature) not in choices:
                    choices.append((feature, feature))
        self.fields['features'].choices = choices

        self.fields['gst_percentage'].initial = settings.DEFAULT_GST_PERCENTAGE

    def clean_customer_name(self):
        name = self.cleaned_data.get('customer_name', '').strip()
        if not name:
            raise ValidationError('Customer name is required')
        return name

    def clean_customer_email(self):
        email = self.cleaned_data.get('customer_email', '').strip().lower()
        validate_email_format(email)
        return email

    def clean_gst_percentage(self):
        gst = self.cleaned_data.get('gst_percentage')
        if gst is None:
            return Decimal(settings.DEFAULT_GST_PERCENTAGE)
        return gst

    def clean(self):
        cleaned_data = super().clean()
        package = cleaned_data.get('package')

        if package is not None:
            package_features = package.features or []
            selected = [f for f in cleaned_data.get('features', []) if f in package_features]
            # Keep the package's own ordering
            cleaned_data['features'] = [
                f for f in package_features if f in selected
            ] or list(package_features)

        return cleaned_data
