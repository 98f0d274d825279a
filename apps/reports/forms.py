"""Shift report forms"""

from django import forms
from django.contrib.auth.models import User

from apps.accounts.models import PLATFORM_CHOICES, Account
from .models import ShiftReport

METRIC_FIELDS = [
    'orders_completed', 'pending_orders', 'available_balance', 'pending_balance',
    'orders_in_progress_value', 'ranking_page', 'success_rate', 'response_rate',
    'earnings_to_date', 'rating', 'notes', 'handed_over_to',
]


class ShiftReportUpdateForm(forms.ModelForm):
    """Editable metrics of an existing report (date and shift stay fixed)"""

    class Meta:
        model = ShiftReport
        fields = METRIC_FIELDS
        widgets = {
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'handed_over_to': forms.Select(attrs={'class': 'form-select'}),
        }
        labels = {
            'orders_in_progress_value': 'Payments for active orders',
            'ranking_page': 'Ranking page',
            'handed_over_to': 'Handed over to',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['handed_over_to'].queryset = User.objects.filter(is_active=True).order_by('first_name', 'username')
        for name in ('orders_completed', 'pending_orders', 'orders_in_progress_value'):
            self.fields[name].required = False
        for name, field in self.fields.items():
            if isinstance(field.widget, (forms.NumberInput, forms.TextInput)):
                field.widget.attrs.setdefault('class', 'form-control')

    def clean_orders_completed(self):
        return self.cleaned_data.get('orders_completed') or 0

    def clean_pending_orders(self):
        return self.cleaned_data.get('pending_orders') or 0

    def clean_orders_in_progress_value(self):
        return self.cleaned_data.get('orders_in_progress_value') or 0


class ShiftReportForm(ShiftReportUpdateForm):
    """New report for the account given to the form instance"""

    class Meta(ShiftReportUpdateForm.Meta):
        fields = ['report_date', 'shift'] + METRIC_FIELDS
        widgets = {
            **ShiftReportUpdateForm.Meta.widgets,
            'report_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'shift': forms.Select(attrs={'class': 'form-select'}),
        }


class ReportFilterForm(forms.Form):
    """Report history filters"""

    SHIFT_CHOICES = [('', 'Both shifts')] + ShiftReport.SHIFT_CHOICES

    account = forms.ModelChoiceField(
        queryset=Account.objects.order_by('platform', 'username'),
        required=False,
        empty_label='All accounts',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    platform = forms.ChoiceField(
        choices=[('', 'All platforms')] + PLATFORM_CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    shift = forms.ChoiceField(
        choices=SHIFT_CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    date_from = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )
    date_to = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )

    def clean(self):
        cleaned_data = super().clean()
        date_from = cleaned_data.get('date_from')
        date_to = cleaned_data.get('date_to')
        if date_from and date_to and date_from > date_to:
            self.add_error('date_to', 'End date must be on or after the start date.')
        return cleaned_data


class ExportRangeForm(forms.Form):
    """Date range and format for report exports"""

    FORMAT_CHOICES = [
        ('csv', 'CSV'),
        ('xlsx', 'Excel'),
    ]

    date_from = forms.DateField()
    date_to = forms.DateField()
    format = forms.ChoiceField(choices=FORMAT_CHOICES, required=False)

    def clean_format(self):
        return self.cleaned_data.get('format') or 'csv'

    def clean(self):
        cleaned_data = super().clean()
        date_from = cleaned_data.get('date_from')
        date_to = cleaned_data.get('date_to')
        if date_from and date_to and date_from > date_to:
            self.add_error('date_to', 'End date must be on or after the start date.')
        return cleaned_data
