"""Withdrawal and expenditure forms"""

from decimal import Decimal

from django import forms
from django.core.exceptions import ValidationError

from .models import Expenditure, Withdraw


class WithdrawForm(forms.ModelForm):
    """Withdrawal of the account given to the form instance"""

    class Meta:
        model = Withdraw
        fields = ['amount', 'withdraw_date', 'payment_means', 'notes']
        widgets = {
            'amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'withdraw_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'payment_means': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Other'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['payment_means'].required = False

    def clean_amount(self):
        amount = self.cleaned_data.get('amount')
        if amount is not None and amount <= Decimal('0'):
            raise ValidationError('Amount must be a positive number.')
        return amount

    def clean_payment_means(self):
        return (self.cleaned_data.get('payment_means') or '').strip() or 'Other'

    def clean_notes(self):
        return (self.cleaned_data.get('notes') or '').strip()


class ExpenditureForm(forms.ModelForm):
    """Expenditure entry"""

    class Meta:
        model = Expenditure
        fields = ['item_name', 'type_of_expenditure', 'cost', 'transaction_id']
        widgets = {
            'item_name': forms.TextInput(attrs={'class': 'form-control'}),
            'type_of_expenditure': forms.Select(attrs={'class': 'form-select'}),
            'cost': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'transaction_id': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def clean_item_name(self):
        item_name = (self.cleaned_data.get('item_name') or '').strip()
        if not item_name:
            raise ValidationError('This field is required.')
        return item_name

    def clean_cost(self):
        cost = self.cleaned_data.get('cost')
        if cost is not None and cost < Decimal('0'):
            raise ValidationError('Cost must be a non-negative number.')
        return cost

    def clean_transaction_id(self):
        return str(self.cleaned_data.get('transaction_id') or '').strip()
