"""Account, gig and payout forms"""

from django import forms

from .models import PLATFORM_CHOICES, Account, Gig, PayoutDetail


class AccountForm(forms.ModelForm):
    """Account create/edit form"""

    class Meta:
        model = Account
        fields = [
            'platform', 'email', 'username', 'type_of_gigs', 'currency',
            'status', 'account_level', 'success_rate', 'browser_type', 'proxy',
        ]
        widgets = {
            'platform': forms.Select(attrs={'class': 'form-select'}),
            'email': forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'seller@example.com'}),
            'username': forms.TextInput(attrs={'class': 'form-control'}),
            'type_of_gigs': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. APA/MLA, TRINETX'}),
            'currency': forms.TextInput(attrs={'class': 'form-control'}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'account_level': forms.Select(attrs={'class': 'form-select'}),
            'success_rate': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'browser_type': forms.TextInput(attrs={'class': 'form-control'}),
            'proxy': forms.TextInput(attrs={'class': 'form-control'}),
        }
        labels = {
            'type_of_gigs': 'Type of gigs',
            'account_level': 'Level',
            'success_rate': 'Success rate (%)',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['currency'].required = False
        self.fields['status'].required = False
        self.fields['account_level'].required = False

    def clean_email(self):
        return (self.cleaned_data.get('email') or '').strip().lower()

    def clean_currency(self):
        currency = (self.cleaned_data.get('currency') or '').strip().upper()
        return currency or 'USD'

    def clean_status(self):
        return self.cleaned_data.get('status') or 'active'

    def clean_account_level(self):
        return self.cleaned_data.get('account_level') or 'starter'

    def _get_validation_exclusions(self):
        # (platform, email) duplicates are reported by the action as a conflict
        exclude = super()._get_validation_exclusions()
        exclude.add('email')
        return exclude


class AccountSearchForm(forms.Form):
    """Account list filters"""

    SORT_CHOICES = [
        ('platform', 'Platform'),
        ('username', 'Username'),
        ('-created_at', 'Newest'),
        ('created_at', 'Oldest'),
        ('account_level', 'Level'),
    ]

    platform = forms.ChoiceField(
        choices=[('', 'All platforms')] + PLATFORM_CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    status = forms.ChoiceField(
        choices=[('', 'All statuses')] + Account.STATUS_CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Username or email'}),
    )
    sort = forms.ChoiceField(
        choices=SORT_CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )


class GigForm(forms.ModelForm):
    """Gig create/edit form; rating fields only matter when rated is ticked"""

    class Meta:
        model = Gig
        fields = [
            'name', 'type', 'status', 'rated', 'last_rated_date',
            'next_possible_rate_date', 'rating_type', 'rating_email',
        ]
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'type': forms.Select(attrs={'class': 'form-select'}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'rated': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'last_rated_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'next_possible_rate_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'rating_type': forms.Select(attrs={'class': 'form-select'}),
            'rating_email': forms.EmailInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['status'].required = False

    def clean_status(self):
        return self.cleaned_data.get('status') or 'active'

    def clean(self):
        cleaned_data = super().clean()
        rated = cleaned_data.get('rated')
        rating_type = cleaned_data.get('rating_type')

        if rated and not rating_type:
            self.add_error('rating_type', 'Choose how the gig was rated.')
        if rated and rating_type == 'paypal' and not cleaned_data.get('rating_email'):
            self.add_error('rating_email', 'PayPal ratings need the paying email.')

        return cleaned_data


class PayoutDetailForm(forms.ModelForm):
    """Payout configuration (one per account)"""

    class Meta:
        model = PayoutDetail
        fields = ['payment_gateway', 'mobile_number']
        widgets = {
            'payment_gateway': forms.Select(attrs={'class': 'form-select'}),
            'mobile_number': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def clean_mobile_number(self):
        return (self.cleaned_data.get('mobile_number') or '').strip()


class AccountCreatedItemForm(forms.Form):
    """One row of the accounts-created batch"""

    TYPE_CHOICES = [
        ('seller', 'Seller'),
        ('buyer', 'Buyer'),
    ]

    email = forms.EmailField()
    type = forms.ChoiceField(choices=TYPE_CHOICES, required=False)

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()

    def clean_type(self):
        return self.cleaned_data.get('type') or 'seller'
