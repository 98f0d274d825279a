# =============================================================================
# accounts/tests/test_forms.py
# =============================================================================

import pytest

from apps.accounts.forms import AccountCreatedItemForm, AccountForm, GigForm


@pytest.mark.django_db
class TestAccountForm:

    def test_minimal_data_fills_defaults(self):
        form = AccountForm(data={'platform': 'fiverr', 'email': '  Seller@Mail.Test ', 'username': 'seller'})
        assert form.is_valid(), form.errors
        assert form.cleaned_data['email'] == 'seller@mail.test'
        assert form.cleaned_data['currency'] == 'USD'
        assert form.cleaned_data['status'] == 'active'
        assert form.cleaned_data['account_level'] == 'starter'

    def test_invalid_platform(self):
        form = AccountForm(data={'platform': 'etsy', 'email': 'a@mail.test', 'username': 'a'})
        assert not form.is_valid()
        assert 'platform' in form.errors

    def test_success_rate_range(self):
        form = AccountForm(data={
            'platform': 'fiverr', 'email': 'a@mail.test', 'username': 'a', 'success_rate': '120',
        })
        assert not form.is_valid()
        assert 'success_rate' in form.errors

    def test_duplicates_left_to_action(self, make_account):
        make_account('seller', email='seller@mail.test')
        form = AccountForm(data={'platform': 'fiverr', 'email': 'seller@mail.test', 'username': 'seller'})
        assert form.is_valid()


class TestGigForm:

    def test_rated_requires_rating_type(self):
        form = GigForm(data={'name': 'Essay', 'type': 'APA/MLA', 'rated': 'on'})
        assert not form.is_valid()
        assert 'rating_type' in form.errors

    def test_paypal_requires_email(self):
        form = GigForm(data={'name': 'Essay', 'type': 'APA/MLA', 'rated': 'on', 'rating_type': 'paypal'})
        assert not form.is_valid()
        assert 'rating_email' in form.errors

    def test_status_defaults_to_active(self):
        form = GigForm(data={'name': 'Essay', 'type': 'APA/MLA'})
        assert form.is_valid(), form.errors
        assert form.cleaned_data['status'] == 'active'


class TestAccountCreatedItemForm:

    def test_type_defaults_to_seller(self):
        form = AccountCreatedItemForm(data={'email': 'New@Mail.Test'})
        assert form.is_valid()
        assert form.cleaned_data == {'email': 'new@mail.test', 'type': 'seller'}

    def test_invalid_email(self):
        assert not AccountCreatedItemForm(data={'email': 'not-an-email'}).is_valid()
