# =============================================================================
# accounts/tests/test_models.py - Account / Gig / PayoutDetail
# =============================================================================

from datetime import date

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from apps.accounts.models import Account, Gig, PayoutDetail


@pytest.mark.django_db
class TestAccountModel:

    def test_defaults(self, account):
        assert account.currency == 'USD'
        assert account.status == 'active'
        assert account.account_level == 'starter'
        assert account.is_active is True

    def test_str(self, account):
        assert str(account) == 'Fiverr - writer_one'

    def test_email_unique_per_platform(self, make_account):
        make_account('first', email='shared@mail.test')
        with pytest.raises(IntegrityError):
            make_account('second', email='shared@mail.test')

    def test_same_email_on_other_platform(self, make_account):
        make_account('first', email='shared@mail.test')
        other = make_account('second', platform='upwork', email='shared@mail.test')
        assert other.pk is not None


@pytest.mark.django_db
class TestGigModel:

    def test_unrated_gig_drops_rating_fields(self, account):
        gig = Gig.objects.create(
            account=account,
            name='Essay writing',
            type='APA/MLA',
            rated=False,
            last_rated_date=date(2024, 1, 1),
            next_possible_rate_date=date(2024, 2, 1),
            rating_type='paypal',
            rating_email='payer@mail.test',
        )
        gig.refresh_from_db()
        assert gig.last_rated_date is None
        assert gig.next_possible_rate_date is None
        assert gig.rating_type == ''
        assert gig.rating_email == ''

    def test_rating_email_kept_only_for_paypal(self, account):
        gig = Gig.objects.create(
            account=account, name='Review', type='TRINETX',
            rated=True, rating_type='client', rating_email='payer@mail.test',
        )
        assert gig.rating_email == ''

        gig.rating_type = 'paypal'
        gig.rating_email = 'payer@mail.test'
        gig.save()
        gig.refresh_from_db()
        assert gig.rating_email == 'payer@mail.test'

    def test_next_rate_date_before_last_is_invalid(self, account):
        gig = Gig(
            account=account, name='Review', type='TRINETX', rated=True, rating_type='client',
            last_rated_date=date(2024, 3, 1), next_possible_rate_date=date(2024, 2, 1),
        )
        with pytest.raises(ValidationError) as exc:
            gig.full_clean()
        assert 'next_possible_rate_date' in exc.value.message_dict


@pytest.mark.django_db
class TestPayoutDetailModel:

    def test_one_per_account(self, account):
        PayoutDetail.objects.create(account=account, payment_gateway='bank')
        with pytest.raises(IntegrityError):
            PayoutDetail.objects.create(account=account, payment_gateway='paypal')

    def test_reverse_accessor(self, account):
        payout = PayoutDetail.objects.create(account=account, payment_gateway='payoneer', mobile_number='0700')
        assert Account.objects.get(pk=account.pk).payout_detail == payout
