# =============================================================================
# finances/tests/test_views.py - finances page and form posts
# =============================================================================

from decimal import Decimal

import pytest
from django.urls import reverse

from apps.accounts.models import PayoutDetail
from apps.finances.models import Withdraw


@pytest.mark.django_db
class TestFinancesPage:

    def test_page(self, operator_client, account, make_report):
        make_report(account, available_balance=Decimal('42.00'))
        response = operator_client.get(reverse('finances:finances_page'))
        assert response.status_code == 200
        assert response.context['finances']['total_available'] == Decimal('42.00')

    def test_withdraw_post(self, operator_client, account):
        response = operator_client.post(reverse('finances:withdraw_create'), {
            'account': account.pk, 'amount': '10', 'withdraw_date': '2024-03-05',
        })
        assert response.status_code == 302
        assert Withdraw.objects.count() == 1

    def test_payout_post_is_admin_only(self, operator_client, account):
        response = operator_client.post(reverse('finances:payout_detail_save'), {
            'account': account.pk, 'payment_gateway': 'bank',
        })
        assert response.status_code == 403
        assert PayoutDetail.objects.count() == 0
