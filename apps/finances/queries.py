"""Finance reads"""
from django.db.models import Sum

from apps.accounts.models import Account, PayoutDetail
from apps.core.money import round_currency
from apps.dashboard import aggregation
from apps.reports.models import ShiftReport
from .models import Expenditure, Withdraw


def _active_accounts_with_latest():
    accounts = list(Account.objects.filter(status='active').order_by('platform', 'username', 'pk'))
    reports = ShiftReport.objects.filter(account__status='active').only(
        'id', 'account_id', 'report_date', 'shift', 'available_balance', 'pending_balance',
    )
    return accounts, aggregation.latest_reports_by_account(reports)


def get_finances_data():
    """
    Current balances of every active account (from its latest report)

    Returns:
        {accounts, by_platform, total_available, total_pending}
    """
    accounts, latest = _active_accounts_with_latest()
    return aggregation.finances_rollup(accounts, latest)


def get_total_available_balance():
    """Sum of the latest available balance of every active account."""
    return get_finances_data()['total_available']


def get_withdrawals():
    """Withdrawals with their account, newest withdraw date first."""
    return Withdraw.objects.select_related('account').order_by('-withdraw_date', '-id')


def get_expenditures():
    return Expenditure.objects.order_by('-created_at', '-id')


def get_payout_details():
    """
    Payout configuration of every active account

    Returns:
        [{account_id, platform, username, email, payout_detail_id,
          payment_gateway, mobile_number}]; gateway fields are None when unset
    """
    payouts = {p.account_id: p for p in PayoutDetail.objects.filter(account__status='active')}
    rows = []
    for account in Account.objects.filter(status='active').order_by('platform', 'username', 'pk'):
        payout = payouts.get(account.pk)
        rows.append({
            'account_id': account.pk,
            'platform': account.platform,
            'username': account.username,
            'email': account.email,
            'payout_detail_id': payout.pk if payout else None,
            'payment_gateway': payout.payment_gateway if payout else None,
            'mobile_number': payout.mobile_number if payout else None,
        })
    return rows


def get_ledger_totals():
    """{total_withdrawn, total_expenditure} over all time, rounded."""
    withdrawn = Withdraw.objects.aggregate(total=Sum('amount'))['total']
    spent = Expenditure.objects.aggregate(total=Sum('cost'))['total']
    return {
        'total_withdrawn': round_currency(withdrawn),
        'total_expenditure': round_currency(spent),
    }
