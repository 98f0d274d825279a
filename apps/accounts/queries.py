"""
Account reads

Ranking-based lists use the latest report of each account (see
apps.dashboard.aggregation).
"""
from django.db.models import Case, Count, IntegerField, Q, Value, When

from apps.core.models import get_or_none
from apps.dashboard import aggregation
from apps.reports.models import ShiftReport
from .models import Account, Gig, PayoutDetail

LIST_SORTS = {
    'platform': ['platform', 'username'],
    'username': ['username', 'platform'],
    '-created_at': ['-created_at'],
    'created_at': ['created_at'],
    'account_level': ['level_rank', 'platform', 'username'],
}


def _level_rank():
    """Tier order of account_level (starter = 0), not alphabetical."""
    return Case(
        *[When(account_level=value, then=Value(rank)) for rank, (value, _) in enumerate(Account.LEVEL_CHOICES)],
        default=Value(0),
        output_field=IntegerField(),
    )


def _with_counts(queryset):
    return queryset.annotate(
        level_rank=_level_rank(),
        gig_count=Count('gigs', distinct=True),
        active_gig_count=Count('gigs', filter=Q(gigs__status='active'), distinct=True),
        report_count=Count('shift_reports', distinct=True),
    )


def _latest_reports(account_ids=None):
    reports = ShiftReport.objects.only(
        'id', 'account_id', 'report_date', 'shift', 'ranking_page',
        'available_balance', 'pending_balance',
    )
    if account_ids is not None:
        reports = reports.filter(account_id__in=account_ids)
    return aggregation.latest_reports_by_account(reports)


def list_accounts(platform=None, status=None, search=None, sort=None):
    """Accounts with gig/report counts, filtered and sorted for the list page."""
    accounts = _with_counts(Account.objects.all())

    if platform:
        accounts = accounts.filter(platform=platform)
    if status:
        accounts = accounts.filter(status=status)
    if search:
        accounts = accounts.filter(Q(username__icontains=search) | Q(email__icontains=search))

    return accounts.order_by(*LIST_SORTS.get(sort, LIST_SORTS['platform']), 'pk')


def get_account_by_id(pk):
    """
    Account detail

    Returns:
        {account, gigs, recent_reports (25 newest), report_count, payout_detail}
        or None when the account does not exist
    """
    account = get_or_none(Account.objects.all(), pk=pk)
    if account is None:
        return None

    reports = account.shift_reports.select_related('reported_by', 'handed_over_to')

    return {
        'account': account,
        'gigs': list(account.gigs.order_by('-created_at')),
        'recent_reports': list(reports.order_by('-report_date', '-shift')[:25]),
        'report_count': reports.count(),
        'payout_detail': PayoutDetail.objects.filter(account=account).first(),
    }


def get_top_performing_accounts():
    """[(account, latest_report)] of active accounts on ranking page 1 or 2."""
    accounts = list(_with_counts(Account.objects.filter(status='active')))
    latest = _latest_reports([account.pk for account in accounts])
    return aggregation.top_performing_accounts(accounts, latest)


def get_accounts_ranked_by_page():
    """[(account, latest_report or None)] for every account, best page first."""
    accounts = list(_with_counts(Account.objects.all()))
    latest = _latest_reports()
    return aggregation.accounts_ranked_by_page(accounts, latest)


def get_rated_gigs():
    """Rated gigs for the rating information report, next rate date first (unset last)."""
    gigs = Gig.objects.filter(rated=True).select_related('account')
    return sorted(
        gigs,
        key=lambda gig: (gig.next_possible_rate_date is None, gig.next_possible_rate_date, gig.pk),
    )
