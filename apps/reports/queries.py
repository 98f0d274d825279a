"""
Shift report reads

All date windows are in server-local time. "Today" defaults to the current
local date.
"""
from datetime import timedelta

from django.utils import timezone

from apps.accounts.models import Account
from apps.dashboard import aggregation
from .models import ShiftReport


def get_missing_reports_today(today=None):
    """
    Active accounts missing the AM and/or PM report for today

    Returns:
        [{id, platform, username, missing_shifts}] (see aggregation.missing_reports)
    """
    today = today or timezone.localdate()
    accounts = Account.objects.filter(status='active').only('id', 'platform', 'username', 'status')
    todays_reports = ShiftReport.objects.on(today).only('id', 'account_id', 'shift')
    return aggregation.missing_reports(accounts, todays_reports)


def filter_reports(account=None, platform=None, shift=None, date_from=None, date_to=None):
    """Report history, newest first (PM before AM within a day)."""
    reports = ShiftReport.objects.with_relations()

    if account:
        reports = reports.filter(account=account)
    if platform:
        reports = reports.filter(account__platform=platform)
    if shift:
        reports = reports.filter(shift=shift)
    if date_from:
        reports = reports.filter(report_date__gte=date_from)
    if date_to:
        reports = reports.filter(report_date__lte=date_to)

    return reports.order_by('-report_date', '-shift', '-pk')


def get_account_reports_for_date(account, day):
    """The (at most two) reports of an account on a date, AM first."""
    return list(
        ShiftReport.objects.filter(account=account, report_date=day)
        .select_related('reported_by')
        .order_by('shift')
    )


def get_account_health_metrics(account, days=7, today=None):
    """
    Recent pending-orders and balance series of one account, newest first

    Returns:
        {
            pending_orders_trend: [{date, shift, pending_orders}],
            balance_trend: [{date, shift, available, pending}],
        }
    """
    today = today or timezone.localdate()
    reports = (
        ShiftReport.objects.filter(account=account)
        .since(today - timedelta(days=days))
        .order_by('-report_date', '-shift')
    )

    pending_orders_trend = []
    balance_trend = []
    for report in reports:
        pending_orders_trend.append({
            'date': report.report_date,
            'shift': report.shift,
            'pending_orders': report.pending_orders,
        })
        balance_trend.append({
            'date': report.report_date,
            'shift': report.shift,
            'available': report.available_balance,
            'pending': report.pending_balance,
        })

    return {'pending_orders_trend': pending_orders_trend, 'balance_trend': balance_trend}
