"""
Dashboard and analytics reads

Each function fetches once and hands the records to the aggregation engine.
Windows start at the beginning of (today - days) in server-local time.
"""
from datetime import datetime, time, timedelta

from django.contrib.auth.models import User
from django.utils import timezone

from apps.accounts.models import Account
from apps.reports.models import ShiftReport
from . import aggregation

SUMMARY_REPORT_FIELDS = (
    'id', 'account_id', 'report_date', 'shift', 'available_balance', 'pending_balance',
    'orders_in_progress_value', 'orders_completed', 'pending_orders', 'rating', 'ranking_page',
)
TREND_REPORT_FIELDS = (
    'id', 'account_id', 'report_date', 'shift', 'available_balance', 'pending_balance',
    'orders_completed', 'pending_orders', 'rating', 'ranking_page',
)


def window_start(days, today=None):
    """First date of a `days` window ending today."""
    today = today or timezone.localdate()
    return today - timedelta(days=days)


def _start_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def get_dashboard_summary(now=None):
    """aggregation.dashboard_summary over every account and report."""
    now = now or timezone.now()
    accounts = Account.objects.only('id', 'platform', 'username', 'status', 'account_level', 'created_at')
    reports = ShiftReport.objects.only(*SUMMARY_REPORT_FIELDS)
    return aggregation.dashboard_summary(accounts, reports, now)


def get_monthly_trends(months=12, today=None):
    """Month-end snapshots of money earned and account count, oldest month first."""
    today = today or timezone.localdate()
    windows = aggregation.month_windows(months, today)
    last_day = windows[-1][1]

    accounts = Account.objects.only('id', 'created_at')
    reports = ShiftReport.objects.filter(report_date__lte=last_day).only(
        'id', 'account_id', 'report_date', 'shift', 'available_balance',
    )
    return aggregation.monthly_trends(accounts, reports, windows)


def _leaderboard(reports):
    reports = list(reports.only('id', 'reported_by_id'))
    user_ids = {report.reported_by_id for report in reports if report.reported_by_id}
    users = User.objects.filter(pk__in=user_ids)
    return aggregation.operator_leaderboard(reports, users)


def get_analyst_leaderboard(days=30, today=None):
    """Reports filed (by submission time) per member over the last `days` days."""
    start = _start_of_day(window_start(days, today))
    return _leaderboard(ShiftReport.objects.filter(created_at__gte=start))


def get_operator_performance(days=30, today=None):
    """Reports per member by report date over the last `days` days."""
    return _leaderboard(ShiftReport.objects.since(window_start(days, today)))


def get_balance_trends(days=14, today=None):
    reports = ShiftReport.objects.since(window_start(days, today)).only(*TREND_REPORT_FIELDS)
    return aggregation.balance_trend(reports)


def get_pending_orders_trend(days=14, today=None):
    reports = ShiftReport.objects.since(window_start(days, today)).only(*TREND_REPORT_FIELDS)
    return aggregation.pending_orders_trend(reports)


def get_metric_trends(days=30, account_id=None, today=None):
    """Money/rating/ranking per date, optionally for a single account."""
    reports = ShiftReport.objects.since(window_start(days, today)).only(*TREND_REPORT_FIELDS)
    if account_id:
        reports = reports.filter(account_id=account_id)
    return aggregation.metric_trends(reports)


def get_completion_rate_by_platform(days=30, today=None):
    accounts = Account.objects.only('id', 'platform', 'status')
    reports = ShiftReport.objects.since(window_start(days, today)).only('id', 'account_id')
    return aggregation.completion_rate_by_platform(accounts, reports, days)


def get_account_performance_metrics(account_id, days=30, today=None):
    reports = ShiftReport.objects.filter(account_id=account_id).since(window_start(days, today))
    return aggregation.account_performance(reports)
