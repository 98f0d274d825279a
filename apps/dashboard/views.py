from django.db import DatabaseError
from django.shortcuts import render
import logging

from apps.accounts.models import Account
from apps.accounts.queries import get_top_performing_accounts
from apps.reports.exports import export_response, summary_rows
from apps.reports.queries import get_missing_reports_today
from apps.users.decorators import context_required
from . import queries

logger = logging.getLogger(__name__)

ANALYTICS_DAY_CHOICES = [7, 14, 30, 60, 90]


def _level_labels():
    return dict(Account.LEVEL_CHOICES)


# =============================================================================
# Dashboard
# =============================================================================

@context_required
def home(request):
    """
    Dashboard

    - summary cards
    - accounts still missing today's shifts
    - top performers (ranking page 1 and 2)
    - 30 day analyst leaderboard
    - 14 day balance / pending orders health
    """
    ctx = request.ctx
    context = {'today': ctx.today, 'load_error': None}

    try:
        context.update({
            'summary': queries.get_dashboard_summary(ctx.now),
            'missing_reports': get_missing_reports_today(ctx.today),
            'top_performers': get_top_performing_accounts(),
            'leaderboard': queries.get_analyst_leaderboard(30, ctx.today),
            'balance_trend': queries.get_balance_trends(14, ctx.today),
            'pending_orders_trend': queries.get_pending_orders_trend(14, ctx.today),
        })
    except DatabaseError:
        logger.error("Dashboard aggregates failed to load", exc_info=True)
        context['load_error'] = 'Could not load dashboard data. Please try again.'

    return render(request, 'dashboard/home.html', context)


@context_required
def summary(request):
    """Summary report (totals, by platform / level, top accounts)."""
    context = {'load_error': None, 'level_labels': _level_labels()}

    try:
        context['summary'] = queries.get_dashboard_summary(request.ctx.now)
    except DatabaseError:
        logger.error("Summary report failed to load", exc_info=True)
        context['load_error'] = 'Could not load the summary report.'

    return render(request, 'dashboard/summary.html', context)


@context_required
def summary_export(request):
    """Summary report as CSV (?format=xlsx for Excel)."""
    headers, rows = summary_rows(queries.get_dashboard_summary(request.ctx.now), _level_labels())
    file_format = 'xlsx' if request.GET.get('format') == 'xlsx' else 'csv'
    return export_response(headers, rows, 'summary_report', file_format, title='Summary')


# =============================================================================
# Analytics
# =============================================================================

def _days_param(value, default=30):
    try:
        days = int(value)
    except (TypeError, ValueError):
        return default
    return days if days in ANALYTICS_DAY_CHOICES else default


def _account_param(value):
    try:
        return int(value) if value else None
    except (TypeError, ValueError):
        return None


@context_required
def analytics(request):
    """
    Analytics

    ?days=7|14|30|60|90 (default 30), ?account=<id> narrows the metric trends
    """
    ctx = request.ctx
    days = _days_param(request.GET.get('days'))
    account_id = _account_param(request.GET.get('account'))

    context = {
        'days': days,
        'day_choices': ANALYTICS_DAY_CHOICES,
        'selected_account': account_id,
        'accounts': Account.objects.order_by('platform', 'username'),
        'load_error': None,
    }

    try:
        context.update({
            'monthly_trends': queries.get_monthly_trends(12, ctx.today),
            'completion_rates': queries.get_completion_rate_by_platform(days, ctx.today),
            'operator_performance': queries.get_operator_performance(days, ctx.today),
            'balance_trend': queries.get_balance_trends(days, ctx.today),
            'pending_orders_trend': queries.get_pending_orders_trend(days, ctx.today),
            'metric_trends': queries.get_metric_trends(days, account_id, ctx.today),
        })
    except DatabaseError:
        logger.error("Analytics failed to load", exc_info=True)
        context['load_error'] = 'Could not load analytics. Please try again.'

    return render(request, 'dashboard/analytics.html', context)
