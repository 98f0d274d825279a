# =============================================================================
# dashboard/aggregation.py - derived metrics over accounts and shift reports
# =============================================================================

"""
Aggregation engine

Pure functions: they take record sequences that were already fetched (model
instances or any object with the same attributes) and reduce them into the
numbers the dashboard, analytics, summary and finances pages show. Nothing in
here touches the database.

Latest report
    The "current state" of an account is its most recent ShiftReport ordered
    by (report_date, shift) with PM after AM on the same date. Balances of an
    account without reports count as 0 and its ranking page as unset.

Rounding
    Money totals go through round_currency() (cents, half-up). Rates are
    rounded half-up to whole percent. Averages over nothing are None, rates
    over nothing are 0.
"""
import calendar
from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal

from django.utils import timezone

from apps.accounts.models import PLATFORMS, Account
from apps.core.money import ZERO, round_currency, round_half_up, to_decimal
from apps.users.models import display_name

SHIFTS = ['AM', 'PM']
SHIFT_RANK = {'AM': 0, 'PM': 1}
EXPECTED_SHIFTS_PER_DAY = len(SHIFTS)


def _dec(value):
    return to_decimal(value) or ZERO


def _local_date(value):
    """Calendar date of a date/datetime in server-local time."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localdate(value)
        return value.date()
    return value


# =============================================================================
# Latest-report selection
# =============================================================================

def shift_rank(shift):
    """AM -> 0, PM -> 1"""
    return SHIFT_RANK.get(shift, 0)


def report_sort_key(report):
    """
    Chronological key of a report: (report_date, shift rank, pk)

    The pk only matters for records that share date and shift, which the
    (account, report_date, shift) constraint rules out for stored reports.
    """
    return (report.report_date, shift_rank(report.shift), report.pk or 0)


def latest_report_of(reports):
    """Most recent report of a collection, None when it is empty."""
    return max(reports, key=report_sort_key, default=None)


def latest_reports_by_account(reports):
    """
    Latest report per account

    Returns:
        {account_id: report}; accounts without reports are absent
    """
    latest = {}
    for report in reports:
        current = latest.get(report.account_id)
        if current is None or report_sort_key(report) > report_sort_key(current):
            latest[report.account_id] = report
    return latest


# =============================================================================
# Per-date trend series
# =============================================================================

def balance_trend(reports):
    """
    Balances summed per calendar date across every account

    Both shifts of a date land in the same bucket. Dates without reports are
    left out, not zero-filled.

    Returns:
        [{date, total_available, total_pending, account_count}] ordered by date
    """
    buckets = defaultdict(lambda: {'total_available': ZERO, 'total_pending': ZERO, 'account_count': 0})

    for report in reports:
        bucket = buckets[report.report_date]
        bucket['total_available'] += _dec(report.available_balance)
        bucket['total_pending'] += _dec(report.pending_balance)
        bucket['account_count'] += 1

    return [
        {
            'date': day,
            'total_available': round_currency(buckets[day]['total_available']),
            'total_pending': round_currency(buckets[day]['total_pending']),
            'account_count': buckets[day]['account_count'],
        }
        for day in sorted(buckets)
    ]


def pending_orders_trend(reports):
    """[{date, total_pending, total_completed}] ordered by date"""
    buckets = defaultdict(lambda: {'total_pending': 0, 'total_completed': 0})

    for report in reports:
        bucket = buckets[report.report_date]
        bucket['total_pending'] += report.pending_orders or 0
        bucket['total_completed'] += report.orders_completed or 0

    return [{'date': day, **buckets[day]} for day in sorted(buckets)]


def metric_trends(reports):
    """
    Money, rating and ranking per calendar date

    rating is the mean of the ratings that were filled in (2 decimals),
    ranking the rounded mean of the ranking pages that were filled in. Both
    are None for a date where nobody entered one.
    """
    buckets = defaultdict(lambda: {
        'available': ZERO,
        'pending': ZERO,
        'rating_sum': ZERO,
        'rating_count': 0,
        'ranking_sum': 0,
        'ranking_count': 0,
        'report_count': 0,
    })

    for report in reports:
        bucket = buckets[report.report_date]
        bucket['available'] += _dec(report.available_balance)
        bucket['pending'] += _dec(report.pending_balance)
        bucket['report_count'] += 1
        if report.rating is not None:
            bucket['rating_sum'] += _dec(report.rating)
            bucket['rating_count'] += 1
        if report.ranking_page is not None:
            bucket['ranking_sum'] += report.ranking_page
            bucket['ranking_count'] += 1

    series = []
    for day in sorted(buckets):
        bucket = buckets[day]
        rating = None
        if bucket['rating_count']:
            rating = round_currency(bucket['rating_sum'] / bucket['rating_count'])
        ranking = None
        if bucket['ranking_count']:
            ranking = round_half_up(Decimal(bucket['ranking_sum']) / bucket['ranking_count'])

        series.append({
            'date': day,
            'money': round_currency(bucket['available'] + bucket['pending']),
            'available_balance': round_currency(bucket['available']),
            'pending_balance': round_currency(bucket['pending']),
            'rating': rating,
            'ranking': ranking,
            'report_count': bucket['report_count'],
            'rating_report_count': bucket['rating_count'],
            'ranking_report_count': bucket['ranking_count'],
        })
    return series


# =============================================================================
# Rates and leaderboards
# =============================================================================

def completion_rate_by_platform(accounts, reports, days):
    """
    Share of expected shift reports that were submitted, per platform

    expected = active accounts on the platform x days x 2 shifts
    actual   = reports (already limited to the window) of those accounts
    rate     = round_half_up(actual / expected x 100), capped at 100, and 0
               when nothing was expected

    The query window since(today - days) spans days + 1 dates, so a fully
    compliant platform can submit more than expected; the cap keeps the rate
    within 0..100.

    Every platform is listed, in platform choice order.
    """
    platform_of = {account.pk: account.platform for account in accounts if account.status == 'active'}
    active_count = defaultdict(int)
    for platform in platform_of.values():
        active_count[platform] += 1

    submitted = defaultdict(int)
    for report in reports:
        platform = platform_of.get(report.account_id)
        if platform:
            submitted[platform] += 1

    results = []
    for platform in PLATFORMS:
        expected = active_count[platform] * days * EXPECTED_SHIFTS_PER_DAY
        actual = submitted[platform]
        rate = 0
        if expected > 0:
            rate = min(round_half_up(Decimal(actual) * 100 / expected), 100)
        results.append({
            'platform': platform,
            'completion_rate': rate,
            'submitted': actual,
            'expected': expected,
        })
    return results


def operator_leaderboard(reports, users):
    """
    Reports submitted per member, most first

    Args:
        reports: reports in the window
        users: the reporting Users (iterable or {id: user})

    Ties are ordered by ascending user id. A reporter that no longer exists
    shows as "Unknown" with an empty email.
    """
    if not isinstance(users, dict):
        users = {user.pk: user for user in users}

    counts = defaultdict(int)
    for report in reports:
        counts[report.reported_by_id] += 1

    board = []
    for user_id, count in counts.items():
        user = users.get(user_id)
        board.append({
            'user_id': user_id,
            'name': display_name(user),
            'email': user.email if user else '',
            'reports_submitted': count,
        })

    board.sort(key=lambda row: (-row['reports_submitted'], row['user_id'] or 0))
    return board


# =============================================================================
# Composite summaries
# =============================================================================

def _ranking_key(account, latest):
    report = latest.get(account.pk)
    page = report.ranking_page if report else None
    return (page is None, page or 0, account.pk)


def dashboard_summary(accounts, reports, now=None):
    """
    Business overview used by the home dashboard and the summary report

    Account buckets cover every account. Balance, order and rating metrics
    come from the latest report of each account only; historical reports
    never double count.

    Args:
        accounts: every Account
        reports: every ShiftReport (only the fields read here are needed)
        now: aware datetime of the request

    Returns:
        {
            generated_at,
            accounts: {total, new_last_7_days, active, paused, at_risk,
                       by_platform, by_status, by_level},
            reports: {total, last_30_days},
            metrics: {total_available_balance, total_pending_balance,
                      total_payments_for_active_orders, total_orders_completed,
                      total_pending_orders, avg_rating, accounts_on_page_1,
                      accounts_on_page_2},
            top_accounts: [{id, platform, username, level, ranking_page,
                            available_balance}],
        }
    """
    now = now or timezone.now()
    accounts = list(accounts)
    reports = list(reports)
    today = _local_date(now)
    week_ago = now - timedelta(days=7)
    month_ago = today - timedelta(days=30)

    by_platform = {platform: 0 for platform in PLATFORMS}
    by_status = {value: 0 for value, _ in Account.STATUS_CHOICES}
    by_level = {value: 0 for value, _ in Account.LEVEL_CHOICES}
    new_last_7_days = 0

    for account in accounts:
        by_platform[account.platform] = by_platform.get(account.platform, 0) + 1
        by_status[account.status] = by_status.get(account.status, 0) + 1
        by_level[account.account_level] = by_level.get(account.account_level, 0) + 1
        if account.created_at and account.created_at >= week_ago:
            new_last_7_days += 1

    latest = latest_reports_by_account(reports)

    total_available = ZERO
    total_pending = ZERO
    total_active_orders = ZERO
    orders_completed = 0
    pending_orders = 0
    rating_sum = ZERO
    rating_count = 0
    on_page = {1: 0, 2: 0}

    for account in accounts:
        report = latest.get(account.pk)
        if report is None:
            continue
        total_available += _dec(report.available_balance)
        total_pending += _dec(report.pending_balance)
        total_active_orders += _dec(report.orders_in_progress_value)
        orders_completed += report.orders_completed or 0
        pending_orders += report.pending_orders or 0
        if report.rating is not None:
            rating_sum += _dec(report.rating)
            rating_count += 1
        if report.ranking_page in on_page:
            on_page[report.ranking_page] += 1

    top_accounts = []
    for account in sorted(accounts, key=lambda a: _ranking_key(a, latest)):
        report = latest.get(account.pk)
        top_accounts.append({
            'id': account.pk,
            'platform': account.platform,
            'username': account.username,
            'level': account.account_level,
            'ranking_page': report.ranking_page if report else None,
            'available_balance': round_currency(report.available_balance if report else ZERO),
        })

    return {
        'generated_at': now,
        'accounts': {
            'total': len(accounts),
            'new_last_7_days': new_last_7_days,
            'active': by_status.get('active', 0),
            'paused': by_status.get('paused', 0),
            'at_risk': by_status.get('risk', 0),
            'by_platform': by_platform,
            'by_status': by_status,
            'by_level': by_level,
        },
        'reports': {
            'total': len(reports),
            'last_30_days': sum(1 for r in reports if r.report_date >= month_ago),
        },
        'metrics': {
            'total_available_balance': round_currency(total_available),
            'total_pending_balance': round_currency(total_pending),
            'total_payments_for_active_orders': round_currency(total_active_orders),
            'total_orders_completed': orders_completed,
            'total_pending_orders': pending_orders,
            'avg_rating': round_currency(rating_sum / rating_count) if rating_count else None,
            'accounts_on_page_1': on_page[1],
            'accounts_on_page_2': on_page[2],
        },
        'top_accounts': top_accounts,
    }


def month_windows(months, today):
    """
    The last `months` calendar months up to and including today's month

    Returns:
        [(month_start, month_end)] oldest first, as dates
    """
    windows = []
    for offset in range(months - 1, -1, -1):
        month_index = today.year * 12 + (today.month - 1) - offset
        year, month = divmod(month_index, 12)
        month += 1
        last_day = calendar.monthrange(year, month)[1]
        windows.append((date(year, month, 1), date(year, month, last_day)))
    return windows


def monthly_trends(accounts, reports, windows):
    """
    Money and account count as they stood at the end of each month

    For each window: the accounts created on or before month end, and for
    each of them the latest report dated on or before month end.
    money_earned is the sum of those reports' available balances.

    Reports are walked once in chronological order while the windows advance,
    so each month sees exactly the reports up to its end.

    Returns:
        [{month: 'Jan 2024', month_start, money_earned, total_accounts}]
    """
    ordered = sorted(reports, key=report_sort_key)
    accounts = [(account, _local_date(account.created_at)) for account in accounts]

    latest = {}
    position = 0
    trends = []

    for month_start, month_end in sorted(windows):
        while position < len(ordered) and ordered[position].report_date <= month_end:
            report = ordered[position]
            latest[report.account_id] = report
            position += 1

        existing = [account for account, created in accounts if created <= month_end]
        money = sum(
            (_dec(latest[account.pk].available_balance) for account in existing if account.pk in latest),
            ZERO,
        )
        trends.append({
            'month': month_start.strftime('%b %Y'),
            'month_start': month_start,
            'money_earned': round_currency(money),
            'total_accounts': len(existing),
        })

    return trends


def missing_reports(accounts, todays_reports):
    """
    Active accounts that still owe a shift report today

    Args:
        accounts: accounts to check (inactive ones are ignored)
        todays_reports: reports dated today

    Returns:
        [{id, platform, username, missing_shifts}] ordered by platform,
        username, id. missing_shifts keeps AM before PM. Accounts with both
        shifts in are left out.
    """
    reported = defaultdict(set)
    for report in todays_reports:
        reported[report.account_id].add(report.shift)

    missing = []
    for account in accounts:
        if account.status != 'active':
            continue
        shifts = [shift for shift in SHIFTS if shift not in reported[account.pk]]
        if shifts:
            missing.append({
                'id': account.pk,
                'platform': account.platform,
                'username': account.username,
                'missing_shifts': shifts,
            })

    missing.sort(key=lambda row: (row['platform'], row['username'], row['id']))
    return missing


def top_performing_accounts(accounts, latest):
    """
    Active accounts whose latest report puts them on page 1 or 2

    Returns:
        [(account, latest_report)] best page first, ties by account id
    """
    top = []
    for account in accounts:
        report = latest.get(account.pk)
        if account.status != 'active' or report is None:
            continue
        if report.ranking_page is not None and report.ranking_page <= 2:
            top.append((account, report))

    top.sort(key=lambda pair: (pair[1].ranking_page, pair[0].pk))
    return top


def accounts_ranked_by_page(accounts, latest):
    """[(account, latest_report or None)] by latest ranking page, unset last"""
    ranked = sorted(accounts, key=lambda account: _ranking_key(account, latest))
    return [(account, latest.get(account.pk)) for account in ranked]


def finances_rollup(accounts, latest):
    """
    Current balances per account with platform grouping

    Returns:
        {
            accounts: [{id, platform, username, email, available_balance,
                        pending_balance, last_report_date}],
            by_platform: {platform: [rows]},
            total_available, total_pending,
        }
    """
    rows = []
    by_platform = {}
    total_available = ZERO
    total_pending = ZERO

    for account in accounts:
        report = latest.get(account.pk)
        available = _dec(report.available_balance) if report else ZERO
        pending = _dec(report.pending_balance) if report else ZERO
        total_available += available
        total_pending += pending

        row = {
            'id': account.pk,
            'platform': account.platform,
            'username': account.username,
            'email': account.email,
            'available_balance': round_currency(available),
            'pending_balance': round_currency(pending),
            'last_report_date': report.report_date if report else None,
        }
        rows.append(row)
        by_platform.setdefault(account.platform, []).append(row)

    return {
        'accounts': rows,
        'by_platform': by_platform,
        'total_available': round_currency(total_available),
        'total_pending': round_currency(total_pending),
    }


def account_performance(reports):
    """
    Report-by-report series of one account

    Returns:
        {
            metrics: [{date, shift, available, pending, orders_completed,
                       pending_orders, ranking_page}] oldest first,
            total_completed,
            avg_pending_orders: rounded mean, 0 without reports,
            current_balance: available balance of the latest report, 0 without reports,
        }
    """
    ordered = sorted(reports, key=report_sort_key)

    metrics = [
        {
            'date': report.report_date,
            'shift': report.shift,
            'available': round_currency(report.available_balance),
            'pending': round_currency(report.pending_balance),
            'orders_completed': report.orders_completed,
            'pending_orders': report.pending_orders,
            'ranking_page': report.ranking_page,
        }
        for report in ordered
    ]

    avg_pending = 0
    if ordered:
        avg_pending = round_half_up(Decimal(sum(r.pending_orders or 0 for r in ordered)) / len(ordered))

    return {
        'metrics': metrics,
        'total_completed': sum(r.orders_completed or 0 for r in ordered),
        'avg_pending_orders': avg_pending,
        'current_balance': round_currency(ordered[-1].available_balance) if ordered else ZERO,
    }
