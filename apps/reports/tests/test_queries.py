# =============================================================================
# reports/tests/test_queries.py - report reads
# =============================================================================

from datetime import date
from decimal import Decimal

import pytest

from apps.reports import queries

TODAY = date(2024, 3, 5)


@pytest.mark.django_db
class TestMissingReportsToday:

    def test_am_filed_pm_missing(self, account, make_report):
        make_report(account, TODAY, 'AM')
        assert queries.get_missing_reports_today(TODAY) == [{
            'id': account.pk,
            'platform': 'fiverr',
            'username': 'writer_one',
            'missing_shifts': ['PM'],
        }]

    def test_complete_and_inactive_accounts_excluded(self, make_account, make_report):
        done = make_account('done')
        make_account('resting', status='paused')
        idle = make_account('idle', platform='upwork')
        make_report(done, TODAY, 'AM')
        make_report(done, TODAY, 'PM')
        make_report(idle, date(2024, 3, 4), 'PM')

        missing = queries.get_missing_reports_today(TODAY)
        assert [(row['username'], row['missing_shifts']) for row in missing] == [('idle', ['AM', 'PM'])]

    def test_ordered_by_platform_then_username(self, make_account):
        make_account('zed', platform='fiverr')
        make_account('amy', platform='upwork')
        make_account('bob', platform='fiverr')
        missing = queries.get_missing_reports_today(TODAY)
        assert [(row['platform'], row['username']) for row in missing] == [
            ('fiverr', 'bob'), ('fiverr', 'zed'), ('upwork', 'amy'),
        ]


@pytest.mark.django_db
class TestFilterReports:

    def test_filters(self, make_account, make_report):
        fiverr = make_account('alpha')
        upwork = make_account('beta', platform='upwork')
        make_report(fiverr, date(2024, 3, 1), 'AM')
        make_report(fiverr, date(2024, 3, 2), 'PM')
        make_report(upwork, date(2024, 3, 2), 'AM')

        assert queries.filter_reports(platform='upwork').count() == 1
        assert queries.filter_reports(account=fiverr, shift='PM').count() == 1
        assert queries.filter_reports(date_from=date(2024, 3, 2), date_to=date(2024, 3, 2)).count() == 2

    def test_newest_first_pm_before_am(self, account, make_report):
        make_report(account, date(2024, 3, 1), 'PM')
        make_report(account, date(2024, 3, 2), 'AM')
        make_report(account, date(2024, 3, 2), 'PM')
        rows = [(r.report_date.day, r.shift) for r in queries.filter_reports()]
        assert rows == [(2, 'PM'), (2, 'AM'), (1, 'PM')]


@pytest.mark.django_db
class TestAccountReportQueries:

    def test_reports_for_date_am_first(self, account, make_report):
        make_report(account, TODAY, 'PM')
        make_report(account, TODAY, 'AM')
        assert [r.shift for r in queries.get_account_reports_for_date(account, TODAY)] == ['AM', 'PM']

    def test_health_metrics_window(self, account, make_report):
        make_report(account, date(2024, 2, 1), 'AM', pending_orders=9)
        make_report(account, date(2024, 3, 4), 'PM', pending_orders=2, available_balance=Decimal('5.00'))
        make_report(account, TODAY, 'AM', pending_orders=1, pending_balance=Decimal('3.00'))

        health = queries.get_account_health_metrics(account, days=7, today=TODAY)

        assert [row['pending_orders'] for row in health['pending_orders_trend']] == [1, 2]
        assert health['balance_trend'][1] == {
            'date': date(2024, 3, 4), 'shift': 'PM', 'available': Decimal('5.00'), 'pending': Decimal('0.00'),
        }
