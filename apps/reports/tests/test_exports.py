# =============================================================================
# reports/tests/test_exports.py - CSV / Excel writers
# =============================================================================

import csv
from datetime import date
from decimal import Decimal
from io import StringIO

import openpyxl
import pytest

from apps.reports.exports import REPORT_HEADERS, export_response, report_rows, summary_rows, to_csv, to_excel
from apps.reports.models import ShiftReport


@pytest.mark.django_db
class TestReportRows:

    def test_row_contents(self, account, make_report, operator_member):
        make_report(
            account,
            date(2024, 3, 5),
            'PM',
            reported_by=operator_member,
            available_balance=Decimal('12.5'),
            orders_in_progress=[{'account': 'acme', 'deadline': 'Fri', 'handlerPhone': '0700'}],
            accounts_created='garbage',
        )

        headers, rows = report_rows(ShiftReport.objects.with_relations())

        assert headers == REPORT_HEADERS
        row = dict(zip(headers, rows[0]))
        assert row['Date'] == '2024-03-05'
        assert row['Shift'] == 'PM'
        assert row['Available Balance'] == '12.50'
        assert row['Orders in Progress'] == 'acme (Fri, 0700)'
        assert row['Accounts Created'] == ''
        assert row['Reported By'] == 'Otto Operator'
        assert row['Reporter Email'] == 'operator@example.com'

    def test_missing_reporter(self, account, make_report):
        make_report(account)
        _, rows = report_rows(ShiftReport.objects.with_relations())
        row = dict(zip(REPORT_HEADERS, rows[0]))
        assert row['Reported By'] == 'Unknown'
        assert row['Reporter Email'] == ''


class TestWriters:

    def test_csv_quotes_commas(self):
        text = to_csv(['Name', 'Notes'], [['acme', 'late, again']])
        assert list(csv.reader(StringIO(text))) == [['Name', 'Notes'], ['acme', 'late, again']]

    def test_excel_header_bold(self):
        workbook = openpyxl.load_workbook(to_excel(['A', 'B'], [[1, 'x']], title='Shift Reports'))
        sheet = workbook.active
        assert sheet.title == 'Shift Reports'
        assert sheet['A1'].value == 'A'
        assert sheet['A1'].font.bold
        assert sheet['B2'].value == 'x'

    def test_export_response_filename(self):
        response = export_response(['A'], [[1]], 'shift_reports', 'csv')
        assert response['Content-Type'] == 'text/csv; charset=utf-8'
        disposition = response['Content-Disposition']
        assert disposition.startswith('attachment; filename="shift_reports_')
        assert disposition.endswith('.csv"')

    def test_summary_rows_use_level_labels(self):
        summary = {
            'accounts': {
                'total': 1, 'new_last_7_days': 1, 'active': 1, 'paused': 0, 'at_risk': 0,
                'by_platform': {'fiverr': 1}, 'by_status': {'active': 1}, 'by_level': {'level1': 1},
            },
            'reports': {'total': 0, 'last_30_days': 0},
            'metrics': {
                'total_available_balance': Decimal('0.00'), 'total_pending_balance': Decimal('0.00'),
                'total_payments_for_active_orders': Decimal('0.00'), 'total_orders_completed': 0,
                'total_pending_orders': 0, 'avg_rating': None,
                'accounts_on_page_1': 0, 'accounts_on_page_2': 0,
            },
        }
        headers, rows = summary_rows(summary, {'level1': 'Level 1'})
        assert headers == ['Metric', 'Value']
        assert ['Avg Rating', 'N/A'] in rows
        assert ['Level: Level 1', 1] in rows
        assert ['Platform: fiverr', 1] in rows
