"""
CSV / Excel exports

Row builders turn records into (headers, rows); the writers serialise any
(headers, rows) pair. Views wrap the result in an HttpResponse.
"""
import csv
from io import BytesIO, StringIO

import openpyxl
from openpyxl.styles import Font
from django.http import HttpResponse
from django.utils import timezone

from apps.users.models import display_name

CSV_CONTENT_TYPE = 'text/csv'
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


# =============================================================================
# Row builders
# =============================================================================

REPORT_HEADERS = [
    'Date', 'Shift', 'Platform', 'Account', 'Account Email', 'Orders Completed',
    'Pending Orders', 'Available Balance', 'Pending Balance', 'Ranking Page', 'Rating',
    'Accounts Created', 'Orders in Progress', 'Notes', 'Reported By', 'Reporter Email',
    'Submitted At',
]


def report_rows(reports):
    """Rows of REPORT_HEADERS for shift reports (account and reporter preloaded)."""
    rows = []
    for report in reports:
        reporter = report.reported_by
        submitted_at = timezone.localtime(report.created_at) if report.created_at else None
        rows.append([
            report.report_date.strftime('%Y-%m-%d'),
            report.shift,
            report.account.platform,
            report.account.username,
            report.account.email,
            report.orders_completed,
            report.pending_orders,
            f"{report.available_balance:.2f}",
            f"{report.pending_balance:.2f}",
            report.ranking_page or '',
            report.rating if report.rating is not None else '',
            '; '.join(str(item) for item in report.accounts_created_items),
            '; '.join(str(item) for item in report.orders_in_progress_items),
            report.notes or '',
            display_name(reporter),
            reporter.email if reporter else '',
            submitted_at.strftime('%Y-%m-%d %H:%M:%S') if submitted_at else '',
        ])
    return REPORT_HEADERS, rows


ACCOUNT_HEADERS = [
    'Platform', 'Username', 'Email', 'Type of Gigs', 'Currency', 'Status', 'Level',
    'Active Gigs', 'Total Reports', 'Created At',
]


def account_rows(accounts):
    """
    Rows of ACCOUNT_HEADERS

    Expects accounts annotated with active_gig_count and report_count.
    """
    rows = []
    for account in accounts:
        rows.append([
            account.platform,
            account.username,
            account.email,
            account.type_of_gigs,
            account.currency,
            account.status,
            account.get_account_level_display(),
            getattr(account, 'active_gig_count', 0),
            getattr(account, 'report_count', 0),
            timezone.localtime(account.created_at).strftime('%Y-%m-%d') if account.created_at else '',
        ])
    return ACCOUNT_HEADERS, rows


def summary_rows(summary, level_labels=None):
    """Metric/value rows of a dashboard_summary() result."""
    level_labels = level_labels or {}
    accounts = summary['accounts']
    reports = summary['reports']
    metrics = summary['metrics']

    rows = [
        ['Total Accounts', accounts['total']],
        ['New Accounts (7 days)', accounts['new_last_7_days']],
        ['Active Accounts', accounts['active']],
        ['Paused Accounts', accounts['paused']],
        ['At Risk', accounts['at_risk']],
        ['Total Reports', reports['total']],
        ['Reports (30 days)', reports['last_30_days']],
        ['Total Available Balance', f"{metrics['total_available_balance']:.2f}"],
        ['Payments being cleared', f"{metrics['total_pending_balance']:.2f}"],
        ['Payments for active orders', f"{metrics['total_payments_for_active_orders']:.2f}"],
        ['Total Orders Completed', metrics['total_orders_completed']],
        ['Total Pending Orders', metrics['total_pending_orders']],
        ['Avg Rating', metrics['avg_rating'] if metrics['avg_rating'] is not None else 'N/A'],
        ['Accounts on Page 1', metrics['accounts_on_page_1']],
        ['Accounts on Page 2', metrics['accounts_on_page_2']],
    ]
    for platform, count in accounts['by_platform'].items():
        rows.append([f"Platform: {platform}", count])
    for level, count in accounts['by_level'].items():
        rows.append([f"Level: {level_labels.get(level, level)}", count])

    return ['Metric', 'Value'], rows


# =============================================================================
# Writers
# =============================================================================

def to_csv(headers, rows):
    """CSV text with a header line."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()


def to_excel(headers, rows, title='Export'):
    """
    Single-sheet workbook with a bold header row

    Returns:
        BytesIO positioned at 0
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title[:31]

    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append(list(row))

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


def export_response(headers, rows, basename, file_format='csv', title='Export'):
    """
    Download response for (headers, rows)

    The filename gets a local timestamp: <basename>_YYYYmmdd_HHMMSS.<ext>
    """
    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')

    if file_format == 'xlsx':
        response = HttpResponse(to_excel(headers, rows, title).read(), content_type=XLSX_CONTENT_TYPE)
        extension = 'xlsx'
    else:
        response = HttpResponse(to_csv(headers, rows), content_type=f'{CSV_CONTENT_TYPE}; charset=utf-8')
        extension = 'csv'

    response['Content-Disposition'] = f'attachment; filename="{basename}_{timestamp}.{extension}"'
    return response
