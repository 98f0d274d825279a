from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
import logging

from apps.accounts.models import Account
from apps.core.errors import attach_error
from apps.core.pagination import get_page
from apps.users.decorators import context_required
from . import actions, queries
from .exports import export_response, report_rows
from .forms import METRIC_FIELDS, ExportRangeForm, ReportFilterForm, ShiftReportForm, ShiftReportUpdateForm
from .models import ShiftReport

logger = logging.getLogger(__name__)


def _orders_in_progress_rows(post):
    """Rebuild {account, deadline, handlerPhone} rows from the repeated form inputs."""
    accounts = post.getlist('oip_account')
    deadlines = post.getlist('oip_deadline')
    phones = post.getlist('oip_handler_phone')
    rows = []
    for i, account in enumerate(accounts):
        rows.append({
            'account': account,
            'deadline': deadlines[i] if i < len(deadlines) else '',
            'handlerPhone': phones[i] if i < len(phones) else '',
        })
    return rows


def _accounts_created_rows(post):
    emails = post.getlist('ac_email')
    types = post.getlist('ac_type')
    return [
        {'email': email, 'type': types[i] if i < len(types) else 'seller'}
        for i, email in enumerate(emails)
    ]


# =============================================================================
# Submission
# =============================================================================

@context_required
def report_submit_index(request):
    """
    Pick an account to report on

    Shows every active account plus the ones still missing a shift today.
    """
    context = {
        'accounts': Account.objects.filter(status='active').order_by('platform', 'username'),
        'missing_reports': queries.get_missing_reports_today(request.ctx.today),
        'today': request.ctx.today,
    }
    return render(request, 'reports/report_submit_index.html', context)


@context_required
def report_submit(request, account_id):
    """File the AM or PM report of one account."""
    account = get_object_or_404(Account, pk=account_id)

    if request.method == 'POST':
        data = request.POST.copy()
        data['account'] = account.pk
        result = actions.submit_shift_report(
            request.ctx,
            data,
            orders_in_progress=_orders_in_progress_rows(request.POST),
            accounts_created=_accounts_created_rows(request.POST),
        )
        if result.success:
            messages.success(request, f"{result.record.shift} report for {account.username} submitted.")
            return redirect('reports:report_submit_index')
        form = attach_error(ShiftReportForm(request.POST, instance=ShiftReport(account=account)), result)
    else:
        form = ShiftReportForm(initial={'report_date': request.ctx.today})

    context = {
        'form': form,
        'account': account,
        'todays_reports': queries.get_account_reports_for_date(account, request.ctx.today),
    }
    return render(request, 'reports/report_form.html', context)


@context_required
def report_edit(request, pk):
    """Edit the metrics of a filed report. Date, shift and account stay fixed."""
    report = get_object_or_404(ShiftReport.objects.select_related('account'), pk=pk)

    if request.method == 'POST':
        fields = {name: request.POST.get(name) for name in METRIC_FIELDS if name in request.POST}
        result = actions.update_shift_report(
            request.ctx,
            pk,
            orders_in_progress=_orders_in_progress_rows(request.POST),
            accounts_created=_accounts_created_rows(request.POST),
            **fields,
        )
        if result.success:
            messages.success(request, 'Report updated.')
            return redirect('reports:report_history')
        form = attach_error(ShiftReportUpdateForm(request.POST, instance=report), result)
    else:
        form = ShiftReportUpdateForm(instance=report)

    context = {
        'form': form,
        'report': report,
        'account': report.account,
    }
    return render(request, 'reports/report_edit.html', context)


# =============================================================================
# History / export
# =============================================================================

@context_required
def report_history(request):
    """
    Report history

    - account / platform / shift / date range filters
    - newest first, 20 per page
    """
    filter_form = ReportFilterForm(request.GET)
    filters = filter_form.cleaned_data if filter_form.is_valid() else {}

    reports = queries.filter_reports(**{
        key: filters.get(key) for key in ('account', 'platform', 'shift', 'date_from', 'date_to')
    })
    page_obj = get_page(reports, request.GET.get('page'))

    context = {
        'page_obj': page_obj,
        'filter_form': filter_form,
        'export_form': ExportRangeForm(initial={
            'date_from': filters.get('date_from'),
            'date_to': filters.get('date_to') or request.ctx.today,
            'format': 'csv',
        }),
    }
    return render(request, 'reports/report_history.html', context)


@context_required
def report_export(request):
    """Reports in an inclusive date range as CSV or Excel."""
    form = ExportRangeForm(request.GET)
    if not form.is_valid():
        messages.error(request, 'Pick a valid date range to export.')
        return redirect('reports:report_history')

    date_from = form.cleaned_data['date_from']
    date_to = form.cleaned_data['date_to']
    reports = queries.filter_reports(date_from=date_from, date_to=date_to).order_by('report_date', 'shift', 'pk')
    headers, rows = report_rows(reports)

    logger.info(f"Report export {date_from}..{date_to}: {len(rows)} rows by {request.ctx.user.username}")
    return export_response(
        headers,
        rows,
        f"shift_reports_{date_from:%Y%m%d}_{date_to:%Y%m%d}",
        form.cleaned_data['format'],
        title='Shift Reports',
    )
