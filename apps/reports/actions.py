# =============================================================================
# reports/actions.py - shift report mutations
# =============================================================================

"""
Shift report mutations (operator level)

submit_shift_report
    One report per (account, report_date, shift). A second submission is a
    CONFLICT, whether it is caught by the pre-check or by the database
    constraint when two submissions race.

update_shift_report
    Partial update of the metrics. report_date, shift and account never
    change. The JSON columns take tri-state updates (see schemas):
    omitted -> unchanged, None -> cleared, list -> replaced.
"""
import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.forms.models import model_to_dict

from apps.accounts.models import Account
from apps.alerts.notify import send_report_submitted_notification
from apps.core.errors import ActionResult, ErrorKind, validation_failure
from apps.core.models import get_or_none
from .forms import METRIC_FIELDS, ShiftReportForm, ShiftReportUpdateForm
from .models import ShiftReport
from .schemas import (
    UNCHANGED,
    apply_field_update,
    as_field_update,
    dump_items,
    parse_accounts_created,
    parse_orders_in_progress,
)

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ('report_date', 'shift', 'account')


def _duplicate_message(shift, report_date):
    return f"{shift} report already submitted for this account on {report_date:%Y-%m-%d}"


def _notify_admins(report, user):
    if not settings.REPORT_SUBMITTED_NOTIFICATIONS:
        return
    result = send_report_submitted_notification(report, user)
    if not result.success:
        logger.warning(f"Report {report.pk} saved but admins were not notified: {result.error}")


def submit_shift_report(ctx, data, orders_in_progress=None, accounts_created=None):
    """
    File a shift report

    Args:
        ctx: RequestContext
        data: form data with account, report_date, shift and the metrics
        orders_in_progress: list of {account, deadline, handlerPhone}
        accounts_created: list of {email, type}

    Returns:
        ActionResult with the ShiftReport as record
    """
    user = ctx.require_user()

    account = get_or_none(Account.objects.all(), pk=data.get('account'))
    if account is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Account not found')

    form = ShiftReportForm(data, instance=ShiftReport(account=account, reported_by=user))
    if not form.is_valid():
        logger.warning(f"Shift report rejected for account {account.pk}: {form.errors.as_json()}")
        return validation_failure(form)

    report_date = form.cleaned_data['report_date']
    shift = form.cleaned_data['shift']
    if ShiftReport.objects.filter(account=account, report_date=report_date, shift=shift).exists():
        logger.warning(f"Duplicate shift report: account {account.pk} {report_date} {shift}")
        return ActionResult.fail(ErrorKind.CONFLICT, _duplicate_message(shift, report_date))

    report = form.save(commit=False)
    report.orders_in_progress = dump_items(parse_orders_in_progress(orders_in_progress))
    report.accounts_created = dump_items(parse_accounts_created(accounts_created))

    try:
        with transaction.atomic():
            report.save()
    except IntegrityError:
        logger.warning(f"Duplicate shift report (race): account {account.pk} {report_date} {shift}")
        return ActionResult.fail(ErrorKind.CONFLICT, _duplicate_message(shift, report_date))
    except DatabaseError:
        logger.error(f"Shift report save failed for account {account.pk}", exc_info=True)
        return ActionResult.fail(ErrorKind.UPSTREAM, 'Failed to submit report')

    logger.info(f"Shift report submitted: {report} (id={report.pk}) by {user.username}")
    _notify_admins(report, user)
    return ActionResult.ok(report)


def update_shift_report(ctx, report_id, *, orders_in_progress=UNCHANGED, accounts_created=UNCHANGED, **fields):
    """
    Edit a shift report

    Only the metric fields passed in `fields` change; the rest keep their
    stored values.

    Args:
        ctx: RequestContext
        report_id: ShiftReport pk
        orders_in_progress: UNCHANGED (default), CLEAR/None, or Set/list
        accounts_created: UNCHANGED (default), CLEAR/None, or Set/list
        **fields: metric fields (orders_completed, available_balance, notes, ...)

    Returns:
        ActionResult with the updated ShiftReport as record
    """
    user = ctx.require_user()

    report = get_or_none(ShiftReport.objects.select_related('account'), pk=report_id)
    if report is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Report not found')

    for name in IDENTITY_FIELDS:
        if name in fields:
            current = report.account_id if name == 'account' else getattr(report, name)
            if str(fields[name]) != str(current):
                return ActionResult.fail(ErrorKind.VALIDATION, f"{name} cannot be changed")
            fields.pop(name)

    unknown = sorted(set(fields) - set(METRIC_FIELDS))
    if unknown:
        return ActionResult.fail(ErrorKind.VALIDATION, f"Unknown field: {', '.join(unknown)}")

    data = model_to_dict(report, fields=METRIC_FIELDS)
    data.update(fields)
    form = ShiftReportUpdateForm(data, instance=report)
    if not form.is_valid():
        return validation_failure(form)

    report = form.save(commit=False)
    report.orders_in_progress = apply_field_update(
        report.orders_in_progress, as_field_update(orders_in_progress, parse_orders_in_progress)
    )
    report.accounts_created = apply_field_update(
        report.accounts_created, as_field_update(accounts_created, parse_accounts_created)
    )

    try:
        report.save()
    except DatabaseError:
        logger.error(f"Shift report {report_id} update failed", exc_info=True)
        return ActionResult.fail(ErrorKind.UPSTREAM, 'Failed to update report')

    logger.info(f"Shift report updated: {report} (id={report.pk}) by {user.username}")
    return ActionResult.ok(report)
