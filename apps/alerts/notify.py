# =============================================================================
# alerts/notify.py - alert and notification emails
# =============================================================================

"""
Outgoing email

    send_missing_reports_alert        accounts still owing today's shift reports
    send_report_submitted_notification  a report was filed (to admins)
    run_missing_reports_alert         compute + send, shared by the on-demand
                                      action and the cron endpoint

Delivery goes through Django's email backend (SMTP in production). SMTP
failures are logged and returned as UPSTREAM failures; nothing here raises.
"""
import logging
from smtplib import SMTPException

from django.conf import settings
from django.contrib.auth.models import User
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.dateformat import format as date_format
from django.utils.html import strip_tags

from apps.core.errors import ActionResult, ErrorKind
from apps.reports.queries import get_missing_reports_today
from apps.users.models import Profile, display_name

logger = logging.getLogger(__name__)

DATE_LABEL_FORMAT = 'F d, Y'


def admin_emails():
    """Emails of every active admin member."""
    return list(
        User.objects.filter(is_active=True, profile__role=Profile.Role.ADMIN)
        .exclude(email='')
        .order_by('pk')
        .values_list('email', flat=True)
    )


def alert_recipients():
    """ALERT_EMAIL_TO when configured, admin emails otherwise."""
    return list(settings.ALERT_EMAIL_TO) or admin_emails()


def _send(subject, template_name, context, recipients):
    html_content = render_to_string(template_name, context)
    email = EmailMultiAlternatives(
        subject=subject,
        body=strip_tags(html_content),
        from_email=settings.ALERT_EMAIL_FROM,
        to=recipients,
    )
    email.attach_alternative(html_content, "text/html")
    email.send(fail_silently=False)


def send_missing_reports_alert(missing, date_label, recipients=None):
    """
    Email the list of accounts missing shift reports

    Args:
        missing: [{platform, username, missing_shifts}]
        date_label: human readable date, e.g. 'March 05, 2024'
        recipients: overrides alert_recipients()

    Returns:
        ActionResult (data: recipients count)
    """
    recipients = recipients or alert_recipients()
    if not recipients:
        logger.error("Missing reports alert not sent: no recipients configured")
        return ActionResult.fail(ErrorKind.UPSTREAM, 'No alert recipients configured')

    try:
        _send(
            subject=f"Missing Shift Reports - {date_label}",
            template_name='alerts/missing_reports_email.html',
            context={'missing_reports': missing, 'date': date_label},
            recipients=recipients,
        )
    except (SMTPException, OSError):
        logger.error(f"Missing reports alert failed for {len(missing)} accounts", exc_info=True)
        return ActionResult.fail(ErrorKind.UPSTREAM, 'Failed to send alert email')

    logger.info(f"Missing reports alert sent: {len(missing)} accounts to {len(recipients)} recipients")
    return ActionResult.ok(recipients=len(recipients))


def run_missing_reports_alert(today=None):
    """
    Compute today's missing reports and email them

    No missing reports is a successful no-op.

    Returns:
        ActionResult with data {message, reportCount}
    """
    today = today or timezone.localdate()
    missing = get_missing_reports_today(today)

    if not missing:
        logger.info(f"No missing reports for {today}")
        return ActionResult.ok(message='No missing reports', reportCount=0)

    result = send_missing_reports_alert(missing, date_format(today, DATE_LABEL_FORMAT))
    result.data.update(reportCount=len(missing))
    if result.success:
        result.data['message'] = 'Alert sent'
    return result


def send_report_submitted_notification(report, submitted_by):
    """
    Tell the admins a shift report was filed

    Returns:
        ActionResult; success with data {skipped: True} when there is nobody to tell
    """
    recipients = admin_emails()
    if not recipients:
        return ActionResult.ok(skipped=True)

    account_name = f"{report.account.get_platform_display()} - {report.account.username}"
    report_date = date_format(report.report_date, 'F j, Y')

    try:
        _send(
            subject=f"{report.shift} report submitted: {account_name} ({report_date})",
            template_name='alerts/report_submitted_email.html',
            context={
                'account_name': account_name,
                'report_date': report_date,
                'shift': report.shift,
                'submitted_by': display_name(submitted_by),
                'report': report,
            },
            recipients=recipients,
        )
    except (SMTPException, OSError):
        logger.error(f"Report notification failed for report {report.pk}", exc_info=True)
        return ActionResult.fail(ErrorKind.UPSTREAM, 'Failed to send report notification')

    logger.info(f"Report notification sent for report {report.pk} to {len(recipients)} admins")
    return ActionResult.ok(recipients=len(recipients))
