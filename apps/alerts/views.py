from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from django.utils.crypto import constant_time_compare
from django.views.decorators.http import require_GET, require_POST
import logging

from apps.users.decorators import context_required
from .actions import send_missing_reports_email
from .notify import run_missing_reports_alert

logger = logging.getLogger(__name__)


def _bearer_token(request):
    header = request.META.get('HTTP_AUTHORIZATION', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()


def cron_authorized(request):
    """True when the request carries `Authorization: Bearer <CRON_SECRET>`. An unset secret never matches."""
    secret = settings.CRON_SECRET
    if not secret:
        return False
    return constant_time_compare(_bearer_token(request), secret)


@context_required
@require_POST
def missing_reports_alert(request):
    """Send the missing reports email now, then go back where the user came from."""
    result = send_missing_reports_email(request.ctx)
    if result.success:
        messages.success(request, f"{result.data['message']} ({result.data['reportCount']} accounts missing reports).")
    else:
        messages.error(request, result.error)

    next_url = request.POST.get('next')
    if next_url and next_url.startswith('/') and not next_url.startswith('//'):
        return redirect(next_url)
    return redirect('dashboard:home')


@require_GET
def cron_check_missing_reports(request):
    """
    Scheduled missing reports check

    401 without computing anything when the bearer token does not match.
    """
    if not cron_authorized(request):
        logger.warning("Cron missing reports check rejected: bad or missing token")
        return JsonResponse({'error': 'Unauthorized'}, status=401)

    result = run_missing_reports_alert()
    if not result.success:
        return JsonResponse(
            {'error': result.error, 'reportCount': result.data.get('reportCount', 0)},
            status=result.status_code,
        )
    return JsonResponse({'message': result.data['message'], 'reportCount': result.data['reportCount']})
