"""
Finances JSON API

    POST /api/finances/expenditures/    (signed-in member)
    POST /api/finances/withdraws/       (signed-in member)
    POST /api/finances/payout-details/  (admin)

Bodies are JSON objects with snake_case keys. Success returns the stored
record; failures return {"error": ...} with the status of the ErrorKind.
"""
import json
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_POST

from apps.accounts.actions import save_payout_detail
from apps.users.decorators import api_context_required
from . import actions

logger = logging.getLogger(__name__)


# =============================================================================
# Serializers
# =============================================================================

def serialize_withdraw(withdraw):
    return {
        'id': withdraw.pk,
        'account': withdraw.account_id,
        'amount': f"{withdraw.amount:.2f}",
        'withdraw_date': withdraw.withdraw_date.isoformat(),
        'payment_means': withdraw.payment_means,
        'notes': withdraw.notes,
        'created_at': withdraw.created_at.isoformat(),
    }


def serialize_expenditure(expenditure):
    return {
        'id': expenditure.pk,
        'item_name': expenditure.item_name,
        'type_of_expenditure': expenditure.type_of_expenditure,
        'cost': f"{expenditure.cost:.2f}",
        'transaction_id': expenditure.transaction_id,
        'created_at': expenditure.created_at.isoformat(),
    }


def serialize_payout_detail(payout):
    return {
        'id': payout.pk,
        'account': payout.account_id,
        'payment_gateway': payout.payment_gateway,
        'mobile_number': payout.mobile_number,
        'updated_at': payout.updated_at.isoformat(),
    }


# =============================================================================
# Helpers
# =============================================================================

def _json_body(request):
    """Parsed JSON object body, or None when it is not a JSON object."""
    try:
        data = json.loads(request.body or b'')
    except (ValueError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _invalid_body():
    return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)


def _error(result):
    return JsonResponse({'error': result.error}, status=result.status_code)


# =============================================================================
# Endpoints
# =============================================================================

@require_POST
@api_context_required
def expenditure_create(request):
    data = _json_body(request)
    if data is None:
        return _invalid_body()

    result = actions.create_expenditure(request.ctx, data)
    if not result.success:
        return _error(result)
    return JsonResponse(serialize_expenditure(result.record), status=201)


@require_POST
@api_context_required
def withdraw_create(request):
    data = _json_body(request)
    if data is None:
        return _invalid_body()

    result = actions.create_withdraw(request.ctx, data)
    if not result.success:
        return _error(result)
    return JsonResponse(serialize_withdraw(result.record), status=201)


@require_POST
@api_context_required(admin=True)
def payout_detail_save(request):
    """Create or replace an account's payout details; 201 on create, 200 on update."""
    data = _json_body(request)
    if data is None:
        return _invalid_body()

    result = save_payout_detail(request.ctx, data)
    if not result.success:
        return _error(result)
    return JsonResponse(serialize_payout_detail(result.record), status=201 if result.data['created'] else 200)
