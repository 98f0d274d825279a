"""
Finance ledger inserts (operator level)

Payout configuration lives with the accounts (accounts.actions.save_payout_detail)
because it is an admin-only setting.
"""
import logging

from django.db import DatabaseError

from apps.accounts.models import Account
from apps.core.errors import ActionResult, ErrorKind, validation_failure
from apps.core.models import get_or_none
from .forms import ExpenditureForm, WithdrawForm
from .models import Withdraw

logger = logging.getLogger(__name__)


def create_withdraw(ctx, data):
    """
    Record a withdrawal

    Args:
        data: {account, amount, withdraw_date, payment_means, notes}
    """
    user = ctx.require_user()

    if not data.get('account') or data.get('amount') in (None, '') or not data.get('withdraw_date'):
        return ActionResult.fail(ErrorKind.VALIDATION, 'account, amount and withdraw_date are required')

    account = get_or_none(Account.objects.all(), pk=data.get('account'))
    if account is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Account not found')

    form = WithdrawForm(data, instance=Withdraw(account=account))
    if not form.is_valid():
        logger.warning(f"Withdraw rejected for account {account.pk}: {form.errors.as_json()}")
        return validation_failure(form)

    try:
        withdraw = form.save()
    except DatabaseError:
        logger.error(f"Withdraw save failed for account {account.pk}", exc_info=True)
        return ActionResult.fail(ErrorKind.UPSTREAM, 'Failed to add withdrawal')

    logger.info(f"Withdraw recorded: {withdraw.amount} from {account} by {user.username}")
    return ActionResult.ok(withdraw)


def create_expenditure(ctx, data):
    """Record an expenditure ({item_name, type_of_expenditure, cost, transaction_id})."""
    user = ctx.require_user()

    form = ExpenditureForm(data)
    if not form.is_valid():
        logger.warning(f"Expenditure rejected: {form.errors.as_json()}")
        return validation_failure(form)

    try:
        expenditure = form.save()
    except DatabaseError:
        logger.error("Expenditure save failed", exc_info=True)
        return ActionResult.fail(ErrorKind.UPSTREAM, 'Failed to add expenditure')

    logger.info(f"Expenditure recorded: {expenditure} {expenditure.cost} by {user.username}")
    return ActionResult.ok(expenditure)
