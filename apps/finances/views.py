from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST
import logging

from apps.accounts.actions import save_payout_detail
from apps.accounts.forms import PayoutDetailForm
from apps.accounts.models import Account
from apps.users.decorators import context_required
from . import actions, queries
from .forms import ExpenditureForm, WithdrawForm

logger = logging.getLogger(__name__)


def _finances_context(**forms):
    """Everything the finances page shows, plus any bound forms being re-rendered."""
    context = {
        'finances': queries.get_finances_data(),
        'withdrawals': queries.get_withdrawals()[:50],
        'expenditures': queries.get_expenditures()[:50],
        'payout_details': queries.get_payout_details(),
        'ledger': queries.get_ledger_totals(),
        'active_accounts': Account.objects.filter(status='active').order_by('platform', 'username'),
        'withdraw_form': WithdrawForm(),
        'expenditure_form': ExpenditureForm(),
        'payout_form': PayoutDetailForm(),
    }
    context.update(forms)
    return context


@context_required
def finances_page(request):
    """
    Finances

    - latest balances per active account, grouped by platform
    - withdrawals / expenditures ledgers
    - payout configuration
    """
    return render(request, 'finances/finances.html', _finances_context())


@context_required
@require_POST
def withdraw_create(request):
    result = actions.create_withdraw(request.ctx, request.POST)
    if result.success:
        messages.success(request, f"Withdrawal of {result.record.amount} recorded.")
    else:
        messages.error(request, result.error)
    return redirect('finances:finances_page')


@context_required
@require_POST
def expenditure_create(request):
    result = actions.create_expenditure(request.ctx, request.POST)
    if result.success:
        messages.success(request, f"Expenditure '{result.record.item_name}' recorded.")
    else:
        messages.error(request, result.error)
    return redirect('finances:finances_page')


@context_required(admin=True)
@require_POST
def payout_detail_save(request):
    result = save_payout_detail(request.ctx, request.POST)
    if result.success:
        verb = 'added' if result.data['created'] else 'updated'
        messages.success(request, f"Payout details {verb} for {result.record.account.username}.")
    else:
        messages.error(request, result.error)
    return redirect('finances:finances_page')
