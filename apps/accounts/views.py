from django.contrib import messages
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST
import logging

from apps.core.errors import ErrorKind, attach_error
from apps.core.pagination import get_page
from apps.dashboard.queries import get_account_performance_metrics
from apps.reports.exports import account_rows, export_response
from apps.reports.queries import get_account_health_metrics
from apps.users.decorators import context_required
from . import actions, queries
from .forms import AccountForm, AccountSearchForm, GigForm
from .models import PLATFORM_CHOICES, Account, Gig

logger = logging.getLogger(__name__)


# =============================================================================
# Account views
# =============================================================================

@context_required
def account_list(request):
    """
    Account list

    - platform / status / search filters
    - sortable
    - 20 per page
    """
    search_form = AccountSearchForm(request.GET)
    filters = search_form.cleaned_data if search_form.is_valid() else {}

    accounts = queries.list_accounts(
        platform=filters.get('platform'),
        status=filters.get('status'),
        search=filters.get('search'),
        sort=filters.get('sort'),
    )
    page_obj = get_page(accounts, request.GET.get('page'))

    context = {
        'page_obj': page_obj,
        'search_form': search_form,
        'total_count': Account.objects.count(),
        'active_count': Account.objects.filter(status='active').count(),
        'risk_count': Account.objects.filter(status='risk').count(),
    }
    return render(request, 'accounts/account_list.html', context)


@context_required
def account_ranking(request):
    """Every account ordered by the ranking page of its latest report."""
    context = {
        'ranked_accounts': queries.get_accounts_ranked_by_page(),
    }
    return render(request, 'accounts/account_ranking.html', context)


@context_required
def account_detail(request, pk):
    """
    Account detail

    - gigs
    - 25 latest reports
    - 7 day health and 30 day performance
    """
    detail = queries.get_account_by_id(pk)
    if detail is None:
        raise Http404('Account not found')

    account = detail['account']
    context = {
        **detail,
        'health': get_account_health_metrics(account, days=7, today=request.ctx.today),
        'performance': get_account_performance_metrics(account.pk, days=30, today=request.ctx.today),
    }
    return render(request, 'accounts/account_detail.html', context)


@context_required(admin=True)
def account_create(request):
    if request.method == 'POST':
        result = actions.create_account(request.ctx, request.POST)
        if result.success:
            messages.success(request, f"Account '{result.record.username}' created.")
            return redirect('accounts:account_detail', pk=result.record.pk)
        form = attach_error(AccountForm(request.POST), result)
    else:
        form = AccountForm()

    return render(request, 'accounts/account_form.html', {'form': form, 'is_edit': False})


@context_required(admin=True)
def account_edit(request, pk):
    account = get_object_or_404(Account, pk=pk)

    if request.method == 'POST':
        result = actions.update_account(request.ctx, pk, request.POST)
        if result.success:
            messages.success(request, f"Account '{result.record.username}' updated.")
            return redirect('accounts:account_detail', pk=pk)
        form = attach_error(AccountForm(request.POST, instance=account), result)
    else:
        form = AccountForm(instance=account)

    return render(request, 'accounts/account_form.html', {'form': form, 'account': account, 'is_edit': True})


@context_required(admin=True)
@require_POST
def account_delete(request, pk):
    result = actions.delete_account(request.ctx, pk)
    if not result.success:
        if result.kind == ErrorKind.NOT_FOUND:
            raise Http404(result.error)
        messages.error(request, result.error)
        return redirect('accounts:account_detail', pk=pk)

    messages.success(request, 'Account deleted.')
    return redirect('accounts:account_list')


@context_required
def account_export(request):
    """Download every account as CSV (?format=xlsx for Excel)."""
    headers, rows = account_rows(queries.list_accounts())
    file_format = 'xlsx' if request.GET.get('format') == 'xlsx' else 'csv'
    return export_response(headers, rows, 'accounts', file_format, title='Accounts')


@context_required
def accounts_created(request):
    """
    Report newly opened accounts in bulk

    Rows come in as parallel email / type lists. Each row is created or
    rejected independently.
    """
    outcome = None
    platform = request.POST.get('platform', 'fiverr')

    if request.method == 'POST':
        emails = request.POST.getlist('email')
        types = request.POST.getlist('type')
        items = [
            {'email': email, 'type': types[i] if i < len(types) else 'seller'}
            for i, email in enumerate(emails)
        ]
        result = actions.report_accounts_created(request.ctx, platform, items)
        outcome = result.data

        if result.success:
            messages.success(request, f"{result.data['created']} account(s) created.")
            if not result.data['failed']:
                return redirect('accounts:accounts_created')
        else:
            messages.error(request, result.error)

    context = {
        'platform_choices': PLATFORM_CHOICES,
        'platform': platform,
        'outcome': outcome,
    }
    return render(request, 'accounts/accounts_created.html', context)


# =============================================================================
# Gig views
# =============================================================================

@context_required
def rating_information(request):
    """Rated gigs and when each can be rated again."""
    return render(request, 'accounts/rating_information.html', {'gigs': queries.get_rated_gigs()})


@context_required(admin=True)
def gig_create(request, pk):
    account = get_object_or_404(Account, pk=pk)

    if request.method == 'POST':
        result = actions.create_gig(request.ctx, pk, request.POST)
        if result.success:
            messages.success(request, f"Gig '{result.record.name}' added.")
            return redirect('accounts:account_detail', pk=pk)
        form = attach_error(GigForm(request.POST), result)
    else:
        form = GigForm()

    return render(request, 'accounts/gig_form.html', {'form': form, 'account': account, 'is_edit': False})


@context_required(admin=True)
def gig_edit(request, gig_id):
    gig = get_object_or_404(Gig.objects.select_related('account'), pk=gig_id)

    if request.method == 'POST':
        result = actions.update_gig(request.ctx, gig_id, request.POST)
        if result.success:
            messages.success(request, f"Gig '{result.record.name}' updated.")
            return redirect('accounts:account_detail', pk=gig.account_id)
        form = attach_error(GigForm(request.POST, instance=gig), result)
    else:
        form = GigForm(instance=gig)

    context = {'form': form, 'account': gig.account, 'gig': gig, 'is_edit': True}
    return render(request, 'accounts/gig_form.html', context)


@context_required(admin=True)
@require_POST
def gig_delete(request, gig_id):
    result = actions.delete_gig(request.ctx, gig_id)
    if not result.success:
        if result.kind == ErrorKind.NOT_FOUND:
            raise Http404(result.error)
        messages.error(request, result.error)
        return redirect('accounts:account_list')

    messages.success(request, 'Gig deleted.')
    return redirect('accounts:account_detail', pk=result.record.pk)
