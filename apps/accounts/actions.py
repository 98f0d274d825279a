# =============================================================================
# accounts/actions.py - account, gig and payout mutations
# =============================================================================

"""
Account mutations

Every function takes the RequestContext first and authorises before it
touches the database:

    admin    : create/update/delete account, create/update/delete gig,
               save payout detail
    operator : report_accounts_created

Expected failures come back as ActionResult; only authorisation raises.
"""
import logging

from django.db import DatabaseError, IntegrityError, transaction

from apps.core.errors import ActionResult, ErrorKind, validation_failure
from apps.core.models import get_or_none
from .forms import AccountCreatedItemForm, AccountForm, GigForm, PayoutDetailForm
from .models import PLATFORMS, Account, Gig, PayoutDetail

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = 'Account with this email already exists on this platform'
DUPLICATE_ITEM_MESSAGE = 'Already exists on this platform'
INVALID_EMAIL_MESSAGE = 'Invalid email'


def _account_exists(platform, email, exclude_pk=None):
    queryset = Account.objects.filter(platform=platform, email__iexact=email)
    if exclude_pk:
        queryset = queryset.exclude(pk=exclude_pk)
    return queryset.exists()


def _conflict(message=DUPLICATE_ACCOUNT_MESSAGE):
    return ActionResult.fail(ErrorKind.CONFLICT, message)


def _upstream(message):
    return ActionResult.fail(ErrorKind.UPSTREAM, message)


# =============================================================================
# Account
# =============================================================================

def create_account(ctx, data):
    """
    Create an account (admin)

    Args:
        ctx: RequestContext
        data: form data (platform, email, username, type_of_gigs, currency, ...)

    Returns:
        ActionResult with the new Account as record
    """
    user = ctx.require_admin()

    form = AccountForm(data)
    if not form.is_valid():
        logger.warning(f"Account create rejected: {form.errors.as_json()}")
        return validation_failure(form)

    platform = form.cleaned_data['platform']
    email = form.cleaned_data['email']
    if _account_exists(platform, email):
        logger.warning(f"Duplicate account: {platform}/{email}")
        return _conflict()

    try:
        with transaction.atomic():
            account = form.save(commit=False)
            account.created_by = user
            account.save()
    except IntegrityError:
        logger.warning(f"Duplicate account (race): {platform}/{email}")
        return _conflict()
    except DatabaseError:
        logger.error(f"Account create failed: {platform}/{email}", exc_info=True)
        return _upstream('Failed to create account')

    logger.info(f"Account created: {account} (id={account.pk}) by {user.username}")
    return ActionResult.ok(account)


def update_account(ctx, account_id, data):
    """Edit an account (admin). The (platform, email) pair stays unique."""
    user = ctx.require_admin()

    account = get_or_none(Account.objects.all(), pk=account_id)
    if account is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Account not found')

    form = AccountForm(data, instance=account)
    if not form.is_valid():
        logger.warning(f"Account {account_id} update rejected: {form.errors.as_json()}")
        return validation_failure(form)

    if _account_exists(form.cleaned_data['platform'], form.cleaned_data['email'], exclude_pk=account.pk):
        return _conflict()

    try:
        with transaction.atomic():
            account = form.save()
    except IntegrityError:
        return _conflict()
    except DatabaseError:
        logger.error(f"Account {account_id} update failed", exc_info=True)
        return _upstream('Failed to update account')

    logger.info(f"Account updated: {account} (id={account.pk}) by {user.username}")
    return ActionResult.ok(account)


def delete_account(ctx, account_id):
    """Delete an account with its gigs, reports and withdrawals (admin)."""
    user = ctx.require_admin()

    account = get_or_none(Account.objects.all(), pk=account_id)
    if account is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Account not found')

    label = str(account)
    try:
        account.delete()
    except DatabaseError:
        logger.error(f"Account {account_id} delete failed", exc_info=True)
        return _upstream('Failed to delete account')

    logger.info(f"Account deleted: {label} (id={account_id}) by {user.username}")
    return ActionResult.ok()


def report_accounts_created(ctx, platform, items):
    """
    Register a batch of newly opened accounts (operator)

    Each item ({email, type}) succeeds or fails on its own; one duplicate does
    not stop the rest of the batch. Items that are not objects or have no
    email are skipped.

    Returns:
        ActionResult with data {created: int, failed: [{email, error}]}.
        success is False only when nothing could be created.
    """
    user = ctx.require_user()

    if platform not in PLATFORMS:
        return ActionResult.fail(ErrorKind.VALIDATION, 'Invalid platform')

    items = [
        item for item in (items or [])
        if isinstance(item, dict) and str(item.get('email') or '').strip()
    ]
    if not items:
        return ActionResult.fail(ErrorKind.VALIDATION, 'Add at least one account with an email')

    created = 0
    failed = []
    seen = set()

    for item in items:
        raw_email = str(item.get('email')).strip()
        form = AccountCreatedItemForm(item)
        if not form.is_valid():
            failed.append({'email': raw_email, 'error': INVALID_EMAIL_MESSAGE})
            continue

        email = form.cleaned_data['email']
        if email in seen or _account_exists(platform, email):
            failed.append({'email': raw_email, 'error': DUPLICATE_ITEM_MESSAGE})
            continue

        try:
            with transaction.atomic():
                Account.objects.create(
                    platform=platform,
                    email=email,
                    username=email.split('@')[0],
                    created_by=user,
                )
        except IntegrityError:
            failed.append({'email': raw_email, 'error': DUPLICATE_ITEM_MESSAGE})
            continue
        except DatabaseError:
            logger.error(f"Batch account create failed: {platform}/{email}", exc_info=True)
            failed.append({'email': raw_email, 'error': 'Failed to create account'})
            continue

        seen.add(email)
        created += 1

    logger.info(
        f"Accounts created report by {user.username}: "
        f"{created} created, {len(failed)} failed on {platform}"
    )

    if created == 0:
        all_duplicates = all(f['error'] == DUPLICATE_ITEM_MESSAGE for f in failed)
        return ActionResult.fail(
            ErrorKind.CONFLICT if all_duplicates else ErrorKind.VALIDATION,
            'No accounts were created',
            created=0,
            failed=failed,
        )

    return ActionResult.ok(created=created, failed=failed)


# =============================================================================
# Gig
# =============================================================================

def create_gig(ctx, account_id, data):
    """Add a gig to an account (admin)."""
    user = ctx.require_admin()

    account = get_or_none(Account.objects.all(), pk=account_id)
    if account is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Account not found')

    form = GigForm(data, instance=Gig(account=account))
    if not form.is_valid():
        logger.warning(f"Gig create rejected on account {account_id}: {form.errors.as_json()}")
        return validation_failure(form)

    try:
        gig = form.save()
    except DatabaseError:
        logger.error(f"Gig create failed on account {account_id}", exc_info=True)
        return _upstream('Failed to create gig')

    logger.info(f"Gig created: {gig.name} (id={gig.pk}) on {account} by {user.username}")
    return ActionResult.ok(gig)


def update_gig(ctx, gig_id, data):
    """
    Edit a gig (admin)

    Unticking "rated" clears every rating field, so stale ratings never show
    up in the rating information report.
    """
    user = ctx.require_admin()

    gig = get_or_none(Gig.objects.select_related('account'), pk=gig_id)
    if gig is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Gig not found')

    form = GigForm(data, instance=gig)
    if not form.is_valid():
        return validation_failure(form)

    try:
        gig = form.save()
    except DatabaseError:
        logger.error(f"Gig {gig_id} update failed", exc_info=True)
        return _upstream('Failed to update gig')

    logger.info(f"Gig updated: {gig.name} (id={gig.pk}) by {user.username}")
    return ActionResult.ok(gig)


def delete_gig(ctx, gig_id):
    """Delete a gig (admin). record is the parent account."""
    user = ctx.require_admin()

    gig = get_or_none(Gig.objects.select_related('account'), pk=gig_id)
    if gig is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Gig not found')

    account = gig.account
    try:
        gig.delete()
    except DatabaseError:
        logger.error(f"Gig {gig_id} delete failed", exc_info=True)
        return _upstream('Failed to delete gig')

    logger.info(f"Gig deleted: id={gig_id} from {account} by {user.username}")
    return ActionResult.ok(account)


# =============================================================================
# Payout detail
# =============================================================================

def save_payout_detail(ctx, data):
    """
    Create or replace the payout configuration of an account (admin)

    Args:
        data: {account, payment_gateway, mobile_number}

    Returns:
        ActionResult with the PayoutDetail as record and data {created: bool}
    """
    user = ctx.require_admin()

    account_id = data.get('account')
    if not account_id:
        return ActionResult.fail(ErrorKind.VALIDATION, 'account and payment_gateway are required')

    account = get_or_none(Account.objects.all(), pk=account_id)
    if account is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND, 'Account not found')

    existing = PayoutDetail.objects.filter(account=account).first()
    form = PayoutDetailForm(data, instance=existing or PayoutDetail(account=account))
    if not form.is_valid():
        return validation_failure(form)

    try:
        with transaction.atomic():
            payout, created = PayoutDetail.objects.update_or_create(
                account=account,
                defaults={
                    'payment_gateway': form.cleaned_data['payment_gateway'],
                    'mobile_number': form.cleaned_data['mobile_number'],
                },
            )
    except DatabaseError:
        logger.error(f"Payout detail save failed for account {account_id}", exc_info=True)
        return _upstream('Failed to save payout details')

    logger.info(f"Payout detail {'created' if created else 'updated'} for {account} by {user.username}")
    return ActionResult.ok(payout, created=created)
