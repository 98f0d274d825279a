# =============================================================================
# conftest.py - shared pytest fixtures
# =============================================================================

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.test import Client

from apps.accounts.models import Account
from apps.reports.models import ShiftReport
from apps.users.context import RequestContext
from apps.users.models import Profile


def _member(username, role, **extra):
    user = User.objects.create_user(
        username=username,
        email=f'{username}@example.com',
        password='testpass123',
        **extra
    )
    # the first user of a test database is promoted automatically
    user.profile.role = role
    user.profile.save()
    return user


# =============================================================================
# Members
# =============================================================================

@pytest.fixture
def admin_member(db):
    """Member with the admin role"""
    return _member('boss', Profile.Role.ADMIN, first_name='Ada', last_name='Admin')


@pytest.fixture
def operator_member(db):
    """Member with the operator role"""
    return _member('operator', Profile.Role.OPERATOR, first_name='Otto', last_name='Operator')


@pytest.fixture
def make_member(db):
    """Factory for extra members"""
    def factory(username, role=Profile.Role.OPERATOR, **extra):
        return _member(username, role, **extra)
    return factory


# =============================================================================
# Request contexts
# =============================================================================

@pytest.fixture
def admin_ctx(admin_member):
    return RequestContext.for_user(admin_member)


@pytest.fixture
def operator_ctx(operator_member):
    return RequestContext.for_user(operator_member)


@pytest.fixture
def anonymous_ctx():
    return RequestContext.anonymous()


# =============================================================================
# Clients
# =============================================================================

@pytest.fixture
def admin_member_client(admin_member):
    """Client logged in as the admin member"""
    client = Client()
    client.force_login(admin_member)
    return client


@pytest.fixture
def operator_client(operator_member):
    """Client logged in as the operator member"""
    client = Client()
    client.force_login(operator_member)
    return client


# =============================================================================
# Accounts / reports
# =============================================================================

@pytest.fixture
def make_account(db):
    """Factory for accounts; emails default to <username>@mail.test"""
    def factory(username, platform='fiverr', **extra):
        extra.setdefault('email', f'{username}@mail.test')
        return Account.objects.create(platform=platform, username=username, **extra)
    return factory


@pytest.fixture
def account(make_account):
    """Active Fiverr account"""
    return make_account('writer_one')


@pytest.fixture
def make_report(db):
    """Factory for shift reports; defaults to an AM report on 2024-03-05"""
    def factory(account, report_date=date(2024, 3, 5), shift='AM', **extra):
        extra.setdefault('available_balance', Decimal('0.00'))
        return ShiftReport.objects.create(account=account, report_date=report_date, shift=shift, **extra)
    return factory
