# =============================================================================
# users/tests/test_identity.py - identity provider mapping
# =============================================================================

import pytest
from django.contrib.auth.models import User
from django.test import RequestFactory

from apps.users.identity import sync_identity
from apps.users.middleware import build_request_context
from apps.users.models import Profile


@pytest.mark.django_db
class TestSyncIdentity:

    def test_creates_member_on_first_sight(self):
        user = sync_identity('idp_123', email='new@example.com', name='New Person')

        assert user is not None
        assert user.email == 'new@example.com'
        assert user.first_name == 'New'
        assert user.last_name == 'Person'
        assert user.profile.external_id == 'idp_123'

    def test_first_member_is_admin(self):
        user = sync_identity('idp_1', email='one@example.com')
        other = sync_identity('idp_2', email='two@example.com')

        assert user.profile.role == Profile.Role.ADMIN
        assert other.profile.role == Profile.Role.OPERATOR

    def test_known_identity_is_reused(self):
        first = sync_identity('idp_123', email='new@example.com')
        again = sync_identity('idp_123')

        assert again.pk == first.pk
        assert User.objects.count() == 1

    def test_relinks_by_email(self, operator_member):
        user = sync_identity('idp_new', email=operator_member.email.upper())

        assert user.pk == operator_member.pk
        operator_member.profile.refresh_from_db()
        assert operator_member.profile.external_id == 'idp_new'

    def test_unknown_identity_without_email(self):
        assert sync_identity('idp_x') is None
        assert User.objects.count() == 0

    def test_empty_identity(self):
        assert sync_identity('', email='a@example.com') is None


@pytest.mark.django_db
class TestBuildRequestContext:

    def test_identity_headers(self):
        request = RequestFactory().get(
            '/',
            HTTP_X_IDENTITY_USER_ID='idp_9',
            HTTP_X_IDENTITY_EMAIL='nine@example.com',
            HTTP_X_IDENTITY_NAME='Nine',
        )
        ctx = build_request_context(request)

        assert ctx.is_authenticated
        assert ctx.user.email == 'nine@example.com'

    def test_anonymous_request(self):
        request = RequestFactory().get('/')
        ctx = build_request_context(request)

        assert ctx.user is None
        assert not ctx.is_authenticated

    def test_session_user(self, operator_member):
        request = RequestFactory().get('/')
        request.user = operator_member
        ctx = build_request_context(request)

        assert ctx.user == operator_member
