# =============================================================================
# users/tests/test_context.py - RequestContext authorisation
# =============================================================================

from datetime import datetime, timezone as dt_timezone

import pytest

from apps.core.errors import Forbidden, Unauthorized
from apps.users.context import RequestContext


class TestAnonymousContext:

    def test_require_user_raises(self):
        with pytest.raises(Unauthorized):
            RequestContext.anonymous().require_user()

    def test_require_admin_raises_unauthorized_first(self):
        with pytest.raises(Unauthorized):
            RequestContext.anonymous().require_admin()

    def test_role_is_none(self):
        ctx = RequestContext.anonymous()
        assert ctx.role is None
        assert ctx.is_admin is False


@pytest.mark.django_db
class TestMemberContext:

    def test_operator_passes_require_user(self, operator_ctx, operator_member):
        assert operator_ctx.require_user() == operator_member

    def test_operator_fails_require_admin(self, operator_ctx):
        with pytest.raises(Forbidden) as exc:
            operator_ctx.require_admin()
        assert exc.value.status_code == 403

    def test_admin_passes_require_admin(self, admin_ctx, admin_member):
        assert admin_ctx.require_admin() == admin_member

    def test_inactive_user_is_unauthorized(self, operator_member):
        operator_member.is_active = False
        ctx = RequestContext.for_user(operator_member)
        with pytest.raises(Unauthorized):
            ctx.require_user()

    def test_today_uses_given_now(self, operator_member):
        now = datetime(2024, 3, 5, 12, 0, tzinfo=dt_timezone.utc)
        ctx = RequestContext.for_user(operator_member, now=now)
        assert ctx.today.isoformat() == '2024-03-05'
