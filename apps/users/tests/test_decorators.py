# =============================================================================
# users/tests/test_decorators.py - page and JSON guards
# =============================================================================

import json

import pytest
from django.core.exceptions import PermissionDenied
from django.http import HttpResponse
from django.test import RequestFactory

from apps.users.context import RequestContext
from apps.users.decorators import api_context_required, context_required


@context_required
def member_page(request):
    return HttpResponse('ok')


@context_required(admin=True)
def admin_page(request):
    return HttpResponse('ok')


@api_context_required(admin=True)
def admin_api(request):
    return HttpResponse('ok')


def _request(ctx):
    request = RequestFactory().get('/somewhere/?tab=1')
    request.ctx = ctx
    return request


class TestContextRequired:

    def test_anonymous_redirects_to_login(self, settings):
        settings.LOGIN_URL = '/admin/login/'
        response = member_page(_request(RequestContext.anonymous()))

        assert response.status_code == 302
        assert response.url.startswith('/admin/login/?next=')

    @pytest.mark.django_db
    def test_operator_allowed(self, operator_ctx):
        assert member_page(_request(operator_ctx)).status_code == 200

    @pytest.mark.django_db
    def test_operator_forbidden_on_admin_page(self, operator_ctx):
        with pytest.raises(PermissionDenied):
            admin_page(_request(operator_ctx))

    @pytest.mark.django_db
    def test_admin_allowed(self, admin_ctx):
        assert admin_page(_request(admin_ctx)).status_code == 200


class TestApiContextRequired:

    def test_anonymous_is_401(self):
        response = admin_api(_request(RequestContext.anonymous()))
        assert response.status_code == 401
        assert json.loads(response.content) == {'error': 'Unauthorized'}

    @pytest.mark.django_db
    def test_operator_is_403(self, operator_ctx):
        response = admin_api(_request(operator_ctx))
        assert response.status_code == 403
        assert json.loads(response.content) == {'error': 'Forbidden'}


@pytest.mark.django_db
class TestMiddleware:

    def test_identity_header_resolves_member(self, client):
        response = client.get('/', HTTP_X_IDENTITY_USER_ID='idp_9', HTTP_X_IDENTITY_EMAIL='nine@example.com')
        assert response.status_code == 200
        assert response.wsgi_request.ctx.user.email == 'nine@example.com'

    def test_no_identity_redirects(self, client):
        response = client.get('/')
        assert response.status_code == 302
