# =============================================================================
# alerts/tests/test_views.py - on-demand alert and cron endpoint
# =============================================================================

import pytest
from django.test import override_settings
from django.urls import reverse

CRON_URL = '/api/cron/check-missing-reports/'


@pytest.mark.django_db
class TestCronEndpoint:

    def test_url_name(self):
        assert reverse('cron_check_missing_reports') == CRON_URL

    def test_missing_token(self, client, account, mailoutbox):
        response = client.get(CRON_URL)
        assert response.status_code == 401
        assert response.json() == {'error': 'Unauthorized'}
        assert mailoutbox == []

    def test_wrong_token(self, client):
        response = client.get(CRON_URL, HTTP_AUTHORIZATION='Bearer nope')
        assert response.status_code == 401

    def test_wrong_scheme(self, client):
        response = client.get(CRON_URL, HTTP_AUTHORIZATION='Basic test-cron-secret')
        assert response.status_code == 401

    @override_settings(CRON_SECRET='')
    def test_unset_secret_never_matches(self, client):
        response = client.get(CRON_URL, HTTP_AUTHORIZATION='Bearer ')
        assert response.status_code == 401

    def test_nothing_missing(self, client):
        response = client.get(CRON_URL, HTTP_AUTHORIZATION='Bearer test-cron-secret')
        assert response.status_code == 200
        assert response.json() == {'message': 'No missing reports', 'reportCount': 0}

    def test_sends_alert(self, client, admin_member, account, mailoutbox):
        response = client.get(CRON_URL, HTTP_AUTHORIZATION='Bearer test-cron-secret')

        assert response.status_code == 200
        assert response.json() == {'message': 'Alert sent', 'reportCount': 1}
        assert len(mailoutbox) == 1

    def test_no_recipients_is_bad_gateway(self, client, account):
        response = client.get(CRON_URL, HTTP_AUTHORIZATION='Bearer test-cron-secret')

        assert response.status_code == 502
        assert response.json() == {'error': 'No alert recipients configured', 'reportCount': 1}

    def test_post_not_allowed(self, client):
        response = client.post(CRON_URL, HTTP_AUTHORIZATION='Bearer test-cron-secret')
        assert response.status_code == 405


@pytest.mark.django_db
class TestOnDemandAlert:

    def test_requires_login(self, client):
        response = client.post(reverse('alerts:missing_reports_alert'))
        assert response.status_code == 302
        assert '/login/' in response.url

    def test_sends_and_redirects(self, admin_member_client, account, mailoutbox):
        response = admin_member_client.post(reverse('alerts:missing_reports_alert'), {'next': '/reports/'})

        assert response.status_code == 302
        assert response.url == '/reports/'
        assert len(mailoutbox) == 1

    def test_offsite_next_ignored(self, operator_client):
        response = operator_client.post(
            reverse('alerts:missing_reports_alert'), {'next': '//evil.test/'}
        )
        assert response.url == reverse('dashboard:home')

    def test_get_not_allowed(self, operator_client):
        response = operator_client.get(reverse('alerts:missing_reports_alert'))
        assert response.status_code == 405
