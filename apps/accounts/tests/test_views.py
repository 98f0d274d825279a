# =============================================================================
# accounts/tests/test_views.py - account pages
# =============================================================================

import pytest
from django.contrib.messages import get_messages
from django.urls import reverse

from apps.accounts.models import Account, Gig


@pytest.mark.django_db
class TestAccountListView:

    def test_anonymous_redirects_to_login(self, client):
        response = client.get(reverse('accounts:account_list'))
        assert response.status_code == 302
        assert '/admin/login/' in response.url

    def test_lists_accounts(self, operator_client, make_account):
        make_account('alpha')
        make_account('beta', platform='upwork')

        response = operator_client.get(reverse('accounts:account_list'), {'platform': 'upwork'})

        assert response.status_code == 200
        assert [a.username for a in response.context['page_obj']] == ['beta']
        assert response.context['total_count'] == 2

    def test_identity_headers_authenticate(self, client, operator_member):
        operator_member.profile.external_id = 'idp-42'
        operator_member.profile.save()

        response = client.get(reverse('accounts:account_list'), HTTP_X_IDENTITY_USER_ID='idp-42')
        assert response.status_code == 200


@pytest.mark.django_db
class TestAccountDetailView:

    def test_detail(self, operator_client, account, make_report):
        make_report(account)
        response = operator_client.get(reverse('accounts:account_detail', args=[account.pk]))
        assert response.status_code == 200
        assert response.context['account'] == account
        assert response.context['report_count'] == 1

    def test_report_without_reporter(self, operator_client, account, make_report):
        make_report(account, reported_by=None)
        response = operator_client.get(reverse('accounts:account_detail', args=[account.pk]))
        assert response.status_code == 200
        assert b'Unknown' in response.content

    def test_missing_is_404(self, operator_client):
        response = operator_client.get(reverse('accounts:account_detail', args=[999]))
        assert response.status_code == 404


@pytest.mark.django_db
class TestAccountCreateView:

    def test_operator_gets_403(self, operator_client):
        response = operator_client.get(reverse('accounts:account_create'))
        assert response.status_code == 403

    def test_admin_creates(self, admin_member_client):
        response = admin_member_client.post(reverse('accounts:account_create'), {
            'platform': 'fiverr', 'email': 'new@mail.test', 'username': 'new',
        })
        account = Account.objects.get(email='new@mail.test')
        assert response.status_code == 302
        assert response.url == reverse('accounts:account_detail', args=[account.pk])

    def test_duplicate_rerenders_with_error(self, admin_member_client, make_account):
        make_account('taken', email='taken@mail.test')
        response = admin_member_client.post(reverse('accounts:account_create'), {
            'platform': 'fiverr', 'email': 'taken@mail.test', 'username': 'again',
        })
        assert response.status_code == 200
        assert 'Account with this email already exists on this platform' in response.context['form'].non_field_errors()


@pytest.mark.django_db
class TestAccountEditDeleteViews:

    def test_edit(self, admin_member_client, account):
        response = admin_member_client.post(reverse('accounts:account_edit', args=[account.pk]), {
            'platform': 'fiverr', 'email': account.email, 'username': 'renamed', 'status': 'risk',
        })
        assert response.status_code == 302
        account.refresh_from_db()
        assert account.status == 'risk'

    def test_delete_requires_post(self, admin_member_client, account):
        response = admin_member_client.get(reverse('accounts:account_delete', args=[account.pk]))
        assert response.status_code == 405

    def test_delete(self, admin_member_client, account):
        response = admin_member_client.post(reverse('accounts:account_delete', args=[account.pk]))
        assert response.status_code == 302
        assert not Account.objects.filter(pk=account.pk).exists()


@pytest.mark.django_db
class TestGigViews:

    def test_create_gig(self, admin_member_client, account):
        response = admin_member_client.post(reverse('accounts:gig_create', args=[account.pk]), {
            'name': 'Essay', 'type': 'APA/MLA',
        })
        assert response.status_code == 302
        assert account.gigs.count() == 1

    def test_delete_gig_redirects_to_account(self, admin_member_client, account):
        gig = Gig.objects.create(account=account, name='Essay', type='APA/MLA')
        response = admin_member_client.post(reverse('accounts:gig_delete', args=[gig.pk]))
        assert response.url == reverse('accounts:account_detail', args=[account.pk])

    def test_rating_information(self, operator_client, account):
        Gig.objects.create(account=account, name='Rated', type='APA/MLA', rated=True, rating_type='client')
        response = operator_client.get(reverse('accounts:rating_information'))
        assert response.status_code == 200
        assert [g.name for g in response.context['gigs']] == ['Rated']


@pytest.mark.django_db
class TestAccountsCreatedView:

    def test_batch_with_one_duplicate(self, operator_client, make_account):
        make_account('taken', email='taken@mail.test')

        response = operator_client.post(reverse('accounts:accounts_created'), {
            'platform': 'fiverr',
            'email': ['taken@mail.test', 'fresh@mail.test', ''],
            'type': ['seller', 'buyer', 'seller'],
        })

        assert response.status_code == 200
        assert response.context['outcome']['created'] == 1
        assert response.context['outcome']['failed'][0]['error'] == 'Already exists on this platform'
        assert Account.objects.filter(email='fresh@mail.test').exists()

    def test_clean_batch_redirects(self, operator_client):
        response = operator_client.post(reverse('accounts:accounts_created'), {
            'platform': 'upwork', 'email': ['one@mail.test'], 'type': ['seller'],
        })
        assert response.status_code == 302
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert '1 account(s) created.' in messages


@pytest.mark.django_db
class TestAccountExport:

    def test_csv(self, operator_client, account):
        response = operator_client.get(reverse('accounts:account_export'))
        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/csv')
        body = response.content.decode()
        assert body.splitlines()[0].startswith('Platform,Username,Email')
        assert 'writer_one' in body

    def test_xlsx(self, operator_client, account):
        response = operator_client.get(reverse('accounts:account_export'), {'format': 'xlsx'})
        assert response['Content-Disposition'].endswith('.xlsx"')
