# =============================================================================
# users/tests/test_models.py - Profile and signal tests
# =============================================================================

import pytest
from django.contrib.auth.models import User

from apps.users.models import Profile, display_name


@pytest.mark.django_db
class TestProfileSignals:
    """Profile creation on User save"""

    def test_profile_created_with_user(self):
        user = User.objects.create_user(username='alpha', email='alpha@example.com')
        assert Profile.objects.filter(user=user).exists()

    def test_first_user_becomes_admin(self):
        first = User.objects.create_user(username='first')
        second = User.objects.create_user(username='second')

        assert first.profile.role == Profile.Role.ADMIN
        assert second.profile.role == Profile.Role.OPERATOR

    def test_role_is_not_reset_on_user_save(self):
        User.objects.create_user(username='first')
        user = User.objects.create_user(username='second')
        user.profile.role = Profile.Role.ADMIN
        user.profile.save()

        user.first_name = 'Changed'
        user.save()
        user.refresh_from_db()

        assert user.profile.role == Profile.Role.ADMIN


@pytest.mark.django_db
class TestDisplayName:

    def test_full_name_preferred(self):
        user = User.objects.create_user(username='u1', email='u1@example.com', first_name='Jane', last_name='Doe')
        assert display_name(user) == 'Jane Doe'

    def test_falls_back_to_email(self):
        user = User.objects.create_user(username='u2', email='u2@example.com')
        assert display_name(user) == 'u2@example.com'

    def test_falls_back_to_username(self):
        user = User.objects.create_user(username='u3')
        assert display_name(user) == 'u3'

    def test_missing_user(self):
        assert display_name(None) == 'Unknown'

    def test_profile_is_admin(self, admin_member, operator_member):
        assert admin_member.profile.is_admin is True
        assert operator_member.profile.is_admin is False
