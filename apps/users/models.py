"""
Dashboard members

Django's built-in User holds email and name. Profile adds the identity
provider's user id and the member's role.
"""
from django.contrib.auth.models import User
from django.db import models

from apps.core.models import TimeStampedModel


class Profile(TimeStampedModel):
    """Role and external identity of a dashboard member (extends User)"""

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        OPERATOR = 'operator', 'Operator'

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    external_id = models.CharField(
        max_length=191,
        unique=True,
        null=True,
        blank=True,
        verbose_name="Identity provider user id",
    )
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.OPERATOR, db_index=True)

    class Meta:
        db_table = 'profiles'

    def __str__(self):
        return f"{display_name(self.user)} ({self.get_role_display()})"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN


def display_name(user):
    """Full name, falling back to email, then username."""
    if user is None:
        return 'Unknown'
    return user.get_full_name() or user.email or user.username
