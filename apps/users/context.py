"""
Request-scoped context

Built once per request by RequestContextMiddleware and handed explicitly to
every action, so no action looks up "the current user" on its own.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.contrib.auth.models import User
from django.utils import timezone

from apps.core.errors import Forbidden, Unauthorized
from .models import Profile


@dataclass(frozen=True)
class RequestContext:
    user: Optional[User] = None
    now: datetime = field(default_factory=timezone.now)

    @classmethod
    def anonymous(cls):
        return cls(user=None)

    @classmethod
    def for_user(cls, user, now=None):
        return cls(user=user, now=now or timezone.now())

    @property
    def profile(self):
        if self.user is None:
            return None
        return getattr(self.user, 'profile', None)

    @property
    def role(self):
        profile = self.profile
        return profile.role if profile else None

    @property
    def is_authenticated(self):
        return self.user is not None and self.user.is_active

    @property
    def is_admin(self):
        return self.is_authenticated and self.role == Profile.Role.ADMIN

    @property
    def today(self):
        """Calendar date of the request in server-local time"""
        return timezone.localdate(self.now)

    def require_user(self):
        """Any signed-in member (operator level)."""
        if not self.is_authenticated:
            raise Unauthorized()
        return self.user

    def require_admin(self):
        user = self.require_user()
        if not self.is_admin:
            raise Forbidden()
        return user
