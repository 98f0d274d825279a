"""
Maps identity provider users onto local User/Profile records

Sign-in happens at the identity provider. On every request we get its user id
(plus email and name on first sight) and resolve the local member:

    1. Profile with that external_id exists -> that user
    2. otherwise a User with the same email -> relink it to the new external_id
    3. otherwise create a User (the signal assigns the role)
"""
import logging

from django.contrib.auth.models import User
from django.db import IntegrityError, transaction

from .models import Profile

logger = logging.getLogger(__name__)


def _split_name(name):
    first, _, last = (name or '').strip().partition(' ')
    return first[:150], last.strip()[:150]


def sync_identity(external_id, email=None, name=None):
    """
    Resolve (or create) the local User for an identity provider user.

    Args:
        external_id: identity provider user id
        email: primary email, needed only when the user is new to us
        name: display name (optional)

    Returns:
        User, or None when the identity cannot be mapped (no email for a new user)
    """
    if not external_id:
        return None

    profile = Profile.objects.select_related('user').filter(external_id=external_id).first()
    if profile:
        return profile.user

    email = (email or '').strip()
    if not email:
        logger.warning(f"Identity {external_id} has no email, cannot create a member")
        return None

    with transaction.atomic():
        user = User.objects.filter(email__iexact=email).order_by('pk').first()
        if user:
            profile, _ = Profile.objects.get_or_create(user=user)
            if profile.external_id != external_id:
                logger.info(f"Relinking member {user.pk} to identity {external_id}")
                profile.external_id = external_id
                profile.save(update_fields=['external_id', 'updated_at'])
            return user

        first_name, last_name = _split_name(name)
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=external_id[:150],
                    email=email,
                    first_name=first_name,
                    last_name=last_name,
                )
        except IntegrityError:
            # another request created it first
            logger.warning(f"Concurrent member creation for identity {external_id}")
            return User.objects.filter(username=external_id[:150]).first()

        user.profile.external_id = external_id
        user.profile.save(update_fields=['external_id', 'updated_at'])
        logger.info(f"New member {user.pk} ({email}) as {user.profile.role}")
        return user
