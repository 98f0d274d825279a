"""
Keeps User and Profile in step

    1. User created -> Profile created
       The very first user becomes admin, everyone after that is an operator.
    2. User saved -> Profile saved
"""

from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Create the Profile of a new User

    Example:
        first = User.objects.create_user(username='first')   # -> admin
        second = User.objects.create_user(username='second') # -> operator
    """
    if not created:
        return

    is_first_user = not User.objects.exclude(pk=instance.pk).exists()
    Profile.objects.get_or_create(
        user=instance,
        defaults={'role': Profile.Role.ADMIN if is_first_user else Profile.Role.OPERATOR},
    )


@receiver(post_save, sender=User)
def save_user_profile(sender, instance, created, **kwargs):
    if not created and hasattr(instance, 'profile'):
        instance.profile.save()
