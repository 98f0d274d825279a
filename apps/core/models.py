"""
Shared abstract models

- TimeStampedModel: created/updated timestamps maintained automatically
- get_or_none: lookup helper used by the actions
"""

from django.db import models


class TimeStampedModel(models.Model):
    """Tracks creation and last modification time"""

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


def get_or_none(queryset, **lookup):
    """
    Single object matching lookup, or None

    Malformed ids (e.g. 'abc' for an integer pk) count as not found.
    """
    try:
        return queryset.filter(**lookup).first()
    except (ValueError, TypeError):
        return None
