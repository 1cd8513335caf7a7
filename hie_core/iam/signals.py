# hie_core/iam/signals.py
from __future__ import annotations

import structlog
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import Signal, receiver

from hie_core.iam.models import Profile

logger = structlog.get_logger(__name__)

# Sent after a session has been resolved; kwargs: session (ResolvedSession).
# Navigation consumes resolved state from here instead of being a side effect
# of profile loading.
session_resolved = Signal()


@receiver(post_save, sender=settings.AUTH_USER_MODEL, dispatch_uid="iam_create_profile_row")
def create_profile_row(sender, instance, created, **kwargs):
    """
    Profile-row trigger: every new identity gets a profile with role=NULL.
    Role assignment happens later and separately.
    """
    if not created or kwargs.get("raw"):
        return
    _, was_created = Profile.objects.get_or_create(
        user=instance,
        defaults={
            "first_name": getattr(instance, "first_name", "") or "",
            "last_name": getattr(instance, "last_name", "") or "",
        },
    )
    if was_created:
        logger.debug("profile_row_created", user_id=instance.pk)
