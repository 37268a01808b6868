"""
users_app.signals — UserProfile signal handlers for the VOD backend

Purpose:
--------
A password change ends the user's live session, so a token issued under the
old password cannot outlive it.
"""

from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import UserProfile
from .sessions import get_session_service


@receiver(pre_save, sender=UserProfile)
def revoke_session_on_password_change(sender, instance, **kwargs):
    """
    Triggered:
        Before an existing UserProfile is saved.

    Behavior:
        - If the stored password hash differs from the one being saved,
          drop the user's entry from the session registry.
    """
    if not instance.pk:
        return

    old_password = (
        UserProfile.objects.filter(pk=instance.pk)
        .values_list("password", flat=True)
        .first()
    )
    if old_password is not None and old_password != instance.password:
        get_session_service().revoke_user(instance.pk)
