"""
users_app.registration — two-step sign-up with an emailed one-time code.

1. start_registration() stores the pending sign-up in the Django cache under
   the email (a newer request overwrites an older one; entries expire after
   REGISTRATION_CODE_TTL seconds) and sends a six-digit code.
2. complete_registration() checks the code and creates the UserProfile.

Pending records are never written to the user table.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django_rq import get_queue

from .exceptions import (
    DuplicateEmail,
    DuplicatePhone,
    InvalidVerificationCode,
    NoPendingRegistration,
    NotificationFailed,
)
from .models import UserProfile
from .tasks import send_email_task

logger = logging.getLogger(__name__)

PENDING_KEY = "registration:pending:{email}"


def _pending_key(email: str) -> str:
    return PENDING_KEY.format(email=email)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def generate_code() -> str:
    return str(secrets.randbelow(900000) + 100000)


def send_verification_code(email: str, code: str) -> None:
    """Send inline in DEBUG, otherwise hand off to the RQ worker."""
    subject = "Email Verification Code"
    message = f"Your verification code is: {code}"

    if settings.DEBUG:
        send_email_task(subject, [email], message)
    else:
        queue = get_queue("default")
        queue.enqueue(send_email_task, subject, [email], message)


def get_pending(email: str) -> Optional[dict]:
    return cache.get(_pending_key(normalize_email(email)))


def start_registration(
    *,
    name: str,
    email: str,
    password: str,
    phone_number: str,
    push_token: Optional[str] = None,
) -> dict:
    """
    Store a pending registration and send its verification code.

    Raises:
        DuplicateEmail / DuplicatePhone: identity already registered.
        NotificationFailed: the code could not be sent. The pending record
            is kept, so a later resend or verify still works.
    """
    email = normalize_email(email)

    if UserProfile.objects.filter(email__iexact=email).exists():
        raise DuplicateEmail()
    if UserProfile.objects.filter(phone_number=phone_number).exists():
        raise DuplicatePhone()

    pending = {
        "name": name,
        "email": email,
        "password_hash": make_password(password),
        "phone_number": phone_number,
        "push_token": push_token,
        "code": generate_code(),
    }
    cache.set(_pending_key(email), pending, timeout=settings.REGISTRATION_CODE_TTL)

    try:
        send_verification_code(email, pending["code"])
    except Exception as e:
        logger.exception("Verification code delivery failed for %s", email)
        raise NotificationFailed() from e

    logger.info("Pending registration stored for %s", email)
    return pending


def complete_registration(*, email: str, code: str) -> UserProfile:
    """
    Create the user if `code` matches the pending registration.

    Raises:
        NoPendingRegistration: nothing pending (never requested or expired).
        InvalidVerificationCode: code mismatch.
        DuplicateEmail / DuplicatePhone: the identity was registered in
            the meantime.
    """
    email = normalize_email(email)
    pending = cache.get(_pending_key(email))
    if not pending:
        raise NoPendingRegistration()

    if not secrets.compare_digest(str(code or ""), pending["code"]):
        raise InvalidVerificationCode()

    try:
        with transaction.atomic():
            user = UserProfile.objects.create(
                username=email,
                email=email,
                name=pending["name"],
                phone_number=pending["phone_number"],
                push_token=pending["push_token"],
                password=pending["password_hash"],
            )
    except IntegrityError as e:
        if UserProfile.objects.filter(phone_number=pending["phone_number"]).exists():
            raise DuplicatePhone() from e
        raise DuplicateEmail() from e

    cache.delete(_pending_key(email))
    logger.info("User %s registered", user.pk)
    return user
