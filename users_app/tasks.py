"""
users_app.tasks — Asynchronous email tasks for the VOD backend

Purpose:
--------
Delivers transactional emails (registration verification codes) via
django-rq. The task can be enqueued using:
    from django_rq import get_queue
    queue = get_queue("default")
    queue.enqueue(send_email_task, subject, recipients, message)
"""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def send_email_task(subject, recipient_list, message):
    """
    Background task for sending plain-text emails.

    Args:
        subject (str): The subject line of the email.
        recipient_list (list[str]): A list of recipient email addresses.
        message (str): Plain-text body.

    Behavior:
        - Sends the email using Django's configured EMAIL_BACKEND.
        - Logs and re-raises delivery errors so RQ marks the job as failed.
    """
    try:
        send_mail(
            subject,
            message,
            settings.DEFAULT_FROM_EMAIL,
            recipient_list,
        )
    except Exception:
        logger.exception("Error sending email to %s", recipient_list)
        raise
