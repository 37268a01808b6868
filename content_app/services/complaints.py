"""Append-only complaint ledger. There is no update or delete path."""

import logging

from ..exceptions import MissingFields
from ..models import Complaint

logger = logging.getLogger(__name__)


def file_complaint(*, user_id, title, description) -> Complaint:
    title = (title or "").strip()
    description = (description or "").strip()
    if not title or not description:
        raise MissingFields("Title and description are required.")

    complaint = Complaint.objects.create(
        user_id=user_id,
        title=title,
        description=description,
    )
    logger.info("Complaint %s filed by user %s", complaint.pk, user_id)
    return complaint
