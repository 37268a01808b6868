"""
content_app.storage — blob upload to the media store.

Local:   FILE (MEDIA_ROOT / MEDIA_URL)
Prod:    S3 (USE_S3_MEDIA=True → storages.backends.s3boto3.S3Boto3Storage)

The backend comes from STORAGES["default"]; callers only see
"store these bytes, get back a public URL".
"""

from __future__ import annotations

import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage

from .exceptions import UploadFailed

logger = logging.getLogger(__name__)

VIDEOS_SUBDIR = "videos"
IMAGES_SUBDIR = "images"


class BlobStore:
    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def _build_name(self, original_name: str | None, subdir: str) -> str:
        _, ext = os.path.splitext(original_name or "")
        return f"{subdir}/{uuid.uuid4().hex}{ext.lower()}"

    def _absolute(self, url: str) -> str:
        # Local storage yields "/media/..."; S3 already returns an absolute URL.
        if url.startswith("/"):
            return f"{settings.BACKEND_ORIGIN.rstrip('/')}{url}"
        return url

    def upload(self, file, subdir: str = IMAGES_SUBDIR) -> str:
        """
        Save `file` under `subdir` and return its public URL.

        Raises:
            UploadFailed: the storage backend rejected the file.
        """
        name = self._build_name(getattr(file, "name", None), subdir)
        try:
            saved_name = self.storage.save(name, file)
            url = self.storage.url(saved_name)
        except Exception as e:
            logger.exception("Upload of %s failed", name)
            raise UploadFailed() from e

        logger.info("Uploaded %s", saved_name)
        return self._absolute(url)
