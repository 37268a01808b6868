"""
content_app.exceptions — typed failures of the content graph.

Raised by content_app.services and rendered by DRF's exception handler.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class ContentError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid content request."
    default_code = "content_error"


# ---------- not found ----------

class NotFound(ContentError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class CategoryNotFound(NotFound):
    default_detail = "Category not found."
    default_code = "category_not_found"


class ParentNotFound(NotFound):
    default_detail = "Parent category not found."
    default_code = "parent_not_found"


class SeriesNotFound(NotFound):
    default_detail = "Series not found."
    default_code = "series_not_found"


class VideoNotFound(NotFound):
    default_detail = "Video not found."
    default_code = "video_not_found"


# ---------- uniqueness ----------

class DuplicateName(ContentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A category with this name already exists."
    default_code = "duplicate_name"


class DuplicateTitle(ContentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A series with this title already exists."
    default_code = "duplicate_title"


class DuplicateEpisode(ContentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "An episode with this title already exists in the series."
    default_code = "duplicate_episode"


class AlreadyFavorited(ContentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Video is already in favorites."
    default_code = "already_favorited"


# ---------- required fields / relationships ----------

class MissingAttachment(ContentError):
    default_detail = "A video must be attached to a category or a series."
    default_code = "missing_attachment"


class RootCategoryForbidden(ContentError):
    default_detail = "Videos can only be added to subcategories, not root categories."
    default_code = "root_category_forbidden"


class MissingFilter(ContentError):
    default_detail = "A category id or a series id is required."
    default_code = "missing_filter"


class MissingFields(ContentError):
    default_detail = "All fields are required."
    default_code = "missing_fields"


# ---------- collaborators ----------

class UploadFailed(ContentError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "File upload to the media store failed."
    default_code = "upload_failed"
