"""
Video and series catalog.

Counter updates are single conditional UPDATEs with F() expressions, so
concurrent requests never lose an increment and never count a viewer or a
favorite twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F, QuerySet

from ..exceptions import (
    AlreadyFavorited,
    CategoryNotFound,
    DuplicateEpisode,
    DuplicateTitle,
    MissingAttachment,
    MissingFields,
    RootCategoryForbidden,
    SeriesNotFound,
    VideoNotFound,
)
from ..models import Category, Series, Video, VideoView

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 10


@dataclass(frozen=True)
class ViewResult:
    already_viewed: bool
    views: int


def get_video(video_id) -> Video:
    try:
        return Video.objects.get(pk=video_id)
    except Video.DoesNotExist:
        raise VideoNotFound()


def _check_category(category_id) -> None:
    category = Category.objects.filter(pk=category_id).only("id", "parent_id").first()
    if category is None:
        raise CategoryNotFound()
    if category.is_root and not settings.VIDEO_ALLOW_ROOT_CATEGORY:
        raise RootCategoryForbidden()


def validate_new_video(*, title: str, category_id=None, series_id=None) -> str:
    """
    Check attachment and uniqueness rules for a video about to be created.
    Returns the stripped title. Callers uploading files run this first so
    nothing is uploaded for a video that would be rejected.
    """
    title = (title or "").strip()
    if not title:
        raise MissingFields("Title and url are required.")

    if category_id is None and series_id is None:
        raise MissingAttachment()

    if category_id is not None:
        _check_category(category_id)

    if series_id is not None:
        if not Series.objects.filter(pk=series_id).exists():
            raise SeriesNotFound()
        if Video.objects.filter(title=title, series_id=series_id).exists():
            raise DuplicateEpisode()

    return title


def create_video(
    *,
    title: str,
    url: str,
    category_id: Optional[int] = None,
    series_id: Optional[int] = None,
    thumbnail_url: Optional[str] = None,
    filename: Optional[str] = None,
) -> Video:
    """
    Create a video attached to a category, a series, or both.

    Raises:
        MissingFields: empty title or url.
        MissingAttachment: neither category nor series given.
        CategoryNotFound / RootCategoryForbidden: bad category (root
            categories are accepted only with VIDEO_ALLOW_ROOT_CATEGORY).
        SeriesNotFound: unknown series.
        DuplicateEpisode: same title already exists in the series.
    """
    title = validate_new_video(title=title, category_id=category_id, series_id=series_id)
    if not url:
        raise MissingFields("Title and url are required.")

    try:
        with transaction.atomic():
            video = Video.objects.create(
                title=title,
                url=url,
                category_id=category_id,
                series_id=series_id,
                thumbnail_url=thumbnail_url,
                filename=filename,
            )
    except IntegrityError as e:
        raise DuplicateEpisode() from e

    logger.info(
        "Video %s created (category=%s, series=%s)", video.pk, category_id, series_id
    )
    return video


def create_series(
    *,
    title: str,
    description: Optional[str] = None,
    category_id: Optional[int] = None,
    image_url: Optional[str] = None,
) -> Series:
    title = (title or "").strip()
    if not title:
        raise MissingFields("Series title is required.")

    if Series.objects.filter(title=title).exists():
        raise DuplicateTitle()

    if category_id is not None and not Category.objects.filter(pk=category_id).exists():
        raise CategoryNotFound()

    try:
        with transaction.atomic():
            series = Series.objects.create(
                title=title,
                description=description,
                category_id=category_id,
                image_url=image_url,
            )
    except IntegrityError as e:
        raise DuplicateTitle() from e

    logger.info("Series %s created", series.pk)
    return series


def list_series() -> QuerySet:
    return Series.objects.all()


def record_view(video_id, user_id) -> ViewResult:
    """
    Count a user's first view of a video; later calls are no-ops.

    The unique (video, user) row and the increment commit together, so the
    counter equals the number of distinct viewers.
    """
    with transaction.atomic():
        if not Video.objects.filter(pk=video_id).exists():
            raise VideoNotFound()

        _, created = VideoView.objects.get_or_create(video_id=video_id, user_id=user_id)
        if created:
            Video.objects.filter(pk=video_id).update(views=F("views") + 1)

    views = Video.objects.values_list("views", flat=True).get(pk=video_id)
    return ViewResult(already_viewed=not created, views=views)


def add_to_favorites(video_id) -> Video:
    """
    Flag a video as favorite and bump its counter.

    Raises:
        VideoNotFound: unknown video.
        AlreadyFavorited: flag already set.
    """
    updated = Video.objects.filter(pk=video_id, favorite=False).update(
        favorite=True,
        favorites_count=F("favorites_count") + 1,
    )
    if not updated:
        if not Video.objects.filter(pk=video_id).exists():
            raise VideoNotFound()
        raise AlreadyFavorited()

    return Video.objects.get(pk=video_id)


def suggest(video_id, limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[Video]:
    """
    Most viewed siblings of a video: same series if it is an episode,
    otherwise same category. Never includes the video itself.
    """
    video = get_video(video_id)

    if video.series_id is not None:
        candidates = Video.objects.filter(series_id=video.series_id)
    elif video.category_id is not None:
        candidates = Video.objects.filter(category_id=video.category_id)
    else:
        return []

    return list(
        candidates.exclude(pk=video.pk).order_by("-views", "-uploaded_at", "-id")[:limit]
    )


def search_videos(query: str) -> QuerySet:
    return Video.objects.filter(title__icontains=query)
