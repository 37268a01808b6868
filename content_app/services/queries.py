"""
Read-only views over the catalog: filtered listings, landing-page feeds
and the statistics report. Nothing here writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from django.conf import settings
from django.db.models import Count, QuerySet

from ..exceptions import CategoryNotFound, MissingFilter
from ..models import Category, Complaint, Series, Video

TOP_LIMIT = 5
LATEST_LIMIT = 10


@dataclass
class StatsReport:
    totals: dict
    top_viewed: List[Video]
    top_favorited: List[Video]
    videos_per_category: List[dict]
    videos_per_series: List[dict]
    recent_videos: List[Video]
    recent_complaints: List[Complaint]
    recent_category_updates: List[Category]


def videos_by_category_or_series(category_id=None, series_id=None) -> QuerySet:
    """Videos matching every given filter, newest first."""
    if category_id is None and series_id is None:
        raise MissingFilter()

    qs = Video.objects.all()
    if category_id is not None:
        qs = qs.filter(category_id=category_id)
    if series_id is not None:
        qs = qs.filter(series_id=series_id)
    return qs.order_by("-uploaded_at", "-id")


def latest_videos(limit: int = LATEST_LIMIT, category_name: Optional[str] = None) -> dict:
    """Newest videos of the featured category and newest episodes."""
    category_name = category_name or settings.FEATURED_CATEGORY_NAME
    category = Category.objects.filter(name=category_name).first()
    if category is None:
        raise CategoryNotFound(f'Category "{category_name}" not found.')

    return {
        "films_videos": list(
            Video.objects.filter(category_id=category.pk).order_by("-uploaded_at", "-id")[:limit]
        ),
        "series_videos": list(
            Video.objects.filter(series_id__isnull=False).order_by("-uploaded_at", "-id")[:limit]
        ),
    }


def all_data() -> dict:
    return {
        "categories": list(Category.objects.all()),
        "series": list(Series.objects.all()),
    }


def statistics(recent_limit: Optional[int] = None) -> StatsReport:
    """
    Snapshot of the catalog. Each part is its own query; parts may skew
    slightly under concurrent writes.
    """
    if recent_limit is None:
        recent_limit = settings.STATS_RECENT_LIMIT

    videos_per_category = list(
        Video.objects.filter(category_id__isnull=False)
        .order_by()
        .values("category_id", "category__name")
        .annotate(video_count=Count("id"))
        .order_by("-video_count", "category_id")
    )
    videos_per_series = list(
        Video.objects.filter(series_id__isnull=False)
        .order_by()
        .values("series_id", "series__title")
        .annotate(video_count=Count("id"))
        .order_by("-video_count", "series_id")
    )

    return StatsReport(
        totals={
            "videos": Video.objects.count(),
            "categories": Category.objects.count(),
            "series": Series.objects.count(),
            "complaints": Complaint.objects.count(),
        },
        top_viewed=list(Video.objects.order_by("-views", "-uploaded_at", "-id")[:TOP_LIMIT]),
        top_favorited=list(
            Video.objects.order_by("-favorites_count", "-uploaded_at", "-id")[:TOP_LIMIT]
        ),
        videos_per_category=[
            {
                "category_id": row["category_id"],
                "category_name": row["category__name"],
                "video_count": row["video_count"],
            }
            for row in videos_per_category
        ],
        videos_per_series=[
            {
                "series_id": row["series_id"],
                "series_title": row["series__title"],
                "video_count": row["video_count"],
            }
            for row in videos_per_series
        ],
        recent_videos=list(Video.objects.order_by("-uploaded_at", "-id")[:recent_limit]),
        recent_complaints=list(Complaint.objects.order_by("-created_at", "-id")[:recent_limit]),
        recent_category_updates=list(
            Category.objects.order_by("-updated_at", "-id")[:recent_limit]
        ),
    )
