"""
content_app.models — content graph for the VOD backend.

- Category: forest of categories; `children` is the reverse of `parent`.
- Series: groups episodes (videos referencing the series).
- Video: metadata only; the bytes live behind `url` in the media store.
- VideoView: one row per (video, user) pair, backs `Video.viewed_by`.
- Complaint: append-only user feedback.

Category/series references are plain columns without database constraints
(`db_constraint=False`, `DO_NOTHING`): deleting a category leaves dangling
ids in descendant categories and attached videos.
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    parent = models.ForeignKey(
        "self",
        related_name="children",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        blank=True,
        null=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return f"({self.id}) {self.name}"

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class Series(models.Model):
    title = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True, null=True)
    category = models.ForeignKey(
        Category,
        related_name="series",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        blank=True,
        null=True,
    )
    image_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "series"

    def __str__(self) -> str:
        return f"({self.id}) {self.title}"


class Video(models.Model):
    title = models.CharField(max_length=200)
    filename = models.CharField(max_length=255, blank=True, null=True)
    category = models.ForeignKey(
        Category,
        related_name="videos",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        blank=True,
        null=True,
    )
    series = models.ForeignKey(
        Series,
        related_name="episodes",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        blank=True,
        null=True,
    )
    url = models.URLField(max_length=500)
    thumbnail_url = models.URLField(max_length=500, blank=True, null=True)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    views = models.PositiveIntegerField(default=0)
    viewed_by = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="VideoView",
        related_name="viewed_videos",
        blank=True,
    )

    # Global flag + counter; favorites are not tracked per user.
    favorite = models.BooleanField(default=False)
    favorites_count = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-uploaded_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["title", "series"],
                name="unique_episode_title_per_series",
            ),
        ]

    def __str__(self) -> str:
        ts = self.uploaded_at.strftime(
            "%Y-%m-%d %H:%M:%S") if self.uploaded_at else "—"
        return f"({self.id}) {self.title} ({ts})"

    def clean(self) -> None:
        if self.category_id is None and self.series_id is None:
            raise ValidationError(
                "A video must be attached to a category or a series.")

    @property
    def is_episode(self) -> bool:
        return self.series_id is not None


class VideoView(models.Model):
    video = models.ForeignKey(Video, on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    viewed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["video", "user"],
                name="unique_view_per_user",
            ),
        ]


class Complaint(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="complaints",
        on_delete=models.CASCADE,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"({self.id}) {self.title}"
