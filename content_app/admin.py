"""
content_app.admin — Django admin registration for the VOD content module

Purpose:
--------
Lets staff browse the content graph and export/import it as CSV/XLSX via
django-import-export. Complaints are read-only (append-only ledger).
"""

from django.contrib import admin
from import_export import resources
from import_export.admin import ImportExportModelAdmin

from .models import Category, Complaint, Series, Video


class CategoryResource(resources.ModelResource):
    class Meta:
        model = Category
        fields = ("id", "name", "description", "image_url", "parent")


class VideoResource(resources.ModelResource):
    class Meta:
        model = Video
        fields = (
            "id", "title", "category", "series", "url", "thumbnail_url",
            "views", "favorite", "favorites_count", "uploaded_at",
        )


@admin.register(Category)
class CategoryAdmin(ImportExportModelAdmin):
    resource_classes = [CategoryResource]
    list_display = ("name", "parent_id", "updated_at", "id")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("parent",)


@admin.register(Series)
class SeriesAdmin(admin.ModelAdmin):
    list_display = ("title", "category_id", "created_at", "id")
    search_fields = ("title",)
    raw_id_fields = ("category",)


@admin.register(Video)
class VideoAdmin(ImportExportModelAdmin):
    resource_classes = [VideoResource]
    list_display = ("title", "category_id", "series_id", "views",
                    "favorites_count", "uploaded_at", "id")
    search_fields = ("title",)
    raw_id_fields = ("category", "series")
    readonly_fields = ("views", "favorites_count", "uploaded_at")


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "created_at", "id")
    readonly_fields = ("title", "description", "user", "created_at")

    def has_change_permission(self, request, obj=None):
        return False
