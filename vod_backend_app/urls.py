"""
vod_backend_app.urls

Main URL configuration for the VOD backend.

This file defines all top-level URL routes, including:
- Health endpoint
- Admin panel
- Django RQ dashboard
- API routes (users_app, content_app)
- Media file serving during development
- Debug toolbar (only active when DEBUG=True)
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from . import views


# ----------------------------------------------------------------------
# 1. Core URL patterns
# ----------------------------------------------------------------------
urlpatterns = [
    # basic health endpoint
    path("health/", views.health_check, name="health-check"),
    path("admin/", admin.site.urls),                          # Django admin
    path("django-rq/", include("django_rq.urls")
         ),             # Redis Queue dashboard
    path("users/", include("users_app.api.urls")
         ),             # Registration, sessions, profile
    # Categories, series, videos, complaints, statistics
    path("content/", include("content_app.api.urls")),
]

# ----------------------------------------------------------------------
# 2. Development mode: serve media & enable debug toolbar
# ----------------------------------------------------------------------
if settings.DEBUG:
    import debug_toolbar

    urlpatterns += static(settings.MEDIA_URL,
                          document_root=settings.MEDIA_ROOT)
    urlpatterns += [path("__debug__/", include(debug_toolbar.urls))]
