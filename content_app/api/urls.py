"""
content_app.urls — API routes for the VOD content module

Includes:
- Category tree (roots, subcategories, nested tree, leaves)
- Series and videos (listing, detail, upload, views, favorites, suggestions)
- Search, complaints, landing-page feeds and statistics
"""

from django.urls import path
from .views import (
    CategoryListView,
    CategoryDetailView,
    SubcategoryListView,
    CategoryTreeView,
    LeafCategoryListView,
    SeriesListView,
    VideoListView,
    VideoDetailView,
    RecordViewView,
    AddFavoriteVideoView,
    VideoSuggestionsView,
    SearchView,
    ComplaintCreateView,
    LatestVideosView,
    AllDataView,
    StatisticsView,
)

# ----------------------------------------------------------------------
# Content API Endpoints
# ----------------------------------------------------------------------
urlpatterns = [
    # --- Category tree ---
    path("categories/", CategoryListView.as_view(), name="category-list"),
    path("categories/tree/", CategoryTreeView.as_view(), name="category-tree"),
    path("categories/leaves/", LeafCategoryListView.as_view(), name="category-leaves"),
    path("categories/<int:pk>/", CategoryDetailView.as_view(), name="category-detail"),
    path("categories/<int:pk>/subcategories/", SubcategoryListView.as_view(),
         name="category-subcategories"),

    # --- Series and videos ---
    path("series/", SeriesListView.as_view(), name="series-list"),
    path("videos/", VideoListView.as_view(), name="video-list"),
    path("videos/<int:pk>/", VideoDetailView.as_view(), name="video-detail"),
    path("videos/<int:pk>/view/", RecordViewView.as_view(), name="video-view"),
    path("videos/<int:pk>/favorite/", AddFavoriteVideoView.as_view(), name="video-favorite"),
    path("videos/<int:pk>/suggestions/", VideoSuggestionsView.as_view(),
         name="video-suggestions"),

    # --- Search, complaints, feeds ---
    path("search/", SearchView.as_view(), name="content-search"),
    path("complaints/", ComplaintCreateView.as_view(), name="complaint-create"),
    path("latest-videos/", LatestVideosView.as_view(), name="latest-videos"),
    path("all-data/", AllDataView.as_view(), name="all-data"),
    path("statistics/", StatisticsView.as_view(), name="statistics"),
]
