"""
content_app.api.views — Content endpoints for the VOD backend.

Provides:
- Categories: roots, subcategories, nested tree, leaves, create/delete (admin).
- Series: list, create (admin).
- Videos: listing by category/series, detail, create with upload (admin),
  view recording, favorites, suggestions.
- Search, complaints, landing-page feeds and statistics (admin).

Business rules live in content_app.services; views only parse input and
serialize output. Service errors are DRF exceptions and propagate as-is.
"""

from django.utils.decorators import method_decorator
from django.views.decorators.cache import cache_page

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from users_app.api.permissions import IsAdminAccount, IsAdminOrReadOnly, IsSessionUser

from ..exceptions import MissingFields
from ..services import catalog, categories, complaints, queries
from ..storage import IMAGES_SUBDIR, VIDEOS_SUBDIR, BlobStore
from .serializers import (
    CategoryCreateSerializer,
    CategorySerializer,
    ComplaintSerializer,
    SeriesCreateSerializer,
    SeriesSerializer,
    StatsReportSerializer,
    TreeNodeSerializer,
    VideoCreateSerializer,
    VideoSerializer,
)


def _optional_int(value, name):
    """Parse an optional integer query parameter."""
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MissingFields(f"'{name}' must be an integer.")


def _image_url(data, blob_store):
    """Upload `image` if present, else fall back to `image_url`."""
    image = data.pop("image", None)
    image_url = data.pop("image_url", None)
    if image is not None:
        return blob_store.upload(image, IMAGES_SUBDIR)
    return image_url


# ==========================
# CATEGORIES
# ==========================
class CategoryListView(APIView):
    """
    GET  /content/categories/  → root categories
    POST /content/categories/  → create a category or subcategory (admin)
    """
    permission_classes = [IsAdminOrReadOnly]
    blob_store_class = BlobStore

    def get(self, request):
        qs = categories.list_roots().prefetch_related("children")
        return Response({"categories": CategorySerializer(qs, many=True).data})

    def post(self, request):
        ser = CategoryCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)

        image_url = _image_url(data, self.blob_store_class())
        category = categories.create_category(image_url=image_url, **data)
        return Response(
            {"message": "Category created", "category": CategorySerializer(category).data},
            status=status.HTTP_201_CREATED,
        )


class CategoryDetailView(APIView):
    """DELETE /content/categories/<pk>/ (admin). Does not cascade."""
    permission_classes = [IsAdminAccount]

    def delete(self, request, pk):
        categories.delete_category(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SubcategoryListView(APIView):
    """GET /content/categories/<pk>/subcategories/"""

    def get(self, request, pk):
        parent, children = categories.list_children(pk)
        return Response(
            {
                "parent": parent.name,
                "subcategories": CategorySerializer(
                    children.prefetch_related("children"), many=True
                ).data,
            }
        )


class CategoryTreeView(APIView):
    """
    GET /content/categories/tree/?root=<id>

    Without `root`: one tree per root category. With `root`: that subtree.
    """

    def get(self, request):
        root_id = _optional_int(request.query_params.get("root"), "root")
        trees = categories.build_nested_tree(root_id)
        data = TreeNodeSerializer(trees, many=True).data
        if root_id is not None:
            return Response(data[0])
        return Response({"tree": data})


class LeafCategoryListView(APIView):
    """GET /content/categories/leaves/"""

    def get(self, request):
        qs = categories.leaf_categories().prefetch_related("children")
        return Response({"categories": CategorySerializer(qs, many=True).data})


# ==========================
# SERIES
# ==========================
class SeriesListView(APIView):
    """
    GET  /content/series/  → all series, newest first
    POST /content/series/  → create a series (admin)
    """
    permission_classes = [IsAdminOrReadOnly]
    blob_store_class = BlobStore

    def get(self, request):
        return Response({"series": SeriesSerializer(catalog.list_series(), many=True).data})

    def post(self, request):
        ser = SeriesCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)

        image_url = _image_url(data, self.blob_store_class())
        series = catalog.create_series(image_url=image_url, **data)
        return Response(
            {"message": "Series created", "series": SeriesSerializer(series).data},
            status=status.HTTP_201_CREATED,
        )


# ==========================
# VIDEOS
# ==========================
class VideoListView(APIView):
    """
    GET  /content/videos/?category=<id>&series=<id>  → filtered, newest first
    POST /content/videos/                             → create (admin, multipart)
    """
    permission_classes = [IsAdminOrReadOnly]
    blob_store_class = BlobStore

    def get(self, request):
        qs = queries.videos_by_category_or_series(
            category_id=_optional_int(request.query_params.get("category"), "category"),
            series_id=_optional_int(request.query_params.get("series"), "series"),
        )
        qs = qs.prefetch_related("viewed_by")
        return Response({"videos": VideoSerializer(qs, many=True).data})

    def post(self, request):
        ser = VideoCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        blob_store = self.blob_store_class()

        catalog.validate_new_video(
            title=data["title"],
            category_id=data.get("category_id"),
            series_id=data.get("series_id"),
        )

        video_file = data.get("video")
        filename = None
        url = data.get("url")
        if video_file is not None:
            url = blob_store.upload(video_file, VIDEOS_SUBDIR)
            filename = video_file.name

        thumbnail_url = data.get("thumbnail_url")
        if data.get("thumbnail") is not None:
            thumbnail_url = blob_store.upload(data["thumbnail"], IMAGES_SUBDIR)

        video = catalog.create_video(
            title=data["title"],
            url=url,
            category_id=data.get("category_id"),
            series_id=data.get("series_id"),
            thumbnail_url=thumbnail_url,
            filename=filename,
        )
        return Response(
            {"message": "Video created", "video": VideoSerializer(video).data},
            status=status.HTTP_201_CREATED,
        )


class VideoDetailView(APIView):
    """GET /content/videos/<pk>/"""

    def get(self, request, pk):
        video = catalog.get_video(pk)
        return Response({"video": VideoSerializer(video).data})


class RecordViewView(APIView):
    """
    PUT /content/videos/<pk>/view/

    Counts the first view per user; repeated calls return already_viewed=true.
    """
    permission_classes = [IsSessionUser]

    def put(self, request, pk):
        result = catalog.record_view(pk, request.user.pk)
        return Response({"already_viewed": result.already_viewed, "views": result.views})


class AddFavoriteVideoView(APIView):
    """POST /content/videos/<pk>/favorite/"""
    permission_classes = [IsSessionUser]

    def post(self, request, pk):
        video = catalog.add_to_favorites(pk)
        return Response({"video": VideoSerializer(video).data})


class VideoSuggestionsView(APIView):
    """
    GET /content/videos/<pk>/suggestions/?limit=10

    An empty result is not an error: 200 with an explanatory message.
    """

    def get(self, request, pk):
        limit = _optional_int(request.query_params.get("limit"), "limit")
        videos = catalog.suggest(pk, limit=limit or catalog.DEFAULT_SUGGESTION_LIMIT)
        payload = {"suggested_videos": VideoSerializer(videos, many=True).data}
        if not videos:
            payload["message"] = "No suggestions available."
        return Response(payload)


# ==========================
# SEARCH
# ==========================
class SearchView(APIView):
    """GET /content/search/?type=category|video&query=<text>"""

    def get(self, request):
        search_type = request.query_params.get("type")
        query = (request.query_params.get("query") or "").strip()
        if not search_type or not query:
            raise MissingFields("Both 'type' and 'query' are required.")

        if search_type == "category":
            qs = categories.search_categories(query).prefetch_related("children")
            return Response(CategorySerializer(qs, many=True).data)
        if search_type == "video":
            qs = catalog.search_videos(query).prefetch_related("viewed_by")
            return Response(VideoSerializer(qs, many=True).data)

        raise MissingFields("Invalid search type, use 'category' or 'video'.")


# ==========================
# COMPLAINTS
# ==========================
class ComplaintCreateView(APIView):
    """POST /content/complaints/: filed on behalf of the session user."""
    permission_classes = [IsSessionUser]

    def post(self, request):
        complaint = complaints.file_complaint(
            user_id=request.user.pk,
            title=request.data.get("title"),
            description=request.data.get("description"),
        )
        return Response(
            {"message": "Complaint submitted", "complaint": ComplaintSerializer(complaint).data},
            status=status.HTTP_201_CREATED,
        )


# ==========================
# FEEDS & STATISTICS
# ==========================
class LatestVideosView(APIView):
    """GET /content/latest-videos/: newest films and newest episodes."""

    def get(self, request):
        feed = queries.latest_videos()
        return Response(
            {
                "films_videos": VideoSerializer(feed["films_videos"], many=True).data,
                "series_videos": VideoSerializer(feed["series_videos"], many=True).data,
            }
        )


class AllDataView(APIView):
    """
    GET /content/all-data/: every category and series.

    Caching:
        - Response is cached for a short time to reduce DB load.
    """

    @method_decorator(cache_page(5))
    def get(self, request):
        data = queries.all_data()
        return Response(
            {
                "categories": CategorySerializer(data["categories"], many=True).data,
                "series": SeriesSerializer(data["series"], many=True).data,
            }
        )


class StatisticsView(APIView):
    """GET /content/statistics/ (admin)"""
    permission_classes = [IsAdminAccount]

    def get(self, request):
        return Response(StatsReportSerializer(queries.statistics()).data)
