"""
Serializers for the content API.

Output serializers expose references as plain ids (`parent`, `category`,
`series`) because a referenced category may have been deleted.
Input serializers only shape the request; the rules live in
content_app.services.
"""

from rest_framework import serializers

from content_app.models import Category, Complaint, Series, Video


class CategorySerializer(serializers.ModelSerializer):
    parent = serializers.IntegerField(source="parent_id", read_only=True)
    children = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Category
        fields = [
            "id", "name", "description", "image_url",
            "parent", "children", "created_at", "updated_at",
        ]


class CategoryCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    image = serializers.FileField(required=False)
    image_url = serializers.URLField(required=False, allow_null=True, max_length=500)


class SeriesSerializer(serializers.ModelSerializer):
    category = serializers.IntegerField(source="category_id", read_only=True)

    class Meta:
        model = Series
        fields = ["id", "title", "description", "category", "image_url", "created_at"]


class SeriesCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    image = serializers.FileField(required=False)
    image_url = serializers.URLField(required=False, allow_null=True, max_length=500)


class VideoSerializer(serializers.ModelSerializer):
    """
    Serializer for Video objects.
    `viewed_by` lists the ids of users who have watched the video.
    """
    category = serializers.IntegerField(source="category_id", read_only=True)
    series = serializers.IntegerField(source="series_id", read_only=True)
    viewed_by = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Video
        fields = [
            "id", "title", "filename", "category", "series", "url",
            "thumbnail_url", "uploaded_at", "views", "viewed_by",
            "favorite", "favorites_count",
        ]


class VideoCreateSerializer(serializers.Serializer):
    """
    Either upload the file (`video`) or pass an already hosted `url`.
    Same for the thumbnail (`thumbnail` / `thumbnail_url`).
    """
    title = serializers.CharField(max_length=200)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    series_id = serializers.IntegerField(required=False, allow_null=True)
    video = serializers.FileField(required=False)
    url = serializers.URLField(required=False, max_length=500)
    thumbnail = serializers.FileField(required=False)
    thumbnail_url = serializers.URLField(required=False, allow_null=True, max_length=500)

    def validate(self, attrs):
        if not attrs.get("video") and not attrs.get("url"):
            raise serializers.ValidationError(
                {"video": "Upload a video file or provide its url."})
        return attrs


class ComplaintSerializer(serializers.ModelSerializer):
    user = serializers.IntegerField(source="user_id", read_only=True)

    class Meta:
        model = Complaint
        fields = ["id", "title", "description", "user", "created_at"]


class TreeNodeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    image_url = serializers.CharField(allow_null=True)
    parent_id = serializers.IntegerField(allow_null=True)
    direct_video_count = serializers.IntegerField()
    total_video_count = serializers.IntegerField()
    truncated = serializers.BooleanField()
    children = serializers.SerializerMethodField()

    def get_children(self, obj):
        return TreeNodeSerializer(obj.children, many=True).data


class StatsReportSerializer(serializers.Serializer):
    totals = serializers.DictField(child=serializers.IntegerField())
    top_viewed = VideoSerializer(many=True)
    top_favorited = VideoSerializer(many=True)
    videos_per_category = serializers.ListField(child=serializers.DictField())
    videos_per_series = serializers.ListField(child=serializers.DictField())
    recent_videos = VideoSerializer(many=True)
    recent_complaints = ComplaintSerializer(many=True)
    recent_category_updates = CategorySerializer(many=True)
