import pytest

from content_app.exceptions import CategoryNotFound, MissingFields
from content_app.models import Category, Complaint, Video
from content_app.services import complaints, queries

URL = "https://cdn.example.com/v.mp4"


# ---------- complaints ----------

@pytest.mark.django_db
def test_file_complaint_requires_title_and_description(user):
    with pytest.raises(MissingFields):
        complaints.file_complaint(user_id=user.pk, title="", description="Broken")
    with pytest.raises(MissingFields):
        complaints.file_complaint(user_id=user.pk, title="Broken", description="  ")
    assert Complaint.objects.count() == 0


@pytest.mark.django_db
def test_complaint_endpoint(api, auth_api, user):
    payload = {"title": "Playback", "description": "Stutters at 10:00"}
    assert api.post("/content/complaints/", payload, format="json").status_code in (401, 403)

    resp = auth_api.post("/content/complaints/", payload, format="json")
    assert resp.status_code == 201
    assert resp.data["complaint"]["user"] == user.pk
    assert list(user.complaints.values_list("title", flat=True)) == ["Playback"]

    missing = auth_api.post("/content/complaints/", {"title": "Only"}, format="json")
    assert missing.status_code == 400


# ---------- feeds ----------

@pytest.mark.django_db
def test_latest_videos(api, series):
    films = Category.objects.create(name="films")
    film = Video.objects.create(title="Film", url=URL, category=films)
    episode = Video.objects.create(title="Ep", url=URL, series=series)

    resp = api.get("/content/latest-videos/")
    assert resp.status_code == 200
    assert [v["id"] for v in resp.data["films_videos"]] == [film.pk]
    assert [v["id"] for v in resp.data["series_videos"]] == [episode.pk]


@pytest.mark.django_db
def test_latest_videos_without_featured_category(db):
    with pytest.raises(CategoryNotFound):
        queries.latest_videos()


@pytest.mark.django_db
def test_all_data(api, movies, action, series):
    resp = api.get("/content/all-data/")
    assert resp.status_code == 200
    assert {c["name"] for c in resp.data["categories"]} == {"Movies", "Action"}
    assert [s["title"] for s in resp.data["series"]] == ["Space Saga"]


# ---------- statistics ----------

@pytest.fixture
def populated(action, series, user):
    drama = Category.objects.create(name="Drama", parent=action)
    Video.objects.create(title="A", url=URL, category=action, views=5, favorites_count=1)
    Video.objects.create(title="B", url=URL, category=action, views=9)
    Video.objects.create(title="C", url=URL, category=drama, views=1, favorites_count=4)
    Video.objects.create(title="E1", url=URL, series=series, views=2)
    Complaint.objects.create(user=user, title="t", description="d")
    return {"action": action, "drama": drama, "series": series}


@pytest.mark.django_db
def test_statistics_report(populated):
    report = queries.statistics()

    assert report.totals == {"videos": 4, "categories": 3, "series": 1, "complaints": 1}
    assert [v.title for v in report.top_viewed] == ["B", "A", "E1", "C"]
    assert report.top_favorited[0].title == "C"
    assert report.videos_per_category == [
        {"category_id": populated["action"].pk, "category_name": "Action", "video_count": 2},
        {"category_id": populated["drama"].pk, "category_name": "Drama", "video_count": 1},
    ]
    assert report.videos_per_series == [
        {"series_id": populated["series"].pk, "series_title": "Space Saga", "video_count": 1},
    ]
    assert len(report.recent_complaints) == 1


@pytest.mark.django_db
def test_statistics_recent_limit(populated):
    report = queries.statistics(recent_limit=2)
    assert len(report.recent_videos) == 2
    assert len(report.recent_category_updates) == 2


@pytest.mark.django_db
def test_statistics_recent_limit_zero(populated):
    report = queries.statistics(recent_limit=0)
    assert report.recent_videos == []
    assert report.recent_complaints == []
    assert report.recent_category_updates == []
    assert report.totals["videos"] == 4


@pytest.mark.django_db
def test_statistics_endpoint_is_admin_only(api, auth_api, admin_api, populated):
    assert api.get("/content/statistics/").status_code in (401, 403)
    assert auth_api.get("/content/statistics/").status_code == 403

    resp = admin_api.get("/content/statistics/")
    assert resp.status_code == 200
    assert resp.data["totals"]["videos"] == 4
    assert resp.data["top_viewed"][0]["title"] == "B"
