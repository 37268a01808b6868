import pytest

from content_app.exceptions import CategoryNotFound, DuplicateName, ParentNotFound
from content_app.models import Category, Video
from content_app.services import categories


def _assert_children_consistent():
    for category in Category.objects.all():
        expected = set(
            Category.objects.filter(parent_id=category.pk).values_list("id", flat=True)
        )
        assert set(category.children.values_list("id", flat=True)) == expected


def _flatten(node):
    yield node
    for child in node.children:
        yield from _flatten(child)


@pytest.mark.django_db
def test_create_subcategory_shows_up_under_parent():
    movies = categories.create_category(name="Movies")
    action = categories.create_category(name="Action", parent_id=movies.pk)

    parent, children = categories.list_children(movies.pk)
    assert parent == movies
    assert [c.name for c in children] == ["Action"]
    assert list(movies.children.all()) == [action]
    assert [c.name for c in categories.list_roots()] == ["Movies"]


@pytest.mark.django_db
def test_duplicate_name_is_rejected_across_parents(movies):
    with pytest.raises(DuplicateName):
        categories.create_category(name="Movies")
    with pytest.raises(DuplicateName):
        categories.create_category(name="Movies", parent_id=movies.pk)


@pytest.mark.django_db
def test_unknown_parent_is_rejected():
    with pytest.raises(ParentNotFound):
        categories.create_category(name="Orphan", parent_id=999)


@pytest.mark.django_db
def test_list_children_of_unknown_category():
    with pytest.raises(CategoryNotFound):
        categories.list_children(999)


@pytest.mark.django_db
def test_children_stay_consistent_after_creates_and_deletes():
    a = categories.create_category(name="A")
    b = categories.create_category(name="B", parent_id=a.pk)
    c = categories.create_category(name="C", parent_id=a.pk)
    categories.create_category(name="D", parent_id=b.pk)
    _assert_children_consistent()

    categories.delete_category(c.pk)
    _assert_children_consistent()
    assert set(a.children.values_list("name", flat=True)) == {"B"}

    categories.delete_category(b.pk)
    _assert_children_consistent()
    assert a.children.count() == 0


@pytest.mark.django_db
def test_delete_does_not_cascade(movies, action, sample_video):
    categories.delete_category(movies.pk)

    action.refresh_from_db()
    sample_video.refresh_from_db()
    assert action.parent_id == movies.pk
    assert sample_video.category_id == action.pk
    assert not Category.objects.filter(pk=movies.pk).exists()
    assert action not in categories.list_roots()


@pytest.mark.django_db
def test_delete_unknown_category():
    with pytest.raises(CategoryNotFound):
        categories.delete_category(999)


@pytest.mark.django_db
def test_leaf_categories():
    a = categories.create_category(name="A")
    b = categories.create_category(name="B", parent_id=a.pk)
    categories.create_category(name="C", parent_id=b.pk)
    categories.create_category(name="D")

    assert {c.name for c in categories.leaf_categories()} == {"C", "D"}


@pytest.mark.django_db
def test_nested_tree_counts_direct_and_descendant_videos():
    a = categories.create_category(name="A")
    b = categories.create_category(name="B", parent_id=a.pk)
    c = categories.create_category(name="C", parent_id=b.pk)
    d = categories.create_category(name="D")
    Video.objects.create(title="b1", url="https://cdn.example.com/b1", category=b)
    Video.objects.create(title="c1", url="https://cdn.example.com/c1", category=c)
    Video.objects.create(title="c2", url="https://cdn.example.com/c2", category=c)

    trees = {t.name: t for t in categories.build_nested_tree()}
    assert set(trees) == {"A", "D"}

    tree_a = trees["A"]
    assert tree_a.direct_video_count == 0
    assert tree_a.total_video_count == 3
    node_b = tree_a.children[0]
    assert (node_b.name, node_b.direct_video_count, node_b.total_video_count) == ("B", 1, 3)
    node_c = node_b.children[0]
    assert (node_c.direct_video_count, node_c.total_video_count) == (2, 2)
    assert trees["D"].total_video_count == 0

    (subtree,) = categories.build_nested_tree(root_id=b.pk)
    assert subtree.name == "B"
    assert subtree.total_video_count == 3
    assert d.pk not in {n.id for n in _flatten(subtree)}


@pytest.mark.django_db
def test_nested_tree_survives_a_cycle():
    a = categories.create_category(name="A")
    b = categories.create_category(name="B", parent_id=a.pk)
    Category.objects.filter(pk=a.pk).update(parent_id=b.pk)

    (tree,) = categories.build_nested_tree(root_id=a.pk)
    ids = [n.id for n in _flatten(tree)]
    assert ids == [a.pk, b.pk]


@pytest.mark.django_db
def test_nested_tree_is_capped_in_depth():
    parent = categories.create_category(name="L0")
    for depth in range(1, 5):
        parent = categories.create_category(name=f"L{depth}", parent_id=parent.pk)

    (tree,) = categories.build_nested_tree(max_depth=2)
    nodes = list(_flatten(tree))
    assert [n.name for n in nodes] == ["L0", "L1", "L2"]
    assert nodes[-1].truncated is True


@pytest.mark.django_db
def test_nested_tree_unknown_root():
    with pytest.raises(CategoryNotFound):
        categories.build_nested_tree(root_id=999)


# ---------- API ----------

@pytest.mark.django_db
def test_admin_creates_category_and_subcategory(admin_api):
    resp = admin_api.post("/content/categories/", {"name": "Movies"}, format="json")
    assert resp.status_code == 201
    movies_id = resp.data["category"]["id"]

    resp = admin_api.post("/content/categories/",
                          {"name": "Action", "parent_id": movies_id}, format="json")
    assert resp.status_code == 201
    assert resp.data["category"]["parent"] == movies_id

    resp = admin_api.get(f"/content/categories/{movies_id}/subcategories/")
    assert resp.status_code == 200
    assert resp.data["parent"] == "Movies"
    assert [c["name"] for c in resp.data["subcategories"]] == ["Action"]


@pytest.mark.django_db
def test_viewer_cannot_create_category(auth_api, api):
    assert auth_api.post("/content/categories/", {"name": "X"}, format="json").status_code == 403
    assert api.post("/content/categories/", {"name": "X"}, format="json").status_code in (401, 403)


@pytest.mark.django_db
def test_duplicate_category_returns_409(admin_api, movies):
    resp = admin_api.post("/content/categories/", {"name": "Movies"}, format="json")
    assert resp.status_code == 409


@pytest.mark.django_db
def test_category_image_is_uploaded(admin_api):
    from django.core.files.uploadedfile import SimpleUploadedFile

    image = SimpleUploadedFile("cover.PNG", b"\x89PNG fake", content_type="image/png")
    resp = admin_api.post("/content/categories/",
                          {"name": "Cartoons", "image": image}, format="multipart")
    assert resp.status_code == 201
    url = resp.data["category"]["image_url"]
    assert url.startswith("http://testserver/media/images/")
    assert url.endswith(".png")


@pytest.mark.django_db
def test_roots_tree_and_leaves_endpoints(api, movies, action, sample_video):
    roots = api.get("/content/categories/")
    assert roots.status_code == 200
    assert [c["name"] for c in roots.data["categories"]] == ["Movies"]
    assert roots.data["categories"][0]["children"] == [action.pk]

    tree = api.get("/content/categories/tree/")
    assert tree.status_code == 200
    (root,) = tree.data["tree"]
    assert root["total_video_count"] == 1
    assert root["children"][0]["direct_video_count"] == 1

    subtree = api.get(f"/content/categories/tree/?root={action.pk}")
    assert subtree.data["name"] == "Action"

    leaves = api.get("/content/categories/leaves/")
    assert [c["name"] for c in leaves.data["categories"]] == ["Action"]


@pytest.mark.django_db
def test_admin_deletes_category(admin_api, auth_api, movies, action):
    assert auth_api.delete(f"/content/categories/{action.pk}/").status_code == 403
    assert admin_api.delete(f"/content/categories/{action.pk}/").status_code == 204
    assert admin_api.delete(f"/content/categories/{action.pk}/").status_code == 404
    assert movies.children.count() == 0


@pytest.mark.django_db
def test_subcategories_of_unknown_parent_returns_404(api):
    assert api.get("/content/categories/999/subcategories/").status_code == 404


@pytest.mark.django_db
def test_uploaded_image_wins_over_image_url(admin_api):
    from django.core.files.uploadedfile import SimpleUploadedFile

    image = SimpleUploadedFile("cover.png", b"\x89PNG fake", content_type="image/png")
    resp = admin_api.post("/content/categories/", {
        "name": "Movies",
        "image": image,
        "image_url": "http://cdn.example.com/a.png",
    }, format="multipart")

    assert resp.status_code == 201
    assert resp.data["category"]["image_url"].startswith("http://testserver/media/images/")


@pytest.mark.django_db
def test_series_accepts_image_and_image_url_together(admin_api):
    from django.core.files.uploadedfile import SimpleUploadedFile

    image = SimpleUploadedFile("poster.png", b"\x89PNG fake", content_type="image/png")
    resp = admin_api.post("/content/series/", {
        "title": "Space Saga",
        "image": image,
        "image_url": "http://cdn.example.com/b.png",
    }, format="multipart")

    assert resp.status_code == 201
    assert resp.data["series"]["image_url"].startswith("http://testserver/media/images/")
