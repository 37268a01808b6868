import pytest
from django.core.cache import cache


# -----------------------------------------------------------------------------------
# Replace Redis-based cache with in-memory cache (pending registrations,
# throttling and cache_page all go through it)
# -----------------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _force_local_cache(settings):
    settings.CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "vod-test-cache",
        }
    }
    cache.clear()
    yield
    cache.clear()


# -----------------------------------------------------------------------------------
# Keep uploads in memory instead of MEDIA_ROOT / S3
# -----------------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _in_memory_media(settings):
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
        "staticfiles": {
            "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
        },
    }
    settings.BACKEND_ORIGIN = "http://testserver"


# -----------------------------------------------------------------------------------
# Every test starts without live sessions
# -----------------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _fresh_sessions():
    from users_app.sessions import get_session_service

    store = get_session_service().store
    store.clear()
    yield
    store.clear()


# -----------------------------------------------------------------------------------
# Mock django_rq queue (disable Redis queue connections)
# -----------------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def rq_queue(monkeypatch):
    """
    Replaces `get_queue` in the registration module with a dummy queue that
    records enqueue calls.
    """
    class DummyQueue:
        def __init__(self):
            self.calls = []

        def enqueue(self, fn, *args, **kwargs):
            self.calls.append((getattr(fn, "__name__", str(fn)), args, kwargs))

    q = DummyQueue()
    monkeypatch.setattr("users_app.registration.get_queue", lambda *a, **k: q)
    return q
