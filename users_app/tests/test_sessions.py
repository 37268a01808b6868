import threading
from datetime import timedelta

import pytest
from rest_framework_simplejwt.exceptions import InvalidToken

from users_app.api.auth import issue_admin_token
from users_app.exceptions import AlreadyLoggedIn, TokenNotActive
from users_app.sessions import (
    InMemorySessionStore,
    SessionService,
    get_session_service,
)


@pytest.fixture
def service():
    return SessionService(InMemorySessionStore(), lifetime=timedelta(hours=1))


@pytest.mark.django_db
def test_issue_then_validate_returns_claims(service, user_active):
    token = service.issue_session(user_active)
    claims = service.validate(token)
    assert claims.user_id == user_active.pk
    assert claims.email == "active@example.com"


@pytest.mark.django_db
def test_second_login_is_rejected_and_first_token_stays_valid(service, user_active):
    first = service.issue_session(user_active)
    with pytest.raises(AlreadyLoggedIn):
        service.issue_session(user_active)
    assert service.validate(first).user_id == user_active.pk
    assert service.active_count() == 1


@pytest.mark.django_db
def test_expired_session_does_not_block_new_login(user_active):
    store = InMemorySessionStore()
    expired = SessionService(store, lifetime=timedelta(seconds=-5))
    stale = expired.issue_session(user_active)

    with pytest.raises(InvalidToken):
        expired.validate(stale)

    fresh = SessionService(store, lifetime=timedelta(hours=1)).issue_session(user_active)
    assert SessionService(store).validate(fresh).user_id == user_active.pk


@pytest.mark.django_db
def test_revoked_token_is_not_active(service, user_active):
    token = service.issue_session(user_active)
    assert service.revoke(token) is True
    with pytest.raises(TokenNotActive):
        service.validate(token)


@pytest.mark.django_db
def test_revoke_is_idempotent(service, user_active):
    token = service.issue_session(user_active)
    assert service.revoke(token) is True
    assert service.revoke(token) is False
    assert service.revoke("not-a-jwt") is False


@pytest.mark.django_db
def test_revoking_stale_token_keeps_newer_session(service, user_active):
    old = service.issue_session(user_active)
    service.revoke(old)
    new = service.issue_session(user_active)

    assert service.revoke(old) is False
    assert service.validate(new).user_id == user_active.pk
    with pytest.raises(TokenNotActive):
        service.validate(old)


def test_garbage_token_is_invalid(service):
    with pytest.raises(InvalidToken):
        service.validate("garbage")


@pytest.mark.django_db
def test_admin_token_is_not_a_viewer_session(service, admin_account):
    with pytest.raises(InvalidToken):
        service.validate(issue_admin_token(admin_account))


def test_concurrent_claims_admit_exactly_one():
    store = InMemorySessionStore()
    results = []
    barrier = threading.Barrier(8)

    def claim(i):
        barrier.wait()
        results.append(store.claim(42, f"jti-{i}", 2**40))

    threads = [threading.Thread(target=claim, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(store) == 1


@pytest.mark.django_db
def test_password_change_revokes_session(user_active):
    service = get_session_service()
    token = service.issue_session(user_active)

    user_active.set_password("another-pass")
    user_active.save()

    with pytest.raises(TokenNotActive):
        service.validate(token)


def test_app_owns_a_single_registry():
    assert get_session_service() is get_session_service()
    assert isinstance(get_session_service().store, InMemorySessionStore)
