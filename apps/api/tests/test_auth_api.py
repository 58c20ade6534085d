import threading

import pytest

from config import settings
from main import app
from routers import auth as auth_router, rate_limit
from services.session_token import create_session_token


REGISTRATION = {
    "username": "newcreator",
    "email": "new@example.com",
    "password": "s3cret-pass",
    "displayName": "New Creator",
}


@pytest.mark.asyncio
async def test_register_returns_user_without_password_and_token(api_client, storage):
    response = await api_client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 201
    payload = response.json()
    assert payload["token"]
    user = payload["user"]
    assert user["username"] == "newcreator"
    assert user["displayName"] == "New Creator"
    assert user["followersCount"] == 0
    assert user["isAdmin"] is False
    assert "password" not in user

    stored = storage.get_user_by_email("new@example.com")
    assert stored.password != "s3cret-pass"
    assert stored.password.startswith("$2")

    me = await api_client.get("/api/auth/me", headers={"Authorization": f"Bearer {payload['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]
    assert "password" not in me.json()


@pytest.mark.asyncio
async def test_register_rejects_duplicates(api_client):
    assert (await api_client.post("/api/auth/register", json=REGISTRATION)).status_code == 201

    same_email = await api_client.post("/api/auth/register", json={**REGISTRATION, "username": "other"})
    assert same_email.status_code == 409

    same_username = await api_client.post("/api/auth/register", json={**REGISTRATION, "email": "other@example.com"})
    assert same_username.status_code == 409


@pytest.mark.asyncio
async def test_register_validates_input(api_client):
    response = await api_client.post("/api/auth/register", json={"username": "x", "email": "nope"})
    assert response.status_code == 400
    assert isinstance(response.json()["detail"], list)


@pytest.mark.asyncio
async def test_login_checks_password(api_client):
    await api_client.post("/api/auth/register", json=REGISTRATION)

    ok = await api_client.post("/api/auth/login", json={"email": "new@example.com", "password": "s3cret-pass"})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "new@example.com"
    assert "password" not in ok.json()["user"]

    wrong = await api_client.post("/api/auth/login", json={"email": "new@example.com", "password": "nope"})
    assert wrong.status_code == 401

    unknown = await api_client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})
    assert unknown.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_valid_token(api_client, make_user, auth_header):
    missing = await api_client.get("/api/auth/me")
    assert missing.status_code == 401

    invalid = await api_client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert invalid.status_code == 403

    user = make_user("viewer")
    assert (await api_client.get("/api/auth/me", headers=auth_header(user))).status_code == 200


@pytest.mark.asyncio
async def test_me_for_unknown_user_is_404(api_client, auth_header):
    class Ghost:
        id = 77
        email = "ghost@example.com"

    response = await api_client.get("/api/auth/me", headers=auth_header(Ghost))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_profile(api_client, storage, make_user, auth_header):
    user = make_user("editor")
    make_user("taken")

    response = await api_client.patch(
        "/api/auth/me",
        json={"displayName": "Editor Prime", "bio": "I edit things"},
        headers=auth_header(user),
    )
    assert response.status_code == 200
    assert response.json()["displayName"] == "Editor Prime"
    assert response.json()["username"] == "editor"
    assert storage.get_user(user.id).bio == "I edit things"

    clash = await api_client.patch("/api/auth/me", json={"username": "taken"}, headers=auth_header(user))
    assert clash.status_code == 409


@pytest.mark.asyncio
async def test_logout_acknowledges(api_client, make_user, auth_header):
    user = make_user("leaver")
    response = await api_client.post("/api/auth/logout", headers=auth_header(user))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_is_rate_limited(api_client, monkeypatch):
    async def _redis_down(key, window_seconds):
        raise ConnectionError("redis unavailable")

    monkeypatch.setattr(rate_limit, "_hit_redis_window", _redis_down)
    monkeypatch.setattr(settings, "AUTH_RATE_LIMIT_PER_MINUTE", 2)
    app.state.disable_rate_limits = False

    body = {"email": "ghost@example.com", "password": "x"}
    statuses = [(await api_client.post("/api/auth/login", json=body)).status_code for _ in range(3)]
    assert statuses == [401, 401, 429]


@pytest.mark.asyncio
async def test_rate_limit_ignores_rotating_forwarded_for(api_client, monkeypatch):
    async def _redis_down(key, window_seconds):
        raise ConnectionError("redis unavailable")

    monkeypatch.setattr(rate_limit, "_hit_redis_window", _redis_down)
    monkeypatch.setattr(settings, "AUTH_RATE_LIMIT_PER_MINUTE", 2)
    app.state.disable_rate_limits = False

    body = {"email": "ghost@example.com", "password": "x"}
    statuses = []
    for i in range(5):
        response = await api_client.post(
            "/api/auth/login",
            json=body,
            headers={"X-Forwarded-For": f"10.0.0.{i}"},
        )
        statuses.append(response.status_code)

    assert statuses == [401, 401, 429, 429, 429]
    assert len(rate_limit._local_windows) == 1


@pytest.mark.asyncio
async def test_password_hashing_runs_off_the_event_loop(api_client, monkeypatch):
    on_main_thread = []

    def _fake_hash(password):
        on_main_thread.append(threading.current_thread() is threading.main_thread())
        return "$2b$fake"

    def _fake_verify(password, hashed):
        on_main_thread.append(threading.current_thread() is threading.main_thread())
        return hashed == "$2b$fake"

    monkeypatch.setattr(auth_router, "hash_password", _fake_hash)
    monkeypatch.setattr(auth_router, "verify_password", _fake_verify)

    registered = await api_client.post("/api/auth/register", json=REGISTRATION)
    assert registered.status_code == 201
    logged_in = await api_client.post(
        "/api/auth/login",
        json={"email": REGISTRATION["email"], "password": REGISTRATION["password"]},
    )
    assert logged_in.status_code == 200
    assert on_main_thread == [False, False]


@pytest.mark.asyncio
async def test_token_for_a_reassigned_id_is_rejected(api_client, storage, make_user):
    current = make_user("current")
    video = storage.create_video(user_id=current.id, title="clip", video_url="https://cdn.test/c.mp4")
    stale = create_session_token(current.id, "previous-owner@example.com")["token"]
    headers = {"Authorization": f"Bearer {stale}"}

    assert (await api_client.get("/api/auth/me", headers=headers)).status_code == 403
    assert (await api_client.post(f"/api/videos/{video.id}/like", headers=headers)).status_code == 403
    assert storage.get_video(video.id).likes_count == 0
