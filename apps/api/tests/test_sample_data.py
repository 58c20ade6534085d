import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from services.passwords import hash_password, verify_password
from services.sample_data import SAMPLE_USERS, SAMPLE_VIDEOS, seed_sample_data


@pytest.fixture
def fast_hashing(monkeypatch):
    monkeypatch.setattr("services.sample_data.hash_password", lambda pw: hash_password(pw, rounds=4))


def test_seed_applies_preset_counters(storage, fast_hashing):
    assert seed_sample_data(storage) == {"users": len(SAMPLE_USERS), "videos": len(SAMPLE_VIDEOS)}

    admin = storage.get_user_by_username("admin")
    assert admin.is_admin is True
    assert verify_password("admin123", admin.password)

    assert [u.username for u in storage.get_top_creators(3)] == ["dancequeenx", "chefmike", "travelblogger"]
    assert storage.get_trending_videos(1)[0].title == "New Dance Challenge"
    assert storage.get_stats()["totalLikes"] == 0


def test_password_hash_verification():
    hashed = hash_password("hunter22", rounds=4)
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "not-a-bcrypt-hash")


@pytest.mark.asyncio
async def test_lifespan_attaches_seeded_storage(fast_hashing):
    async with app.router.lifespan_context(app):
        assert app.state.storage.get_user_by_email(SAMPLE_USERS[0]["email"]) is not None
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            ready = await client.get("/health/ready")
            assert ready.json() == {"ready": True}
            feed = await client.get("/api/videos")
            assert len(feed.json()) == len(SAMPLE_VIDEOS)
    assert app.state.storage is None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        assert (await client.get("/health/ready")).status_code == 503
        assert (await client.get("/health/live")).json() == {"alive": True}
