from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from routers import rate_limit
from services.session_token import create_session_token
from storage import MemStorage, get_storage


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture(autouse=True)
def reset_local_rate_limit_counters():
    """Keep in-memory rate-limit state isolated between tests."""
    previous = getattr(app.state, "disable_rate_limits", False)
    app.state.disable_rate_limits = True
    rate_limit.reset_local_counters()
    yield
    rate_limit.reset_local_counters()
    app.state.disable_rate_limits = previous


@pytest.fixture
def storage():
    return MemStorage(clock=TickingClock())


@pytest_asyncio.fixture
async def api_client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_storage, None)


def _auth_header(user):
    return {"Authorization": f"Bearer {create_session_token(user.id, user.email)['token']}"}


def _make_user(storage, username, **fields):
    """Insert a user directly with a placeholder hash; counters/flags go through update_user."""
    user = storage.create_user(
        username=username,
        email=f"{username}@example.com",
        password="not-a-real-hash",
        display_name=username.title(),
    )
    if fields:
        user = storage.update_user(user.id, fields)
    return user


@pytest.fixture
def make_user(storage):
    return lambda username, **fields: _make_user(storage, username, **fields)


@pytest.fixture
def auth_header():
    return _auth_header
