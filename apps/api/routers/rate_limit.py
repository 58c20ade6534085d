"""Per-client fixed-window rate limiting for credential endpoints.

Counters live in Redis when it is reachable; otherwise each process keeps its
own window table.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Optional, Tuple

from fastapi import HTTPException, Request
import redis.asyncio as redis

from config import settings


logger = logging.getLogger(__name__)

# key -> (hits in window, window reset epoch seconds)
_local_windows: Dict[str, Tuple[int, float]] = {}
_local_lock = asyncio.Lock()


def reset_local_counters() -> None:
    _local_windows.clear()


def _client_identifier(request: Request) -> str:
    # The socket peer wins; forwarded headers are client-controlled.
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return "unknown"


async def _hit_local_window(key: str, window_seconds: int) -> int:
    now = time.time()
    async with _local_lock:
        hits, reset_at = _local_windows.get(key, (0, now + window_seconds))
        if now >= reset_at:
            hits, reset_at = 0, now + window_seconds
        hits += 1
        _local_windows[key] = (hits, reset_at)
        return hits


async def _hit_redis_window(key: str, window_seconds: int) -> int:
    client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        hits = await client.incr(key)
        if hits == 1:
            await client.expire(key, window_seconds)
        return int(hits)
    finally:
        await client.aclose()


def rate_limit(
    scope: str,
    limit: Optional[int] = None,
    window_seconds: int = 60,
) -> Callable[[Request], Awaitable[None]]:
    """Build a dependency allowing `limit` requests per client per window."""

    async def _dependency(request: Request) -> None:
        if getattr(request.app.state, "disable_rate_limits", False):
            return

        allowed_hits = int(limit or settings.AUTH_RATE_LIMIT_PER_MINUTE)
        key = f"clip:rate:{scope}:{_client_identifier(request)}"
        try:
            hits = await _hit_redis_window(key, window_seconds)
        except Exception as exc:
            logger.debug("Redis rate limit unavailable, using local window: %s", exc)
            hits = await _hit_local_window(key, window_seconds)

        if hits > allowed_hits:
            raise HTTPException(
                status_code=429,
                detail=f"Too many {scope} attempts. Try again later.",
            )

    return _dependency
