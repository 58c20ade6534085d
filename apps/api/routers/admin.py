"""
Admin dashboard metrics: totals, trending videos and top creators.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from routers.auth_scope import require_admin
from schemas import StatsOut, UserOut, VideoWithUserOut, video_with_user
from storage import MemStorage, get_storage

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=StatsOut)
async def get_stats(storage: MemStorage = Depends(get_storage)):
    """Collection sizes at call time."""
    return StatsOut.model_validate(storage.get_stats())


@router.get("/trending", response_model=List[VideoWithUserOut])
async def get_trending(
    limit: int = Query(default=10, ge=1, le=100),
    storage: MemStorage = Depends(get_storage),
):
    return [video_with_user(storage, v) for v in storage.get_trending_videos(limit)]


@router.get("/creators", response_model=List[UserOut])
async def get_top_creators(
    limit: int = Query(default=10, ge=1, le=100),
    storage: MemStorage = Depends(get_storage),
):
    return [UserOut.model_validate(u) for u in storage.get_top_creators(limit)]
