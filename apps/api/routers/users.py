"""
Public user profiles, their videos, and the follow graph.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from models import User
from routers.auth_scope import AuthContext, get_auth_context
from schemas import FollowOut, SuccessResponse, UserOut, UserStatsOut, VideoOut, follow_out
from storage import MemStorage, get_storage

router = APIRouter()


def _require_user(storage: MemStorage, user_id: int) -> User:
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: int, storage: MemStorage = Depends(get_storage)):
    return UserOut.model_validate(_require_user(storage, user_id))


@router.get("/{user_id}/videos", response_model=List[VideoOut])
async def get_user_videos(user_id: int, storage: MemStorage = Depends(get_storage)):
    """Every video owned by the user, private ones included."""
    return [VideoOut.model_validate(v) for v in storage.get_videos_by_user(user_id)]


@router.get("/{user_id}/stats", response_model=UserStatsOut)
async def get_user_stats(user_id: int, storage: MemStorage = Depends(get_storage)):
    stats = storage.get_user_stats(user_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserStatsOut.model_validate(stats)


@router.get("/{user_id}/followers", response_model=List[UserOut])
async def get_followers(user_id: int, storage: MemStorage = Depends(get_storage)):
    _require_user(storage, user_id)
    return [UserOut.model_validate(u) for u in storage.get_followers(user_id)]


@router.get("/{user_id}/following", response_model=List[UserOut])
async def get_following(user_id: int, storage: MemStorage = Depends(get_storage)):
    _require_user(storage, user_id)
    return [UserOut.model_validate(u) for u in storage.get_following(user_id)]


@router.post("/{user_id}/follow", response_model=FollowOut, status_code=201)
async def follow_user(
    user_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    if auth.user_id == user_id:
        raise HTTPException(status_code=400, detail="Cannot follow yourself")
    _require_user(storage, user_id)
    if storage.get_follow(auth.user_id, user_id):
        raise HTTPException(status_code=409, detail="Already following")
    return follow_out(storage.create_follow(auth.user_id, user_id))


@router.delete("/{user_id}/follow", response_model=SuccessResponse)
async def unfollow_user(
    user_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    return SuccessResponse(success=storage.delete_follow(auth.user_id, user_id))
