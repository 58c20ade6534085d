"""
Video feed, video CRUD, likes and comments.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from models import Video
from routers.auth_scope import AuthContext, ensure_owner, get_auth_context
from schemas import (
    CommentCreateRequest,
    CommentOut,
    CommentWithUserOut,
    LikeOut,
    SuccessResponse,
    VideoCreateRequest,
    VideoOut,
    VideoUpdateRequest,
    VideoWithUserOut,
    comment_with_user,
    like_out,
    video_with_user,
)
from storage import MemStorage, get_storage

router = APIRouter()


def _require_video(storage: MemStorage, video_id: int) -> Video:
    video = storage.get_video(video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    return video


@router.get("", response_model=List[VideoWithUserOut])
async def list_feed(
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    storage: MemStorage = Depends(get_storage),
):
    """Public videos, newest first, each with its creator."""
    return [video_with_user(storage, v) for v in storage.get_videos_for_feed(limit, offset)]


@router.get("/{video_id}", response_model=VideoWithUserOut)
async def get_video(video_id: int, storage: MemStorage = Depends(get_storage)):
    return video_with_user(storage, _require_video(storage, video_id))


@router.post("", response_model=VideoOut, status_code=201)
async def create_video(
    request: VideoCreateRequest,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    video = storage.create_video(user_id=auth.user_id, **request.model_dump())
    return VideoOut.model_validate(video)


@router.put("/{video_id}", response_model=VideoOut)
async def update_video(
    video_id: int,
    request: VideoUpdateRequest,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    """Owner-only edit of the video's descriptive fields and visibility."""
    video = _require_video(storage, video_id)
    ensure_owner(auth, video.user_id)

    updates = request.model_dump(exclude_unset=True)
    for required in ("title", "is_public"):
        if required in updates and updates[required] is None:
            updates.pop(required)
    return VideoOut.model_validate(storage.update_video(video_id, updates))


@router.delete("/{video_id}", response_model=SuccessResponse)
async def delete_video(
    video_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    video = _require_video(storage, video_id)
    ensure_owner(auth, video.user_id)
    return SuccessResponse(success=storage.delete_video(video_id))


@router.post("/{video_id}/like", response_model=LikeOut, status_code=201)
async def like_video(
    video_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    _require_video(storage, video_id)
    if storage.get_like(auth.user_id, video_id):
        raise HTTPException(status_code=409, detail="Already liked")
    return like_out(storage.create_like(auth.user_id, video_id))


@router.delete("/{video_id}/like", response_model=SuccessResponse)
async def unlike_video(
    video_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    return SuccessResponse(success=storage.delete_like(auth.user_id, video_id))


@router.get("/{video_id}/comments", response_model=List[CommentWithUserOut])
async def list_comments(video_id: int, storage: MemStorage = Depends(get_storage)):
    """Comments on a video, newest first, each with its author."""
    return [comment_with_user(storage, c) for c in storage.get_comments_by_video(video_id)]


@router.post("/{video_id}/comments", response_model=CommentOut, status_code=201)
async def create_comment(
    video_id: int,
    request: CommentCreateRequest,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    _require_video(storage, video_id)
    comment = storage.create_comment(auth.user_id, video_id, request.content)
    return CommentOut.model_validate(comment)
