"""
Comment moderation by authors and video owners.
"""

from fastapi import APIRouter, Depends, HTTPException

from routers.auth_scope import AuthContext, get_auth_context
from schemas import SuccessResponse
from storage import MemStorage, get_storage

router = APIRouter()


@router.delete("/{comment_id}", response_model=SuccessResponse)
async def delete_comment(
    comment_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    """Remove a comment. Allowed for its author and for the owner of the video."""
    comment = storage.get_comment(comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")

    video = storage.get_video(comment.video_id)
    video_owner = video.user_id if video else None
    if auth.user_id not in (comment.user_id, video_owner):
        raise HTTPException(status_code=403, detail="Not authorized")

    return SuccessResponse(success=storage.delete_comment(comment_id))
