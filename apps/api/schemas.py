"""Request and response payloads shared across routers.

JSON field names are camelCase; snake_case is accepted on input as well.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models import Comment, Follow, Like, User, Video
from storage import MemStorage


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserOut(CamelModel):
    """Public user profile; the password hash is never part of it."""

    id: int
    username: str
    email: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    followers_count: int = 0
    following_count: int = 0
    likes_count: int = 0
    is_verified: bool = False
    is_admin: bool = False
    created_at: datetime


class VideoOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    views_count: int = 0
    tags: Optional[List[str]] = None
    is_public: bool = True
    created_at: datetime


class VideoWithUserOut(VideoOut):
    user: Optional[UserOut] = None


class LikeOut(CamelModel):
    id: int
    user_id: int
    video_id: int
    created_at: datetime


class CommentOut(CamelModel):
    id: int
    user_id: int
    video_id: int
    content: str
    likes_count: int = 0
    created_at: datetime


class CommentWithUserOut(CommentOut):
    user: Optional[UserOut] = None


class FollowOut(CamelModel):
    id: int
    follower_id: int
    following_id: int
    created_at: datetime


class SuccessResponse(BaseModel):
    success: bool


class AuthResponse(BaseModel):
    user: UserOut
    token: str


class StatsOut(CamelModel):
    total_users: int
    total_videos: int
    total_likes: int
    total_comments: int
    total_follows: int


class UserStatsOut(CamelModel):
    videos_count: int
    total_likes: int
    total_views: int
    followers_count: int
    following_count: int


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.]+$")
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6, max_length=72)
    display_name: str = Field(min_length=1, max_length=60)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdateRequest(CamelModel):
    username: Optional[str] = Field(default=None, min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.]+$")
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=60)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[str] = None


class VideoCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=150)
    video_url: str = Field(min_length=1)
    description: Optional[str] = Field(default=None, max_length=2200)
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None


class VideoUpdateRequest(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = Field(default=None, max_length=2200)
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None


class CommentCreateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=1000)


def user_out(user: Optional[User]) -> Optional[UserOut]:
    return UserOut.model_validate(user) if user is not None else None


def video_with_user(storage: MemStorage, video: Video) -> VideoWithUserOut:
    """Attach the owner's public profile, or None when the owner no longer resolves."""
    owner = storage.get_user(video.user_id) if video.user_id is not None else None
    payload = VideoOut.model_validate(video).model_dump()
    return VideoWithUserOut(**payload, user=user_out(owner))


def comment_with_user(storage: MemStorage, comment: Comment) -> CommentWithUserOut:
    payload = CommentOut.model_validate(comment).model_dump()
    return CommentWithUserOut(**payload, user=user_out(storage.get_user(comment.user_id)))


def like_out(like: Like) -> LikeOut:
    return LikeOut.model_validate(like)


def follow_out(follow: Follow) -> FollowOut:
    return FollowOut.model_validate(follow)
