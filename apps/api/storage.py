"""
In-memory entity store and repository operations.

`MemStorage` keeps every collection in insertion-ordered dicts and owns the
per-kind id sequences. Join rows (likes, follows) and the denormalized
counters they drive are always mutated by the same method, so a caller can
never apply one without the other. Nothing here awaits: each call runs to
completion before another request handler can observe the store.
"""

from __future__ import annotations

import dataclasses
import enum
import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from fastapi import Request

from models import Comment, Follow, FollowKey, Like, LikeKey, User, Video


logger = logging.getLogger(__name__)

# Fields a partial update may never overwrite.
_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class EntityKind(str, enum.Enum):
    USER = "user"
    VIDEO = "video"
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _decrement(value: int) -> int:
    return value - 1 if value > 0 else 0


def _merge(record: Any, updates: Mapping[str, Any]) -> Any:
    names = {f.name for f in dataclasses.fields(record)}
    changes = {
        key: value
        for key, value in updates.items()
        if key in names and key not in _IMMUTABLE_FIELDS
    }
    return dataclasses.replace(record, **changes)


class MemStorage:
    """Volatile, single-process store for users, videos, likes, comments and follows."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utcnow
        self._sequences: Dict[EntityKind, Iterator[int]] = {
            kind: itertools.count(1) for kind in EntityKind
        }
        self.users: Dict[int, User] = {}
        self.videos: Dict[int, Video] = {}
        self.likes: Dict[LikeKey, Like] = {}
        self.comments: Dict[int, Comment] = {}
        self.follows: Dict[FollowKey, Follow] = {}

    def next_id(self, kind: EntityKind) -> int:
        """Return the next id for `kind`. Ids start at 1 and are never reused."""
        return next(self._sequences[EntityKind(kind)])

    # ------------------------------------------------------------------ users

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(
        self,
        *,
        username: str,
        email: str,
        password: str,
        display_name: str,
        bio: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> User:
        """Insert a user. `password` must already be hashed."""
        user = User(
            id=self.next_id(EntityKind.USER),
            username=username,
            email=email,
            password=password,
            display_name=display_name,
            bio=bio or None,
            avatar=avatar or None,
            created_at=self._clock(),
        )
        self.users[user.id] = user
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    def update_user(self, user_id: int, updates: Mapping[str, Any]) -> Optional[User]:
        """Shallow-merge `updates` onto the user; absent fields are untouched."""
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = _merge(user, updates)
        self.users[user_id] = updated
        return updated

    # ----------------------------------------------------------------- videos

    def get_video(self, video_id: int) -> Optional[Video]:
        return self.videos.get(video_id)

    def get_videos_by_user(self, user_id: int) -> List[Video]:
        return [v for v in self.videos.values() if v.user_id == user_id]

    def get_videos_for_feed(self, limit: int = 10, offset: int = 0) -> List[Video]:
        """Public videos, newest first. Equal timestamps keep insertion order."""
        public = [v for v in self.videos.values() if v.is_public]
        public.sort(key=lambda v: v.created_at, reverse=True)
        return public[offset:offset + limit]

    def create_video(
        self,
        *,
        user_id: Optional[int],
        title: str,
        video_url: str,
        description: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
        duration: Optional[int] = None,
        tags: Optional[List[str]] = None,
        is_public: Optional[bool] = None,
    ) -> Video:
        video = Video(
            id=self.next_id(EntityKind.VIDEO),
            user_id=user_id,
            title=title,
            video_url=video_url,
            description=description or None,
            thumbnail_url=thumbnail_url or None,
            duration=duration,
            tags=list(tags) if tags is not None else None,
            is_public=True if is_public is None else bool(is_public),
            created_at=self._clock(),
        )
        self.videos[video.id] = video
        logger.info("Created video %s for user %s", video.id, user_id)
        return video

    def update_video(self, video_id: int, updates: Mapping[str, Any]) -> Optional[Video]:
        video = self.videos.get(video_id)
        if video is None:
            return None
        updated = _merge(video, updates)
        self.videos[video_id] = updated
        return updated

    def delete_video(self, video_id: int) -> bool:
        """Remove the video only; its likes and comments are left in place."""
        deleted = self.videos.pop(video_id, None) is not None
        if deleted:
            logger.info("Deleted video %s", video_id)
        return deleted

    # ------------------------------------------------------------------ likes

    def get_like(self, user_id: int, video_id: int) -> Optional[Like]:
        return self.likes.get(LikeKey(user_id, video_id))

    def create_like(self, user_id: int, video_id: int) -> Like:
        """Insert a like and bump the video's likes_count.

        An existing like for the pair is returned as-is without touching the
        counter.
        """
        key = LikeKey(user_id, video_id)
        existing = self.likes.get(key)
        if existing is not None:
            return existing

        like = Like(
            id=self.next_id(EntityKind.LIKE),
            user_id=user_id,
            video_id=video_id,
            created_at=self._clock(),
        )
        self.likes[key] = like
        video = self.videos.get(video_id)
        if video is not None:
            video.likes_count += 1
        return like

    def delete_like(self, user_id: int, video_id: int) -> bool:
        if self.likes.pop(LikeKey(user_id, video_id), None) is None:
            return False
        video = self.videos.get(video_id)
        if video is not None:
            video.likes_count = _decrement(video.likes_count)
        return True

    # --------------------------------------------------------------- comments

    def get_comment(self, comment_id: int) -> Optional[Comment]:
        return self.comments.get(comment_id)

    def get_comments_by_video(self, video_id: int) -> List[Comment]:
        comments = [c for c in self.comments.values() if c.video_id == video_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    def create_comment(self, user_id: int, video_id: int, content: str) -> Comment:
        comment = Comment(
            id=self.next_id(EntityKind.COMMENT),
            user_id=user_id,
            video_id=video_id,
            content=content,
            created_at=self._clock(),
        )
        self.comments[comment.id] = comment
        video = self.videos.get(video_id)
        if video is not None:
            video.comments_count += 1
        return comment

    def delete_comment(self, comment_id: int) -> bool:
        comment = self.comments.pop(comment_id, None)
        if comment is None:
            return False
        video = self.videos.get(comment.video_id)
        if video is not None:
            video.comments_count = _decrement(video.comments_count)
        return True

    # ---------------------------------------------------------------- follows

    def get_follow(self, follower_id: int, following_id: int) -> Optional[Follow]:
        return self.follows.get(FollowKey(follower_id, following_id))

    def get_followers(self, user_id: int) -> List[User]:
        ids = [f.follower_id for f in self.follows.values() if f.following_id == user_id]
        return [self.users[i] for i in ids if i in self.users]

    def get_following(self, user_id: int) -> List[User]:
        ids = [f.following_id for f in self.follows.values() if f.follower_id == user_id]
        return [self.users[i] for i in ids if i in self.users]

    def create_follow(self, follower_id: int, following_id: int) -> Follow:
        """Insert a follow and bump both sides' counters.

        Self-follows are rejected by the API layer, not here.
        """
        key = FollowKey(follower_id, following_id)
        existing = self.follows.get(key)
        if existing is not None:
            return existing

        follow = Follow(
            id=self.next_id(EntityKind.FOLLOW),
            follower_id=follower_id,
            following_id=following_id,
            created_at=self._clock(),
        )
        self.follows[key] = follow
        follower = self.users.get(follower_id)
        if follower is not None:
            follower.following_count += 1
        followed = self.users.get(following_id)
        if followed is not None:
            followed.followers_count += 1
        return follow

    def delete_follow(self, follower_id: int, following_id: int) -> bool:
        if self.follows.pop(FollowKey(follower_id, following_id), None) is None:
            return False
        follower = self.users.get(follower_id)
        if follower is not None:
            follower.following_count = _decrement(follower.following_count)
        followed = self.users.get(following_id)
        if followed is not None:
            followed.followers_count = _decrement(followed.followers_count)
        return True

    # ------------------------------------------------------------- aggregates

    def get_stats(self) -> Dict[str, int]:
        return {
            "totalUsers": len(self.users),
            "totalVideos": len(self.videos),
            "totalLikes": len(self.likes),
            "totalComments": len(self.comments),
            "totalFollows": len(self.follows),
        }

    def get_user_stats(self, user_id: int) -> Optional[Dict[str, int]]:
        user = self.users.get(user_id)
        if user is None:
            return None
        videos = self.get_videos_by_user(user_id)
        return {
            "videosCount": len(videos),
            "totalLikes": sum(v.likes_count for v in videos),
            "totalViews": sum(v.views_count for v in videos),
            "followersCount": user.followers_count,
            "followingCount": user.following_count,
        }

    def get_trending_videos(self, limit: int = 10) -> List[Video]:
        public = [v for v in self.videos.values() if v.is_public]
        public.sort(key=lambda v: v.likes_count, reverse=True)
        return public[:limit]

    def get_top_creators(self, limit: int = 10) -> List[User]:
        creators = [u for u in self.users.values() if not u.is_admin]
        creators.sort(key=lambda u: u.followers_count, reverse=True)
        return creators[:limit]


def get_storage(request: Request) -> MemStorage:
    """FastAPI dependency returning the store attached to the running app."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("Storage is not initialized; the app lifespan has not run.")
    return storage
