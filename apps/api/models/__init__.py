"""Models package."""

from .user import User
from .video import Video
from .like import Like, LikeKey
from .comment import Comment
from .follow import Follow, FollowKey
