"""Comment model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    id: int
    user_id: int
    video_id: int
    content: str
    created_at: datetime
    likes_count: int = 0
