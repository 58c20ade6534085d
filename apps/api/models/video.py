"""Video model for uploaded short videos."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class Video:
    """Short video metadata with denormalized engagement counters."""

    id: int
    user_id: Optional[int]
    title: str
    video_url: str
    created_at: datetime
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None  # seconds
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    views_count: int = 0
    tags: Optional[List[str]] = None
    is_public: bool = True
