"""User model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """Registered account. `password` always holds a bcrypt hash."""

    id: int
    username: str
    email: str
    password: str
    display_name: str
    created_at: datetime
    bio: Optional[str] = None
    avatar: Optional[str] = None
    followers_count: int = 0
    following_count: int = 0
    likes_count: int = 0
    is_verified: bool = False
    is_admin: bool = False
