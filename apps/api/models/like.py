"""Like join row between a user and a video."""

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple


class LikeKey(NamedTuple):
    user_id: int
    video_id: int


@dataclass
class Like:
    id: int
    user_id: int
    video_id: int
    created_at: datetime

    @property
    def key(self) -> LikeKey:
        return LikeKey(self.user_id, self.video_id)
