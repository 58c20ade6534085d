"""Follow join row: `follower_id` follows `following_id`."""

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple


class FollowKey(NamedTuple):
    follower_id: int
    following_id: int


@dataclass
class Follow:
    id: int
    follower_id: int
    following_id: int
    created_at: datetime

    @property
    def key(self) -> FollowKey:
        return FollowKey(self.follower_id, self.following_id)
