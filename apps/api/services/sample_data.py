"""Demo creators and videos loaded into a fresh store on startup."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from services.passwords import hash_password
from storage import MemStorage


logger = logging.getLogger(__name__)


SAMPLE_USERS: List[Dict[str, Any]] = [
    {
        "username": "dancequeenx",
        "email": "dance@example.com",
        "password": "password123",
        "display_name": "Dance Queen",
        "bio": "Professional dancer & choreographer",
        "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150&h=150&fit=crop&crop=face",
        "counters": {"followers_count": 2300000, "following_count": 543, "likes_count": 15000000},
        "is_verified": True,
    },
    {
        "username": "chefmike",
        "email": "chef@example.com",
        "password": "password123",
        "display_name": "Chef Mike",
        "bio": "Cooking quick & delicious meals",
        "avatar": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop&crop=face",
        "counters": {"followers_count": 1800000, "following_count": 287, "likes_count": 8500000},
        "is_verified": True,
    },
    {
        "username": "travelblogger",
        "email": "travel@example.com",
        "password": "password123",
        "display_name": "Travel Blogger",
        "bio": "Exploring the world one video at a time",
        "avatar": "https://images.unsplash.com/photo-1488646953014-85cb44e25828?w=150&h=150&fit=crop&crop=face",
        "counters": {"followers_count": 1500000, "following_count": 412, "likes_count": 6200000},
        "is_verified": True,
    },
    {
        "username": "admin",
        "email": "admin@clipstream.dev",
        "password": "admin123",
        "display_name": "ClipStream Admin",
        "bio": "Official ClipStream admin account",
        "avatar": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop&crop=face",
        "counters": {"followers_count": 100000, "following_count": 0, "likes_count": 0},
        "is_verified": True,
        "is_admin": True,
    },
]

SAMPLE_VIDEOS: List[Dict[str, Any]] = [
    {
        "owner": "dancequeenx",
        "title": "New Dance Challenge",
        "description": "New dance trend! Try this at home #DanceChallenge",
        "video_url": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4",
        "thumbnail_url": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400&h=600&fit=crop",
        "duration": 60,
        "tags": ["dance", "challenge", "trending"],
        "counters": {"likes_count": 142000, "comments_count": 8200, "shares_count": 1500, "views_count": 2300000},
    },
    {
        "owner": "chefmike",
        "title": "Quick Pasta Recipe",
        "description": "Quick pasta recipe in 60 seconds! #CookingHacks #PastaLove",
        "video_url": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ElephantsDream.mp4",
        "thumbnail_url": "https://images.unsplash.com/photo-1556909114-f6e7ad7d3136?w=400&h=600&fit=crop",
        "duration": 45,
        "tags": ["cooking", "recipe", "pasta"],
        "counters": {"likes_count": 89000, "comments_count": 3100, "shares_count": 890, "views_count": 856000},
    },
    {
        "owner": "travelblogger",
        "title": "Hidden Beach Paradise",
        "description": "Found this amazing hidden beach! #Travel #Paradise #Beach",
        "video_url": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ForBiggerBlazes.mp4",
        "thumbnail_url": "https://images.unsplash.com/photo-1488646953014-85cb44e25828?w=400&h=600&fit=crop",
        "duration": 75,
        "tags": ["travel", "beach", "paradise"],
        "counters": {"likes_count": 67000, "comments_count": 2400, "shares_count": 1200, "views_count": 1200000},
    },
]


def seed_sample_data(storage: MemStorage) -> Dict[str, int]:
    """Insert demo accounts and videos. Preset counters are applied as updates."""
    owners: Dict[str, int] = {}
    for entry in SAMPLE_USERS:
        user = storage.create_user(
            username=entry["username"],
            email=entry["email"],
            password=hash_password(entry["password"]),
            display_name=entry["display_name"],
            bio=entry.get("bio"),
            avatar=entry.get("avatar"),
        )
        storage.update_user(
            user.id,
            {
                **entry["counters"],
                "is_verified": entry.get("is_verified", False),
                "is_admin": entry.get("is_admin", False),
            },
        )
        owners[user.username] = user.id

    for entry in SAMPLE_VIDEOS:
        video = storage.create_video(
            user_id=owners.get(entry["owner"]),
            title=entry["title"],
            description=entry["description"],
            video_url=entry["video_url"],
            thumbnail_url=entry["thumbnail_url"],
            duration=entry["duration"],
            tags=entry["tags"],
        )
        storage.update_video(video.id, entry["counters"])

    logger.info("Seeded %d users and %d videos", len(SAMPLE_USERS), len(SAMPLE_VIDEOS))
    return {"users": len(SAMPLE_USERS), "videos": len(SAMPLE_VIDEOS)}
