"""Routers package."""

from . import (
    health,
    auth,
    videos,
    comments,
    users,
    admin,
)
