"""Signed bearer sessions for ClipStream accounts.

A session is an HS256 JWT naming the account by numeric id (`sub`) and by the
email it was issued to. Both are needed to accept it: ids are process-local.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from config import settings


SESSION_TOKEN_TYPE = "clip_session"


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    email: str
    expires_at: int


def _session_lifetime(expires_hours: Optional[int]) -> timedelta:
    hours = int(expires_hours or settings.JWT_EXPIRATION_HOURS or 168)
    return timedelta(hours=max(hours, 1))


def create_session_token(
    user_id: int,
    email: str,
    expires_hours: Optional[int] = None,
) -> Dict[str, Any]:
    """Issue a token for the account and report when it lapses (epoch seconds)."""
    issued_at = datetime.now(timezone.utc)
    expires_at = int((issued_at + _session_lifetime(expires_hours)).timestamp())
    token = jwt.encode(
        {
            "sub": str(user_id),
            "email": email,
            "type": SESSION_TOKEN_TYPE,
            "iat": int(issued_at.timestamp()),
            "exp": expires_at,
        },
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"token": token, "expires_at": expires_at}


def decode_session_token(token: str) -> Dict[str, Any]:
    """Verify signature, expiry and token type; return the raw claims."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Invalid or expired session token.") from exc

    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise ValueError("Invalid session token type.")
    if not str(payload.get("sub", "")).isdigit():
        raise ValueError("Session token missing subject.")
    if not payload.get("email"):
        raise ValueError("Session token missing email.")
    return payload


def read_session_claims(token: str) -> SessionClaims:
    payload = decode_session_token(token)
    return SessionClaims(
        user_id=int(payload["sub"]),
        email=str(payload["email"]),
        expires_at=int(payload["exp"]),
    )
