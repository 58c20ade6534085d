"""Authentication dependencies for API user scoping."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from models import User
from services.session_token import read_session_claims
from storage import MemStorage, get_storage


auth_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    user_id: int
    email: Optional[str] = None


def ensure_owner(auth: AuthContext, owner_id: Optional[int], detail: str = "Not authorized") -> None:
    """Reject mutations of records the authenticated user does not own."""
    if owner_id != auth.user_id:
        raise HTTPException(status_code=403, detail=detail)


async def get_auth_context(
    credentials: HTTPAuthorizationCredentials = Depends(auth_scheme),
    storage: MemStorage = Depends(get_storage),
) -> AuthContext:
    """Resolve authenticated user from Bearer session token.

    Ids restart at 1 with every process, so a token only counts for the
    account it was issued to when its email claim still matches that id.
    """
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Access token required")

    try:
        claims = read_session_claims(credentials.credentials)
    except ValueError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc

    user = storage.get_user(claims.user_id)
    if user is not None and user.email != claims.email:
        raise HTTPException(status_code=403, detail="Session does not belong to this account.")

    return AuthContext(user_id=claims.user_id, email=claims.email)


async def require_admin(
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
) -> User:
    """Allow only authenticated accounts flagged as admin."""
    user = storage.get_user(auth.user_id)
    if not user or not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
