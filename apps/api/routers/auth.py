"""
Authentication router: registration, login and the caller's own profile.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from routers.auth_scope import AuthContext, get_auth_context
from routers.rate_limit import rate_limit
from schemas import AuthResponse, LoginRequest, ProfileUpdateRequest, RegisterRequest, UserOut
from services.passwords import hash_password, verify_password
from services.session_token import create_session_token
from storage import MemStorage, get_storage

router = APIRouter()
logger = logging.getLogger(__name__)

auth_rate_limit = rate_limit("auth")


def _auth_response(user) -> AuthResponse:
    session = create_session_token(user.id, user.email)
    return AuthResponse(user=UserOut.model_validate(user), token=session["token"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=201,
    dependencies=[Depends(auth_rate_limit)],
)
async def register(
    request: RegisterRequest,
    storage: MemStorage = Depends(get_storage),
):
    """Create an account and return it with a fresh session token."""
    # Hash first: the uniqueness checks and the insert below must not be split by an await.
    try:
        hashed = await run_in_threadpool(hash_password, request.password)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Unusable password: {exc}") from exc

    if storage.get_user_by_email(request.email):
        raise HTTPException(status_code=409, detail="User already exists")
    if storage.get_user_by_username(request.username):
        raise HTTPException(status_code=409, detail="Username already taken")

    user = storage.create_user(
        username=request.username,
        email=request.email,
        password=hashed,
        display_name=request.display_name,
        bio=request.bio,
        avatar=request.avatar,
    )
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(auth_rate_limit)])
async def login(
    request: LoginRequest,
    storage: MemStorage = Depends(get_storage),
):
    user = storage.get_user_by_email(request.email)
    if not user or not await run_in_threadpool(verify_password, request.password, user.password):
        logger.info("Rejected login for %s", request.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _auth_response(user)


@router.get("/me", response_model=UserOut)
async def get_current_user(
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    """Get the authenticated user's profile."""
    user = storage.get_user(auth.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(user)


@router.patch("/me", response_model=UserOut)
async def update_current_user(
    request: ProfileUpdateRequest,
    auth: AuthContext = Depends(get_auth_context),
    storage: MemStorage = Depends(get_storage),
):
    """Edit display name, bio, avatar or username of the authenticated user."""
    user = storage.get_user(auth.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    updates = request.model_dump(exclude_unset=True)
    username = updates.get("username")
    if username and username != user.username:
        taken = storage.get_user_by_username(username)
        if taken and taken.id != user.id:
            raise HTTPException(status_code=409, detail="Username already taken")
    if "display_name" in updates and not updates["display_name"]:
        updates.pop("display_name")
    if "username" in updates and not updates["username"]:
        updates.pop("username")

    return UserOut.model_validate(storage.update_user(user.id, updates))


@router.post("/logout")
async def logout(_auth: AuthContext = Depends(get_auth_context)):
    """Client-managed logout acknowledgment endpoint."""
    return {"message": "Logged out successfully"}
