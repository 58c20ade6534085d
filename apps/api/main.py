"""
ClipStream - FastAPI Backend
Main application entry point: short-video feed, social graph and admin metrics.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings, validate_security_settings
from routers import admin, auth, comments, health, users, videos
from services.sample_data import seed_sample_data
from storage import MemStorage


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    print("🚀 Starting ClipStream API...")
    validate_security_settings()
    storage = MemStorage()
    if settings.SEED_SAMPLE_DATA:
        seeded = seed_sample_data(storage)
        print(f"🌱 Seeded {seeded['users']} sample users and {seeded['videos']} sample videos.")
    app.state.storage = storage
    yield
    # Shutdown
    app.state.storage = None
    print("👋 Shutting down API...")


app = FastAPI(
    title="ClipStream API",
    description="Upload, browse, like, comment on and follow creators of short videos",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_to_400(_req: Request, exc: RequestValidationError):
    """Malformed input is a client error, reported as 400 with pydantic's details."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(videos.router, prefix="/api/videos", tags=["Videos"])
app.include_router(comments.router, prefix="/api/comments", tags=["Comments"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "ClipStream API",
        "version": "0.1.0",
        "status": "running"
    }
