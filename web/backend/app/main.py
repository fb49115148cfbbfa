"""FastAPI application for the textguard moderation service.

Provides REST API endpoints wrapping the textguard package for:
- Deny-list moderation and redaction
- Combined validation (gibberish, profanity, contact information)
- Per-field validation with each field's configured checks
- Preset discovery
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from textguard import __version__
from web.backend.app.routers import moderation

app = FastAPI(
    title="textguard API",
    description=(
        "REST API for the textguard moderation engine. "
        "Validates and sanitizes user-generated profile and chat text."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(moderation.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "textguard API",
        "version": __version__,
        "description": "Moderation engine for user-generated text",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
