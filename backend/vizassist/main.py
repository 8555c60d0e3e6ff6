"""
main.py — FastAPI Application Entry Point

Wires the routers together:
  - /api/sessions : per-tab state (mode, dataset, selected chart)
  - /api/upload   : CSV sampling + profiling
  - /api/charts   : chart menu, geometry, SVG, recreation code
  - /api/detect   : AI chart-type detection from an image
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import charts, detect, sessions, upload
from .config import settings
from .core.session import SessionStore

app = FastAPI(
    title=settings.APP_NAME,
    description="Profile a CSV sample, render ten chart families as vector geometry, and detect chart types from images.",
    version="1.0.0",
)

# ── Session State ────────────────────────────────────────────────
app.state.sessions = SessionStore()

# ── CORS Middleware ──────────────────────────────────────────────
# Merge default + extra CORS origins (from EXTRA_CORS_ORIGINS env var)
_cors_origins = list(settings.CORS_ORIGINS)
if settings.EXTRA_CORS_ORIGINS:
    _cors_origins += [o.strip() for o in settings.EXTRA_CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Register API Routers ────────────────────────────────────────
app.include_router(sessions.router, prefix="/api/sessions", tags=["Sessions"])
app.include_router(upload.router,   prefix="/api/upload",   tags=["Upload"])
app.include_router(charts.router,   prefix="/api/charts",   tags=["Charts"])
app.include_router(detect.router,   prefix="/api/detect",   tags=["Detection"])


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "running",
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}
