"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.dependencies import build_services
from api.routes import favorites, places
from settings import settings

logger = logging.getLogger(__name__)


# Create app
app = FastAPI(
    title="Place Explorer API",
    description="Nearby place search and favorites for the map client",
    version="0.1.0",
)

# CORS middleware for the map client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(places.router, prefix="/places", tags=["places"])
app.include_router(favorites.router, prefix="/favorites", tags=["favorites"])


@app.on_event("startup")
def startup_event():
    """Configure logging and build the shared places client and favorites store."""
    logging.basicConfig(level=settings.LOG_LEVEL)
    app.state.services = build_services(settings)
    logger.info("Place Explorer API ready (favorites: %d)", len(app.state.services.favorites.all()))


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Place Explorer API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
