"""
FastAPI backend for the Project Timeline Tracker.

Provides the project REST API and server-side navigation that renders
dashboard pages as JSON snapshots.
"""

import sys
import logging
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.dependencies import get_settings, get_store, reset_dependencies
from api.routes import health, navigation, projects
from src.utils.logging import setup_logging

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(level=settings.log_level)
    store = get_store()
    logger.info(f"Project Timeline Tracker API starting ({len(store.projects)} projects loaded)")
    yield
    logger.info("API shutting down")
    reset_dependencies()


app = FastAPI(
    title="Project Timeline Tracker API",
    description="28-day project timelines with stage tracking and dashboard navigation",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:3001",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(projects.router, prefix="/api", tags=["Projects"])
app.include_router(navigation.router, prefix="/api", tags=["Navigation"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
