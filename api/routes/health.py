"""Health check endpoints."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "healthy", "service": "project-timeline-tracker"}


@router.get("/")
async def root():
    """API root."""
    return {
        "name": "Project Timeline Tracker API",
        "version": "1.0.0",
        "docs": "/docs",
    }
