"""Health check endpoints."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "vitareach-backend",
        "environment": request.app.state.settings.ENVIRONMENT,
    }
