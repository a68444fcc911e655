from fastapi import APIRouter, Depends, Request
from src.core.config import Settings, get_settings

router = APIRouter(tags=["health"])

@router.get("/health")
async def health_check(request: Request, settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "app_name": settings.APP_NAME,
        "active_sessions": request.app.state.manager.active_session_count,
    }
