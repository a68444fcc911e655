from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.core.exceptions import InterviewSimulatorError
from src.core.logging import setup_logging
from src.managers.interview import InterviewManager

logger = structlog.get_logger(__name__)

def create_app(manager: InterviewManager | None = None) -> FastAPI:
    settings = get_settings()
    setup_logging(settings)
    manager = manager or InterviewManager(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app_started", environment=settings.ENVIRONMENT.value)
        yield
        # Live sessions die with the app; their clocks must not outlive it
        app.state.manager.close_all()
        logger.info("app_stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.manager = manager

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, replace with actual origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InterviewSimulatorError)
    async def interview_error_handler(request: Request, exc: InterviewSimulatorError):
        logger.warning("request_rejected",
                       path=request.url.path,
                       error=type(exc).__name__,
                       detail=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    # Include routers
    from .routers import interview, health
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(interview.router, prefix=settings.API_PREFIX)

    return app
