"""
Main FastAPI application entry point.
"""

from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging
from contextlib import asynccontextmanager

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import APIError
from app.routers import api_router
from app.services.listing_service import ListingService
from app.services.market_files import MarketFileStorage
from app.services.product_index import ProductIndex
from app.services.session_store import SessionStore

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format=default_settings.log_format,
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to run with (defaults to the environment)
    """
    settings = settings or default_settings

    # Lifespan context manager for startup/shutdown events
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: build the stores owned by this app instance
        app.state.settings = settings
        app.state.session_store = SessionStore(
            settings.SESSION_DIR,
            ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
        )
        app.state.listing_service = ListingService(
            MarketFileStorage(settings.UPLOAD_DIR),
            ProductIndex(),
            date_format=settings.DATE_FORMAT,
        )
        logger.info(f"🚀 {settings.app_name} ready ({settings.ENVIRONMENT}), uploads in {settings.UPLOAD_DIR}")

        yield

        logger.info("🛑 Shutting down")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Catch anything the routes did not turn into an APIError
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Request failed: {str(e)}", exc_info=True)

            content = {"error": "Internal server error"}
            if settings.debug:
                content["details"] = str(e)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=content,
            )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    # Add exception handler for validation errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors with detailed messages"""
        error_messages = []

        for error in exc.errors():
            field = " -> ".join(str(x) for x in error["loc"])
            error_messages.append(f"{field}: {error['msg']} (type: {error['type']})")

        logger.error(f"Validation error: {error_messages}")

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"error": "Validation Error", "details": error_messages}),
        )

    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        """Root endpoint for liveness checks."""
        return "Backend is running."

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.reload,
    )
