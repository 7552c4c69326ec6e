import logging
import time
import traceback

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.database import Base, engine
from .core.logging_config import configure_logging
from .routes import configuration
# Import all models so every table is registered on Base.metadata
from . import models  # noqa: F401

logger = logging.getLogger(__name__)


def _cors_headers() -> dict:
    origin = "*" if "*" in settings.CORS_ORIGINS else ", ".join(settings.CORS_ORIGINS)
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "*"
    }


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Admissions Configuration API", version="1.0.0")

    # CORS middleware - MUST be added BEFORE routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.LOG_REQUESTS:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} -> "
                        f"{response.status_code} ({elapsed_ms:.1f} ms)")
            return response

    # Health check route BEFORE routers
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    app.include_router(configuration.router, prefix="/api/v1")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions and ensure CORS headers are present"""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}")
        logger.debug(traceback.format_exc())

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": "internal_server_error"
            },
            headers=_cors_headers()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with CORS headers"""
        body = exc.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"detail": exc.errors(), "body": body}),
            headers=_cors_headers()
        )

    return app


app = create_app()
