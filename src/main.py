"""
Module: main.py
Description: FastAPI application entry point for the webhooks service.

Initializes the FastAPI application with all routes, middleware,
and error handlers for the webhook dispatch API.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from handlers.webhooks import router as webhooks_router
from config.settings import settings
from utils.logger import configure_logging, get_logger

configure_logging(settings.log_level)
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Outbound webhook dispatch API",
    version=settings.app_version,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(webhooks_router)


def error_response(status_code: int, message, error_type: str, headers=None) -> JSONResponse:
    """Render the structured error body shared by all handlers."""
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "error": {
                "code": status_code,
                "message": message,
                "type": error_type
            }
        }
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.info("Health check requested")

    return {
        "status": "ok",
        "message": "Webhooks API is healthy",
        "version": settings.app_version,
        "environment": settings.stage
    }


# Global exception handlers
# Starlette base class also covers routing 404/405 errors
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Log HTTP exceptions and return structured error responses."""
    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )

    return error_response(exc.status_code, exc.detail, "http_exception", headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return request validation failures in the structured error format."""
    logger.warning(
        "Request validation failed",
        errors=len(exc.errors()),
        path=request.url.path,
        method=request.method
    )

    return error_response(
        422,
        "Request validation failed",
        "validation_error"
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log unexpected exceptions and return a generic error response."""
    logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method
    )

    return error_response(500, "Internal server error", "internal_error")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Application startup event handler."""
    logger.info(
        "Starting webhooks API",
        version=settings.app_version,
        stage=settings.stage,
        region=settings.aws_region,
        queue_name=settings.webhooks_queue_name
    )


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event handler."""
    logger.info("Shutting down webhooks API")


# Lambda handler
handler = Mangum(app, lifespan="off")
