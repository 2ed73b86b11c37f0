"""
AvoTrace - FastAPI Backend
Main application entry point
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
import logging
import traceback

from avotrace.api.v1.endpoints import admin, logistics, stats, traceability
from avotrace.core.config import settings
from avotrace.core.database import engine, init_db
from avotrace.core.exceptions import AvoTraceError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    if settings.AUTO_CREATE_TABLES:
        init_db()
        logger.info("Database tables checked")
    yield
    try:
        logger.info("Closing database connection pool...")
        engine.dispose()
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Backend API for AvoTrace - avocado lot traceability from harvest to delivery",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# PDF reports and lot lists compress well
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.exception_handler(AvoTraceError)
async def domain_error_handler(request: Request, exc: AvoTraceError):
    """Domain errors carry their own status code"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_type} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_type} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Invalid request data", "error_type": "validation_error", "errors": errors},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Constraint violations not caught by a service check (concurrent writers)"""
    error_msg = str(exc.orig) if hasattr(exc, 'orig') else str(exc)
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {error_msg}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "The request conflicts with existing data", "error_type": "conflict"},
    )


@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    """Handle database connection errors"""
    error_msg = str(exc.orig) if hasattr(exc, 'orig') else str(exc)
    logger.error(f"Database operational error: {error_msg}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Database unavailable. The service may be temporarily down.",
            "error_type": "database_error",
        }
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions with traceback and return a generic 500"""
    tb = traceback.format_exc()
    logger.error(f"Unhandled exception: {exc}\n{tb}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_type": "internal_error",
        }
    )


# Include routers
app.include_router(traceability.router, prefix="/api")
app.include_router(logistics.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(stats.router, prefix="/api")


@app.get("/")
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Liveness probe, no database round-trip"""
    return {
        "status": "healthy",
        "service": "avotrace-api",
        "version": settings.APP_VERSION
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Health check with database connectivity test"""
    from sqlalchemy import text

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "service": "avotrace-api",
            "database": "connected"
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "service": "avotrace-api",
                "database": "disconnected",
                "error": str(e)
            }
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
