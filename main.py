import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import create_db_engine, create_session_factory
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import setup_logging
from app.api.endpoints import applications, auth, health, jobs, otp, profiles, skills
from app.services.email_service import EmailService

setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Builds the database engine and the email service once; they are handed
    to endpoints through dependencies for the life of the process.
    """
    # Startup
    logger.info("Starting up ConnectHire API...")
    engine = create_db_engine(settings.DATABASE_URL)
    app.state.session_factory = create_session_factory(engine)
    app.state.email_service = EmailService()
    logger.info(f"Connected to database at {settings.POSTGRES_SERVER}:{settings.POSTGRES_PORT}/{settings.POSTGRES_DB}")

    yield

    # Shutdown
    logger.info("Shutting down ConnectHire API...")
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Job board connecting developers with employers",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(otp.router, prefix=settings.API_PREFIX)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(profiles.router, prefix=settings.API_PREFIX)
app.include_router(jobs.router, prefix=settings.API_PREFIX)
app.include_router(applications.router, prefix=settings.API_PREFIX)
app.include_router(skills.router, prefix=settings.API_PREFIX)
app.include_router(health.router, prefix=settings.API_PREFIX)

if settings.DEBUG_ENDPOINTS_ENABLED:
    app.include_router(health.diagnostics_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint - API banner"""
    return {
        "message": "ConnectHire API",
        "version": "1.0.0",
        "status": "healthy"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level="info"
    )
