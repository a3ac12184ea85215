"""
ShiftSync - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_db, close_db, async_session_factory
from app.routers import (
    attendance,
    auth,
    employees,
    leaves,
    payroll,
    reports,
    settings as settings_router,
    users,
)
from app.services.organization_service import CompanyService
from app.services.record_store import RecordStore
from app.services.user_service import UserService
from app.utils.error_handling import setup_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def seed_default_users():
    """
    Seed the default admin (and the Creator, when configured) on startup.
    This ensures there's always an account that can sign in.
    """
    async with async_session_factory() as session:
        service = UserService(RecordStore(session))
        try:
            created = await service.seed_default_users()
            logger.info(f"Default users ready ({created} created)")
        except Exception as e:
            logger.warning(f"Could not seed default users: {e}")


async def seed_default_companies():
    """Seed the company list on first start."""
    async with async_session_factory() as session:
        service = CompanyService(RecordStore(session))
        try:
            created = await service.seed_default_companies()
            logger.info(f"Company list ready ({created} seeded)")
        except Exception as e:
            logger.warning(f"Could not seed companies: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Database: {settings.database_url}")

    await init_db()
    logger.info("Database tables ready")

    await seed_default_users()
    await seed_default_companies()

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Attendance, leave and payroll for multi-company staff",
    version="0.1.0",
    docs_url="/api/docs" if settings.is_development else None,
    redoc_url="/api/redoc" if settings.is_development else None,
    openapi_url="/api/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


# ===========================================
# API ROUTES
# ===========================================

@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
        "environment": settings.app_env,
        "api_docs": "/api/docs" if settings.is_development else "disabled",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database": "connected",
    }


app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["Authentication"])
app.include_router(employees.router, prefix=f"{settings.api_prefix}/employees", tags=["Employees"])
app.include_router(attendance.router, prefix=f"{settings.api_prefix}/attendance", tags=["Attendance"])
app.include_router(leaves.router, prefix=f"{settings.api_prefix}/leaves", tags=["Leave Requests"])
app.include_router(payroll.router, prefix=f"{settings.api_prefix}/payroll", tags=["Payroll"])
app.include_router(settings_router.router, prefix=f"{settings.api_prefix}/settings", tags=["Settings"])
app.include_router(users.router, prefix=f"{settings.api_prefix}/users", tags=["Users"])
app.include_router(reports.router, prefix=f"{settings.api_prefix}/reports", tags=["Reports"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=5120,
        reload=settings.is_development,
    )
