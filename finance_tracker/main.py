# finance_tracker/main.py
import uvicorn
import os
import logging
from datetime import datetime
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from finance_tracker.core.config import settings
from finance_tracker.core.database import AsyncSessionLocal, create_db_and_tables
from finance_tracker.crud.category import seed_default_categories
from finance_tracker.models import budget, category, expense, savings, user  # noqa: F401 (register tables)
from finance_tracker.api.v1.routes import (
    budgets,
    categories,
    dashboard,
    expenses,
    savings as savings_routes,
    users,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    openapi_tags=[
        {"name": "dashboard", "description": "Monthly spending dashboard and admin statistics"},
        {"name": "budgets", "description": "Monthly budgets and their live status"},
        {"name": "savings", "description": "Savings goals and their deposit/withdraw ledger"},
        {"name": "User Management", "description": "User profile and admin user operations"},
    ],
)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",  # Local development
    "http://localhost:3001",  # Backup local port
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for better error responses"""
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint, including a database round trip"""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail=f"Service unhealthy: {str(e)}")

    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(users.router, prefix="/api/v1")
app.include_router(categories.router, prefix="/api/v1")
app.include_router(expenses.router, prefix="/api/v1")
app.include_router(budgets.router, prefix="/api/v1")
app.include_router(savings_routes.router, prefix="/api/v1")
app.include_router(dashboard.router, prefix="/api/v1")

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Create database tables and seed the default categories"""
    await create_db_and_tables()
    logger.info("✅ Database tables created successfully")
    logger.info(f"✅ Frontend URL: {settings.FRONTEND_URL}")

    if settings.SEED_DEFAULT_CATEGORIES:
        async with AsyncSessionLocal() as session:
            await seed_default_categories(session)

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("finance_tracker.main:app", host="0.0.0.0", port=port, reload=False)
