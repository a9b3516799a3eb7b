"""
Performance Report Renderer - FastAPI Application Entry Point
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from perf_report.config import settings
from perf_report.api.v1.endpoints import health, report
from perf_report.logger import logger

# Create app
app = FastAPI(
    title=settings.APP_NAME,
    description="Renders the performance section of Lighthouse reports",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(report.router, prefix="/api/v1/report")

logger.info(f"Starting {settings.APP_NAME}...")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs"
    }
