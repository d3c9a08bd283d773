"""
FastAPI application entry point for the Costa Rica electronic document toolkit
"""
import logging

from fastapi import FastAPI
from pydantic import ValidationError as PydanticValidationError

from facturacr.api.v1.api import api_router
from facturacr.core.config import settings
from facturacr.core.error_handler import error_handler
from facturacr.core.exceptions import FacturaError
from facturacr.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Composes, validates and renders electronic documents compliant with Costa Rica's Ministry of Finance schemas",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_exception_handler(FacturaError, error_handler.handle_exception)
    app.add_exception_handler(PydanticValidationError, error_handler.handle_exception)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    return app


app = create_application()


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "facturacr"}
