"""
API router aggregation for v1 endpoints
"""
from fastapi import APIRouter

from facturacr.api.v1.endpoints import documents, reference_data
from facturacr.core.config import settings

api_router = APIRouter()

api_router.include_router(documents.router)
api_router.include_router(reference_data.router)


@api_router.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": "/docs"
    }
