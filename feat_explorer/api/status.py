"""
Status API endpoints for system monitoring.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any

from .dependencies import get_feat_service
from ..models.schemas import StatusResponse, HealthResponse
from ..services.feat_service import FeatService

router = APIRouter()


@router.get("/status/", response_model=StatusResponse)
async def get_status(service: FeatService = Depends(get_feat_service)) -> Dict[str, Any]:
    """Report whether the catalog is loaded and how many feats it holds."""
    if not service.is_ready:
        return {
            "status": "no_data",
            "catalog_loaded": False,
            "feat_count": 0,
            "error": service.load_error.to_dict() if service.load_error else None,
        }
    return {
        "status": "ready",
        "catalog_loaded": True,
        "feat_count": len(service.catalog),
        "result_count": len(service.current_result().results),
    }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
