"""
Filter API endpoints: sidebar facets, results and active filter pills.
"""
from fastapi import APIRouter, Depends
from typing import List

from .dependencies import get_feat_service, http_error
from ..core.exceptions import FeatExplorerException
from ..models.schemas import (
    ActiveFilterItem,
    ErrorResponse,
    FacetsResponse,
    FeatsResponse,
    RemoveFilterRequest,
    ToggleFilterRequest,
)
from ..services.feat_service import FeatService
from ..utils.logger import setup_logger

router = APIRouter()
logger = setup_logger("filters-api")

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Unknown facet"},
    503: {"model": ErrorResponse, "description": "Catalog not loaded"},
}


@router.get("/facets/", response_model=FacetsResponse, responses=_ERRORS)
async def get_facets(service: FeatService = Depends(get_feat_service)) -> FacetsResponse:
    """Options offered for Type, Ancestry, Class and Tier over the whole catalog."""
    try:
        return FacetsResponse(facets=service.facets().as_dict())
    except FeatExplorerException as e:
        raise http_error(e)


@router.get(
    "/feats/",
    response_model=FeatsResponse,
    summary="Current result set",
    description="Feats that pass the primary, tier and advanced stages, in catalog order.",
    responses=_ERRORS,
)
async def get_feats(service: FeatService = Depends(get_feat_service)) -> FeatsResponse:
    try:
        return service.feats_view()
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/filters/toggle", response_model=FeatsResponse, responses=_ERRORS)
async def toggle_filter(request: ToggleFilterRequest,
                        service: FeatService = Depends(get_feat_service)) -> FeatsResponse:
    """Select, deselect (when ``selected`` is given) or flip one sidebar value."""
    try:
        service.set_primary(request.facet, request.value, request.selected)
        return service.feats_view()
    except FeatExplorerException as e:
        logger.warning(f"Rejected filter toggle: {e.message}")
        raise http_error(e)


@router.post("/filters/reset", response_model=FeatsResponse, responses=_ERRORS)
async def reset_filters(service: FeatService = Depends(get_feat_service)) -> FeatsResponse:
    """Clear every sidebar and advanced selection."""
    try:
        service.reset()
        return service.feats_view()
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/filters/advanced/clear", response_model=FeatsResponse, responses=_ERRORS)
async def clear_advanced_filters(service: FeatService = Depends(get_feat_service)) -> FeatsResponse:
    """Clear only the committed advanced selections."""
    try:
        service.clear_advanced()
        return service.feats_view()
    except FeatExplorerException as e:
        raise http_error(e)


@router.get("/filters/active", response_model=List[ActiveFilterItem])
async def get_active_filters(service: FeatService = Depends(get_feat_service)) -> List[ActiveFilterItem]:
    return [ActiveFilterItem(facet=p.facet, value=p.value, label=p.label) for p in service.active_filters()]


@router.delete(
    "/filters/active",
    response_model=FeatsResponse,
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Filter not active"}},
)
async def remove_active_filter(request: RemoveFilterRequest,
                               service: FeatService = Depends(get_feat_service)) -> FeatsResponse:
    """Remove one pill: clears exactly that selection and recomputes."""
    try:
        service.remove_filter(request.facet, request.value)
        return service.feats_view()
    except FeatExplorerException as e:
        raise http_error(e)
