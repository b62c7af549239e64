"""
Advanced panel API endpoints.

The panel is built from the primary-filtered subset. Checkbox changes stay in
the panel until it is applied; applying replaces the committed advanced
selection.
"""
from fastapi import APIRouter, Depends

from .dependencies import get_feat_service, http_error
from ..core.exceptions import FeatExplorerException
from ..models.schemas import AdvancedPanelResponse, ErrorResponse, FeatsResponse, PanelControlRequest
from ..services.feat_service import FeatService
from ..utils.logger import setup_logger

router = APIRouter(prefix="/advanced")
logger = setup_logger("advanced-api")

_ERRORS = {
    404: {"model": ErrorResponse, "description": "Unknown panel control"},
    409: {"model": ErrorResponse, "description": "Advanced panel is not open"},
    503: {"model": ErrorResponse, "description": "Catalog not loaded"},
}


@router.get("/options", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def get_advanced_options(service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    """Panel options for the current primary scope, without checkbox state."""
    try:
        return service.panel_view(options=service.advanced_options())
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/open", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def open_panel(service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    try:
        panel = service.open_panel()
        return service.panel_view(panel=panel)
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/parent", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def set_parent(request: PanelControlRequest,
                     service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    """Check or uncheck a parent trait; every child in its cluster follows."""
    try:
        panel = service.require_panel()
        key = str(request.key)
        if request.checked is None:
            panel.toggle_parent(key)
        else:
            panel.set_parent(key, request.checked)
        return service.panel_view(panel=panel)
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/child", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def set_child(request: PanelControlRequest,
                    service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    """Check or uncheck one feat; its parent is checked iff all siblings are."""
    try:
        panel = service.require_panel()
        if request.checked is None:
            panel.toggle_child(request.key)
        else:
            panel.set_child(request.key, request.checked)
        return service.panel_view(panel=panel)
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/spell-level", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def set_spell_level(request: PanelControlRequest,
                          service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    try:
        panel = service.require_panel()
        key = str(request.key)
        if request.checked is None:
            panel.toggle_spell_level(key)
        else:
            panel.set_spell_level(key, request.checked)
        return service.panel_view(panel=panel)
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/feature-level", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def set_feature_level(request: PanelControlRequest,
                            service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    try:
        panel = service.require_panel()
        key = str(request.key)
        if request.checked is None:
            panel.toggle_feature_level(key)
        else:
            panel.set_feature_level(key, request.checked)
        return service.panel_view(panel=panel)
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/clear", response_model=AdvancedPanelResponse, responses=_ERRORS)
async def clear_panel(service: FeatService = Depends(get_feat_service)) -> AdvancedPanelResponse:
    """Uncheck every panel control without touching the committed selection."""
    try:
        panel = service.clear_panel()
        return service.panel_view(panel=panel)
    except FeatExplorerException as e:
        raise http_error(e)


@router.post("/panel/apply", response_model=FeatsResponse, responses=_ERRORS)
async def apply_panel(service: FeatService = Depends(get_feat_service)) -> FeatsResponse:
    """Commit the panel's checked controls and return the new result set."""
    try:
        service.apply_panel()
        logger.info("Applied advanced panel selections")
        return service.feats_view()
    except FeatExplorerException as e:
        raise http_error(e)
