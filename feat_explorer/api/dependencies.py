"""
Shared helpers for API routers.
"""
from fastapi import HTTPException, Request

from ..core.exceptions import ErrorCode, FeatExplorerException
from ..services.feat_service import FeatService

_STATUS_CODES = {
    ErrorCode.CATALOG_NOT_LOADED: 503,
    ErrorCode.UNKNOWN_FACET: 400,
    ErrorCode.FILTER_NOT_ACTIVE: 404,
    ErrorCode.PANEL_NOT_OPEN: 409,
    ErrorCode.UNKNOWN_PANEL_OPTION: 404,
}


def get_feat_service(request: Request) -> FeatService:
    """Return the session's service attached to the application."""
    return request.app.state.feat_service


def http_error(e: FeatExplorerException) -> HTTPException:
    """Translate a domain exception into an HTTPException."""
    return HTTPException(status_code=_STATUS_CODES.get(e.error_code, 500), detail=e.to_dict())
