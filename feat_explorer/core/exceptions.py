"""
Custom exception classes for Feat Explorer.
Provides structured error handling with proper error codes and messages.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(Enum):
    """Error codes for different types of failures."""

    # Catalog errors
    CATALOG_NOT_FOUND = "CATALOG_NOT_FOUND"
    CATALOG_PARSE_FAILED = "CATALOG_PARSE_FAILED"
    CATALOG_MALFORMED = "CATALOG_MALFORMED"
    DUPLICATE_FEAT_ID = "DUPLICATE_FEAT_ID"
    CATALOG_NOT_LOADED = "CATALOG_NOT_LOADED"

    # Filter errors
    UNKNOWN_FACET = "UNKNOWN_FACET"
    FILTER_NOT_ACTIVE = "FILTER_NOT_ACTIVE"

    # Advanced panel errors
    PANEL_NOT_OPEN = "PANEL_NOT_OPEN"
    UNKNOWN_PANEL_OPTION = "UNKNOWN_PANEL_OPTION"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class FeatExplorerException(Exception):
    """Base exception class for Feat Explorer."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.original_exception = original_exception
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class CatalogLoadError(FeatExplorerException):
    """Raised when the feat catalog cannot be read or is fundamentally broken."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        catalog_path: Optional[str] = None,
        record_index: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.get("details", {})
        if catalog_path:
            details["catalog_path"] = catalog_path
        if record_index is not None:
            details["record_index"] = record_index
        kwargs["details"] = details
        super().__init__(message, error_code, **kwargs)


class CatalogNotLoadedError(FeatExplorerException):
    """Raised when a filter operation is attempted before the catalog is available."""

    def __init__(self, message: str = "No data: the feat catalog is not loaded", **kwargs):
        super().__init__(message, ErrorCode.CATALOG_NOT_LOADED, **kwargs)


class FilterValidationError(FeatExplorerException):
    """Raised when a filter mutation names an unknown facet or inactive value."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        facet: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        details = kwargs.get("details", {})
        if facet:
            details["facet"] = facet
        if value is not None:
            details["value"] = str(value)
        kwargs["details"] = details
        super().__init__(message, error_code, **kwargs)


class PanelSelectionError(FeatExplorerException):
    """Raised when the advanced panel is asked to change a control it does not have."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_PANEL_OPTION,
        control: Optional[str] = None,
        key: Optional[Any] = None,
        **kwargs
    ):
        details = kwargs.get("details", {})
        if control:
            details["control"] = control
        if key is not None:
            details["key"] = str(key)
        kwargs["details"] = details
        super().__init__(message, error_code, **kwargs)
