"""
┌──────────────────────────────────────────────────────────────┐
│                    Exception Handling Flow                   │
│                                                              │
│  [Error] → [Classify] → [Log] → [Absorb | Propagate]         │
│                                                              │
│  Rebuild: ContributorUnavailable → skipped, never raised     │
│  Render:  RenderWriteError → propagated to the host          │
│  HTTP:    Validation → Not Found                             │
│  HTTP Status: 400 → 404 → 500                                │
└──────────────────────────────────────────────────────────────┘

Exception classes for the theme contributor service
Flow: Error occurrence → Classification → Logging → Absorb or propagate
"""

from typing import Any, Dict, Optional
import structlog

logger = structlog.get_logger()


class ThemeContributorException(Exception):
    """
    Base exception class for the theme contributor service.
    
    Features:
    - Structured error context
    - HTTP status code mapping
    - Optional error codes
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        """Initialize base exception."""
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        
        logger.error(
            "Theme contributor exception occurred",
            error_type=self.__class__.__name__,
            message=message,
            error_code=error_code,
            status_code=status_code,
            details=details
        )


class ContributorUnavailableError(ThemeContributorException):
    """
    A contributor went away between being read from the registry and
    having its resource paths fetched.
    
    Raised by contributor handles; the registry absorbs it and leaves the
    contributor out of the rebuild pass.
    """
    
    def __init__(
        self,
        message: str,
        contributor_id: Optional[str] = None,
        error_code: str = "CONTRIBUTOR_UNAVAILABLE"
    ):
        """Initialize contributor unavailable error."""
        details = {}
        if contributor_id:
            details["contributor_id"] = contributor_id
        
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=503
        )
        self.contributor_id = contributor_id


class RenderWriteError(ThemeContributorException):
    """
    Writing markup to the response stream failed (e.g. client went away).
    
    Request scoped: not retried and never touches registry state.
    """
    
    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        error_code: str = "RENDER_WRITE_FAILED"
    ):
        """Initialize render write error."""
        details = {}
        if url:
            details["url"] = url
        
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=500
        )
        self.url = url


class ValidationError(ThemeContributorException):
    """Validation error for control plane input."""
    
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        error_code: str = "VALIDATION_ERROR"
    ):
        """Initialize validation error."""
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = str(value)
            
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=400
        )
        self.field = field
        self.value = value


class NotFoundError(ThemeContributorException):
    """Resource not found error."""
    
    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        error_code: str = "NOT_FOUND"
    ):
        """Initialize not found error."""
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
            
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=404
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
