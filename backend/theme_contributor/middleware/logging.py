"""
Request logging middleware
Flow: request → bind request_id → route (registry / render logs inherit it) → log outcome → clear
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from theme_contributor.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds a request id into the log context and logs each request once it completes."""
    
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse the id of an upstream proxy when it sent one
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        bind_request_context(request_id, method=request.method, path=request.url.path)
        
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed",
                             duration_ms=round((time.perf_counter() - start_time) * 1000, 2))
            clear_request_context()
            raise
        
        # Theme fragments are the hot path; record how much markup went out
        logger.info(
            "Request completed",
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            content_length=response.headers.get("content-length"),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        
        response.headers[REQUEST_ID_HEADER] = request_id
        clear_request_context()
        
        return response
