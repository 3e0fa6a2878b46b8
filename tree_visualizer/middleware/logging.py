"""
Request logging middleware.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from tree_visualizer.utils.logging import get_logger, log_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with its status, duration and correlation id."""
    
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        
        try:
            response = await call_next(request)
        except Exception as e:
            log_request(
                logger,
                method=request.method,
                path=request.url.path,
                duration_ms=(time.perf_counter() - started) * 1000,
                request_id=request_id,
                error=str(e),
            )
            raise
        
        log_request(
            logger,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
            request_id=request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
