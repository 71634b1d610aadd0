"""
Request logging middleware for structured logging with correlation IDs.

Provides request/response logging with processing times.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request/response logging.

    Adds correlation IDs to all requests and logs request outcome and
    timing for monitoring and debugging.
    """

    def __init__(self, app):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = structlog.get_logger()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and response with structured logging.

        Args:
            request: FastAPI request object
            call_next: Next middleware/endpoint in chain

        Returns:
            Response: HTTP response
        """
        correlation_id = request.headers.get('X-Correlation-ID') or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        logger = self.logger.bind(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )

        start_time = time.time()
        logger.info("Request started")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                processing_time_ms=round((time.time() - start_time) * 1000, 2),
                exc_info=True,
            )
            raise

        response.headers['X-Correlation-ID'] = correlation_id
        logger.info(
            "Request completed",
            status_code=response.status_code,
            processing_time_ms=round((time.time() - start_time) * 1000, 2),
        )
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request."""
        # Proxies put the original client first
        forwarded_for = request.headers.get('X-Forwarded-For')
        if forwarded_for:
            return forwarded_for.split(',')[0].strip()

        real_ip = request.headers.get('X-Real-IP')
        if real_ip:
            return real_ip

        return request.client.host if request.client else 'unknown'


def get_correlation_id(request: Request) -> str:
    """
    Extract correlation ID from request.

    Args:
        request: FastAPI request object

    Returns:
        str: Correlation ID
    """
    if hasattr(request.state, 'correlation_id'):
        return request.state.correlation_id

    return request.headers.get('X-Correlation-ID', 'unknown')


def get_request_logger(request: Request) -> structlog.BoundLogger:
    """
    Get logger bound with request context.

    Args:
        request: FastAPI request object

    Returns:
        structlog.BoundLogger: Logger with request context
    """
    return structlog.get_logger().bind(
        correlation_id=get_correlation_id(request),
        method=request.method,
        path=request.url.path,
    )
