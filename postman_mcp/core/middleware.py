"""
Request middleware for the Postman MCP HTTP transport.

One middleware wraps every request: it assigns the correlation id, times
the call, logs start and completion, and turns exceptions the app did not
handle into a 500 error envelope.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .exceptions import PostmanMCPException

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def internal_error_response(correlation_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "type": "internal_server_error",
                "message": "An unexpected error occurred",
                "correlation_id": correlation_id
            }
        }
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Correlation ids, timing and access logging for each HTTP request.

    An incoming ``X-Correlation-ID`` is reused, otherwise a new one is
    generated; it is stored on ``request.state`` and echoed on the response
    together with ``X-Process-Time``. ``PostmanMCPException`` is left to the
    app's exception handler.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        context = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
        }

        logger.info(
            f"{request.method} {request.url.path}",
            extra={**context, "client_ip": request.client.host if request.client else None}
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except PostmanMCPException:
            raise
        except Exception as exc:
            logger.error(
                f"Unhandled {type(exc).__name__} for {request.method} {request.url.path}",
                exc_info=True,
                extra=context
            )
            response = internal_error_response(correlation_id)

        elapsed = round(time.perf_counter() - started, 4)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={**context, "status_code": response.status_code, "process_time": elapsed}
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Process-Time"] = str(elapsed)
        return response
