"""
Request logging middleware.

Each request gets a short id, bound into structlog's context so every log
line written while handling it (and every generation job it starts)
carries `request_id`. The id is echoed in the X-Request-ID header.
"""
import logging
import time
import uuid
from typing import Callable, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


def get_request_id() -> Optional[str]:
    """Request id bound for the current context, if any"""
    return structlog.contextvars.get_contextvars().get("request_id")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds a request id and logs each request with its status and timing"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        method, path = request.method, request.url.path
        client_host = request.client.host if request.client else None
        start_time = time.perf_counter()
        logger.info(f"→ {method} {path}", extra={"method": method, "path": path, "client": client_host})

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000)
            logger.exception(
                f"✗ {method} {path} failed: {str(e)[:100]}",
                extra={"method": method, "path": path, "duration_ms": duration_ms},
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000)
        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            f"← {response.status_code} {method} {path}",
            extra={"status_code": response.status_code, "duration_ms": duration_ms},
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
