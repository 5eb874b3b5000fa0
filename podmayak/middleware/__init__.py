"""
Middleware package for the API.
"""
from podmayak.middleware.logging_middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware, get_request_id

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "get_request_id",
]
