"""
Middleware package exports.
"""

from middleware.request_id import RequestIDMiddleware, RequestIDFilter, get_request_id

__all__ = ["RequestIDMiddleware", "RequestIDFilter", "get_request_id"]
