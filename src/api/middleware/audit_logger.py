"""
Audit Logging Middleware

Logs every UI request with HTTP method, path, response status and duration.
"""

import logging
import time
from fastapi import Request

# Create dedicated audit logger
logger = logging.getLogger("audit")


async def audit_log_middleware(request: Request, call_next):
    """
    Audit logging middleware

    Logs all UI requests with:
    - HTTP method (GET, POST)
    - Request path
    - Response status code
    - Duration in milliseconds
    """
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.info(
        f"UI Request | "
        f"Method: {request.method} | "
        f"Path: {request.url.path} | "
        f"Status: {response.status_code} | "
        f"Duration: {elapsed_ms:.1f}ms"
    )

    return response
