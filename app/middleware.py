# app/middleware.py

import logging
import time

from fastapi import Request

from app.errors import unhandled_error_handler

logger = logging.getLogger("app.http")


async def log_requests(request: Request, call_next):
    """
    Log each request and its outcome with the time it took. Unexpected
    errors are answered here so the 500 body passes back through CORS.
    """
    method = request.method
    path = request.url.path
    query = request.url.query

    logger.info("[REQUEST] %s %s%s", method, path, f"?{query}" if query else "")
    start = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.error("[ERROR] %s %s - Duration: %.0fms - Error: %s", method, path, duration_ms, e)
        return await unhandled_error_handler(request, e)

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[RESPONSE] %s %s - Status: %s - Duration: %.0fms",
        method,
        path,
        response.status_code,
        duration_ms,
    )
    return response
