import time
import structlog
from fastapi import Request

logger = structlog.get_logger("api_requests")


async def log_api_request(request: Request, call_next):
    """Logs every request once the response is ready, so the status code is known."""
    started = time.perf_counter()
    response = await call_next(request)

    logger.info(
        "api_request",
        method=request.method,
        url=str(request.url),
        ip=request.client.host if request.client else None,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response
