import logging
import time

from fastapi import Request

from core.logging.providers import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


async def access_log_middleware(request: Request, call_next):
    """
    Log every handled request with its route and duration.

    Parameters
    ----------
    request : Request
        Incoming request
    call_next : Callable
        Next ASGI handler in the chain

    Returns
    -------
    Response
        Response produced by the route
    """
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    endpoint = request.scope.get("endpoint")
    handler_name = getattr(endpoint, "__name__", "-")

    logger.info(
        f"Route accessed: {request.method} {request.url.path} "
        f"handler={handler_name} status={response.status_code} duration={duration_ms:.1f}ms"
    )
    return response
