"""
Domain Exception Handler.

Converts :class:`SlumberingAncientsError` subclasses raised by services into
``{"success": false, "error": ...}`` responses with the status code the error
declares.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from slumbering_ancients.core.errors import SlumberingAncientsError, UpstreamServiceError
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.monitoring import log_error

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: SlumberingAncientsError) -> JSONResponse:
    """
    Answer a domain error raised while handling ``request``.

    Client errors are logged as warnings, server and upstream errors as errors.
    """
    context = {"method": request.method, "path": request.url.path, **exc.details}
    if isinstance(exc, UpstreamServiceError) and exc.upstream_status is not None:
        context["upstream_status"] = exc.upstream_status

    if exc.status_code < 500:
        logger.warning(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    else:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}", extra=context)
        log_error(type(exc).__name__, exc.message, context)

    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})
