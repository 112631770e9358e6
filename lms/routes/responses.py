"""JSON bodies shared by all routes."""
from fastapi.responses import JSONResponse

from ..app_logger import get_logger
from ..errors import ServiceError

logger = get_logger("routes")

INTERNAL_ERROR = ServiceError()


def error_body(error: ServiceError) -> dict:
    return {"code": error.status_code, "message": error.message}


def error_response(error: Exception) -> JSONResponse:
    """Map an exception to its fixed status code and message.

    Known service errors keep their own mapping; everything else is
    logged and hidden behind a generic 500.
    """
    if not isinstance(error, ServiceError) or type(error) is ServiceError:
        logger.error("Unhandled error: %s", error, exc_info=error)
        error = INTERNAL_ERROR
    return JSONResponse(status_code=error.status_code, content=error_body(error))
