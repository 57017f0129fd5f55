import structlog
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from servicehours.services.exceptions import ServiceError

logger = structlog.get_logger(__name__)


def http_error_from_service(err: ServiceError) -> HTTPException:
    return HTTPException(
        status_code=err.status_code,
        detail={"code": err.code, "message": err.message},
    )


async def service_error_handler(request: Request, err: ServiceError) -> JSONResponse:
    http_err = http_error_from_service(err)
    logger.info(
        "request_rejected",
        method=request.method,
        path=request.url.path,
        status=http_err.status_code,
        code=err.code,
    )
    return JSONResponse(status_code=http_err.status_code, content={"detail": http_err.detail})
