from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.services.errors import InternalFailure, ServiceError
from app.utils.logger import logger


def _error_response(status_code: int, code: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "code": code})


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        # never leak internals
        return _error_response(exc.status_code, exc.code, InternalFailure.default_detail())
    return _error_response(exc.status_code, exc.code, exc.detail)


async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} storage failure: {exc}", exc_info=exc)
    return _error_response(InternalFailure.status_code, InternalFailure.code, InternalFailure.default_detail())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)
