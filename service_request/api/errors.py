"""Translate domain errors into JSON responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from service_request.errors import (
    InvalidCredentials,
    NotFound,
    NotifyError,
    ServiceRequestError,
    StoreUnavailable,
    Unauthenticated,
    ValidationError,
)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": exc.message, "missing": exc.missing})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request.", "errors": jsonable_encoder(exc.errors())},
    )


async def _invalid_credentials(request: Request, exc: InvalidCredentials) -> JSONResponse:
    return JSONResponse(status_code=401, content={"message": exc.message})


async def _unauthenticated(request: Request, exc: Unauthenticated) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


async def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": exc.message})


async def _notify_error(request: Request, exc: NotifyError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": exc.message, "error": exc.diagnostic})


async def _store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": exc.message})


async def _service_error(request: Request, exc: ServiceRequestError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(InvalidCredentials, _invalid_credentials)
    app.add_exception_handler(Unauthenticated, _unauthenticated)
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(NotifyError, _notify_error)
    app.add_exception_handler(StoreUnavailable, _store_unavailable)
    app.add_exception_handler(ServiceRequestError, _service_error)


__all__ = ["register_exception_handlers"]
