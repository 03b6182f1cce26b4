"""Domain errors and the handlers that render them as JSON responses.

Services and routers raise these; `register_exception_handlers` maps each one
to its status code with a `{"message": ...}` body.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("noteful.errors")


class NotefulError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(NotefulError):
    """Payload is structurally wrong (missing field, malformed id)."""

    status_code = 400


class AuthorizationError(NotefulError):
    """A well-formed reference points at something the caller does not own."""

    status_code = 401


class AuthenticationError(NotefulError):
    status_code = 401


class NotFoundError(NotefulError):
    # also used for records owned by someone else (no existence leak)
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class ConflictError(NotefulError):
    status_code = 400


class RegistrationError(NotefulError):
    status_code = 422

    def __init__(self, message: str, location: str):
        super().__init__(message)
        self.location = location

    def to_body(self) -> dict[str, Any]:
        return {"reason": "ValidationError", "message": self.message, "location": self.location}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotefulError)
    async def _domain_handler(request: Request, exc: NotefulError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def _http_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail or "HTTP error"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content={"message": "Validation error", "errors": jsonable_encoder(exc.errors())})

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error method=%s path=%s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
