"""Exception handlers: every failure leaves as {"kind", "message", ...}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from dossier.core.errors import CredentialIntegrityError, DossierError

logger = logging.getLogger(__name__)

SERVER_ERROR_BODY = {"kind": "ServerError", "message": "Internal server error"}


def _http_error_kind(status_code: int) -> str:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return "Unauthenticated"
    if status_code == status.HTTP_403_FORBIDDEN:
        return "Forbidden"
    if status_code == status.HTTP_404_NOT_FOUND:
        return "NotFound"
    if status_code == status.HTTP_409_CONFLICT:
        return "Conflict"
    return "HttpError"


async def dossier_error_handler(request: Request, exc: DossierError) -> JSONResponse:
    """Expected domain failures carry their own status and structured body."""
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def integrity_error_handler(request: Request, exc: CredentialIntegrityError) -> JSONResponse:
    """Dangling bindings are data corruption: log loudly, answer with a generic 500."""
    logger.error(
        "Data integrity failure on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=SERVER_ERROR_BODY,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": _http_error_kind(exc.status_code), "message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters are rejected before reaching the services."""
    errors = [
        {
            "field": ".".join(str(item) for item in err.get("loc", []) if item != "body"),
            "message": err.get("msg"),
            "type": err.get("type"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"kind": "ValidationError", "message": "Invalid request data", "errors": errors},
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=SERVER_ERROR_BODY,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all handlers. Lookup follows the exception MRO, so subclasses win."""
    app.add_exception_handler(CredentialIntegrityError, integrity_error_handler)
    app.add_exception_handler(DossierError, dossier_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
