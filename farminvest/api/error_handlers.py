"""Error Handlers: global exception handlers for the FarmInvest API.

Invariants:
    - FarmInvestError → its own envelope and http_status
    - RequestValidationError → 400 with one message per failing field
    - Starlette HTTP errors → {"error": ...}; 404 is always "Route not found"
    - Exception (catch-all) → 500; message only when expose_internal is set

Design Decisions:
    - Four-layer handler: domain, validation (Pydantic), HTTP, catch-all
    - expose_internal captured at registration: the app that owns the
      handlers decides, no settings lookup per request
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from farminvest.core.errors import (
    FarmInvestError, InvestmentValidationError, RouteNotFoundError,
)
from farminvest.core.validation import FieldViolation, collect_violations
from farminvest.schemas.investment import INVESTMENT_FIELD_ERROR

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, expose_internal: bool) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app, expose_internal)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app, expose_internal)


def _register_domain_error_handler(app: FastAPI, expose_internal: bool) -> None:

    @app.exception_handler(FarmInvestError)
    async def farminvest_error_handler(request: Request, exc: FarmInvestError):
        """Handle all FarmInvest domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"FarmInvestError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(expose_details=expose_internal),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors with the investment envelope."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        error = InvestmentValidationError(to_violations(exc.errors()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Route misses become 404 "Route not found"; others keep their detail."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = RouteNotFoundError(request.url.path).to_response()
        else:
            content = {"error": exc.detail}
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI, expose_internal: bool) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; the exception text is only sent outside production."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        content = {"error": "Internal server error"}
        if expose_internal:
            content["message"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )


def to_violations(errors: list[dict]) -> list[FieldViolation]:
    """Map Pydantic error dicts to FieldViolations, keeping our own messages."""
    violations = []
    for e in errors:
        if e["type"] == "missing" and tuple(e["loc"]) == ("body",):
            # No body at all: every field is missing
            violations.extend(collect_violations({}))
            continue
        loc = [str(part) for part in e["loc"] if part != "body"]
        field = loc[-1] if loc else "body"
        if e["type"] == "json_invalid":
            # loc carries a character offset, not a field
            field = "body"
        if e["type"] == INVESTMENT_FIELD_ERROR:
            message = e["msg"]
        else:
            message = f"{field}: {e['msg']}"
        violations.append(FieldViolation(field, message))
    return violations
