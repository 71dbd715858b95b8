# File: landpro/core/errors.py

"""
Error taxonomy for the LandPro API.

Every error raised by the service layer derives from ``LandProError`` and
carries the HTTP status and a stable machine-readable ``code``. The handlers
registered by ``register_exception_handlers`` render all of them as
``{"error": <message>, "code": <code>}``; nothing else crosses the HTTP
boundary, tracebacks included.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from landpro.core.config import settings

logger = logging.getLogger("landpro.errors")


class LandProError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------- configuration ----------

class ConfigurationError(LandProError):
    code = "configuration_error"
    default_message = "Service not configured"


# ---------- upstream (LLM / payment provider) ----------

class UpstreamRateLimitError(LandProError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"
    default_message = "Rate limit exceeded. Please try again later."


class UpstreamPaymentRequiredError(LandProError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    code = "payment_required"
    default_message = "AI credits exhausted. Please add funds to continue."


class UpstreamError(LandProError):
    code = "upstream_error"
    default_message = "Upstream service request failed"


class ResponseParseError(LandProError):
    code = "parse_failure"
    default_message = "Failed to parse the AI response. Please try again."


# ---------- webhook ----------

class SignatureVerificationError(LandProError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_signature"
    default_message = "Webhook signature verification failed"


# ---------- data access ----------

class BadRequestError(LandProError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_request"
    default_message = "Invalid request"


class NotFoundError(LandProError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class PermissionDeniedError(LandProError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Permission denied"


class AuthenticationError(LandProError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    default_message = "Not authenticated"


class ConflictError(LandProError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "The record was modified by someone else. Reload and try again."


class InvalidTransitionError(ConflictError):
    code = "invalid_transition"
    default_message = "Invalid status transition"


def error_body(message: str, code: str) -> dict:
    return {"error": message, "code": code}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LandProError)
    async def _landpro_error(request: Request, exc: LandProError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.code),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        # Functions speak the {error} dialect; the REST API keeps FastAPI's 422.
        if not request.url.path.startswith(settings.functions_prefix):
            return await request_validation_exception_handler(request, exc)
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg', 'invalid value')}" if field else "Invalid request body"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(message, "invalid_request"),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "internal_error"),
        )
