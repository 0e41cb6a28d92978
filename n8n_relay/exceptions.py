"""Relay error kinds and the JSON envelope they are rendered into."""

from typing import Any, Optional, Union

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from n8n_relay.logging_config import log_structured


class RelayError(Exception):
    status_code = 500
    kind = "RelayError"

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_content(self) -> dict:
        content = {"success": False, "error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return content


class ValidationError(RelayError):
    status_code = 400
    kind = "ValidationError"


class UpstreamUnreachable(RelayError):
    status_code = 503
    kind = "UpstreamUnreachable"


class UpstreamUnauthorized(RelayError):
    status_code = 401
    kind = "UpstreamUnauthorized"


class UpstreamConflict(RelayError):
    status_code = 409
    kind = "UpstreamConflict"


class UpstreamTimeout(RelayError):
    status_code = 500
    kind = "UpstreamTimeout"


class UpstreamError(RelayError):
    kind = "UpstreamOther"


def response_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def classify_upstream_error(
    exc: Union[httpx.HTTPError, httpx.Response],
    unauthorized_message: str,
    conflict_message: Optional[str] = None,
) -> RelayError:
    """Map a failed upstream call to the relay error the caller receives.

    ``exc`` is either the httpx exception raised by the call or the non-2xx
    response it returned. A 409 is only treated as a conflict when the
    operation supplies ``conflict_message``.
    """
    if isinstance(exc, httpx.TimeoutException):
        return UpstreamTimeout(
            "Request to n8n server timed out. Please try again.", details=str(exc)
        )
    if isinstance(exc, httpx.HTTPError):
        return UpstreamUnreachable(
            "Cannot connect to n8n server. Please ensure n8n is running and reachable.",
            details=str(exc),
        )

    response = exc
    body = response_body(response)
    if response.status_code == 401:
        return UpstreamUnauthorized(unauthorized_message, details=body)
    if response.status_code == 409 and conflict_message:
        return UpstreamConflict(conflict_message, details=body)

    message = None
    if isinstance(body, dict):
        message = body.get("message")
    return UpstreamError(
        message or f"n8n server error: {response.status_code}",
        details=body,
        status_code=response.status_code,
    )


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(RelayError)
    async def relay_exception_handler(request: Request, exc: RelayError):
        log_structured(
            "Relay request failed",
            level="error",
            kind=exc.kind,
            status_code=exc.status_code,
            error=exc.message,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Field errors are located at ("body", "<field>"); anything else means
        # the body as a whole was not a JSON object.
        fields = [
            str(error["loc"][1])
            for error in exc.errors()
            if len(error["loc"]) > 1 and isinstance(error["loc"][1], str)
        ]
        if fields:
            message = f"Invalid value for field(s): {', '.join(fields)}"
        else:
            message = "Request body must be a JSON object"
        log_structured("Invalid request body", level="warning", path=request.url.path, error=message)
        return JSONResponse(status_code=400, content={"success": False, "error": message})

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        log_structured("Unhandled exception", level="error", error=str(exc), path=request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})
