"""HTTP plumbing shared by the marketplace routers.

Errors leave the service as ``{"success": false, "message": ..., "error": ...}``
where ``error`` carries field-level messages when there are any.
"""

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.domain import logger
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError


def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """Resolve the authenticated caller from the gateway's identity headers."""
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Not authorized to access this route")
    try:
        return Caller.of(x_user_id, x_user_role.lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}") from None


def _messages(exc) -> dict | None:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return messages
    # ObjectNotFoundError carries its payload only as the first argument
    if exc.args and isinstance(exc.args[0], dict):
        return exc.args[0]
    return None


def _first_message(messages: dict | None, fallback: str) -> str:
    if not messages:
        return fallback
    for value in messages.values():
        if isinstance(value, list | tuple) and value:
            return str(value[0])
        if value:
            return str(value)
    return fallback


def error_response(status_code: int, message: str, error=None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and request errors onto HTTP status codes."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        messages = _messages(exc)
        logger.warning("Request rejected", path=request.url.path, errors=messages or str(exc.messages))
        return error_response(400, _first_message(messages, str(exc.messages)), messages)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
            errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
        return error_response(400, _first_message(errors, "Invalid request"), errors)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        messages = _messages(exc)
        return error_response(404, _first_message(messages, "Resource not found"), messages)

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        logger.warning("Access denied", path=request.url.path, reason=exc.message)
        return error_response(403, exc.message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return error_response(exc.status_code, str(exc.detail))
