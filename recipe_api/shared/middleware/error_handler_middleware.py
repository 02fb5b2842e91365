# recipe_api/shared/middleware/error_handler_middleware.py

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from recipe_api.domain.exceptions import DomainException, RateLimited, ValidationFailed
from recipe_api.shared.utils.responses import error_response

logger = logging.getLogger(__name__)

HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    429: "RATE_LIMITED",
}


def domain_exception_response(exc: DomainException):
    headers = None
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after)}

    # Detalhes internos de erros 5xx nunca vão para o cliente
    details = exc.details if exc.status_code < 500 else None
    return error_response(
        exc.internal_code,
        exc.message,
        status_code=exc.status_code,
        details=details,
        headers=headers,
    )


def validation_details(exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        message = str(err.get("msg", "Invalid value"))
        # Mensagens dos validators chegam como "Value error, <mensagem>"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"field": ".".join(loc), "message": message})
    return details


async def handle_domain_exception(request: Request, exc: DomainException):
    if exc.status_code >= 500:
        original = getattr(exc, "original_error", None)
        logger.error(f"[{exc.internal_code}] {exc.message} on {request.url.path}: {original or ''}")
    else:
        logger.warning(f"[{exc.internal_code}] {exc.message} on {request.method} {request.url.path}")
    return domain_exception_response(exc)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = validation_details(exc)
    logger.warning(f"Validation failed on {request.url.path}: {len(details)} error(s)")
    return domain_exception_response(ValidationFailed(details=details))


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    # Corpo grande demais durante o streaming chega embrulhado pelo FastAPI
    if isinstance(exc.__cause__, DomainException):
        return await handle_domain_exception(request, exc.__cause__)

    code = HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    logger.warning(f"HTTPException {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return error_response(code, str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, handle_domain_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence: anything the exception handlers did not turn into
    a response becomes a generic 500 envelope, logged with its traceback.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except DomainException as e:
            return await handle_domain_exception(request, e)

        except Exception:
            logger.exception(f"Unexpected error on {request.method} {request.url.path}")
            return error_response("INTERNAL_ERROR", "Internal server error", status_code=500)
