import traceback
import uuid
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inference_gateway.core import logging
from inference_gateway.core.errors import ClientError, GatewayError

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait before trying again."
RATE_LIMIT_HINT = "Wait 30-60 seconds before your next request."


def _sanitize_request_data(request: Request) -> dict:
    return {"method": request.method, "path": request.url.path}


def failure_envelope(
    message: str,
    hint: str,
    available_models: Optional[list[str]] = None,
    **extras,
) -> dict:
    envelope = {"success": False, "error": message, "hint": hint}
    if available_models is not None:
        envelope["availableModels"] = available_models
    envelope.update(extras)
    return envelope


async def handle_client_error(request: Request, exc: ClientError) -> JSONResponse:
    logging.info(
        f"Client error: {exc.message}", extra=_sanitize_request_data(request)
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_envelope(exc.message, "Check the request fields and try again."),
    )


async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    logging.error(
        f"Gateway error: {exc.message}",
        extra={**_sanitize_request_data(request), "error_type": exc.__class__.__name__},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_envelope(exc.message, "Try again in a few minutes."),
    )


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    error_id = str(uuid.uuid4())
    context = _sanitize_request_data(request)

    logging.error(
        f"Error {error_id}: {str(exc)}",
        extra={
            "error_id": error_id,
            **context,
            "error_type": exc.__class__.__name__,
            "traceback": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure_envelope(
            "An unexpected error occurred",
            "Try again in a few minutes.",
            error_id=error_id,
        ),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error_id = str(uuid.uuid4())
    context = _sanitize_request_data(request)

    sanitized_errors = [
        {"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()
    ]

    logging.info(
        f"Validation error {error_id}",
        extra={"error_id": error_id, **context, "validation_errors": sanitized_errors},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=failure_envelope(
            "Invalid request data",
            "Check the request fields and try again.",
            error_id=error_id,
            details=sanitized_errors,
        ),
    )
