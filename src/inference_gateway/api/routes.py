from typing import Any, Awaitable, Callable, Optional, Union

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from inference_gateway.api.schemas.responses import (
    TASK_RESPONSES,
    VIDEO_UNAVAILABLE,
    HealthResponse,
)
from inference_gateway.core import logging
from inference_gateway.core.error_handling import failure_envelope
from inference_gateway.core.errors import ClientError, GatewayError
from inference_gateway.core.types import InferenceRequest, TaskKind
from inference_gateway.services import normalizer

Normalizer = Callable[..., Union[InferenceRequest, Awaitable[InferenceRequest]]]

main_router = APIRouter(prefix="/v1")
health_router = APIRouter(prefix="/v1")


@health_router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="healthy")


def _is_multipart(request: Request) -> bool:
    return "multipart/form-data" in request.headers.get("content-type", "")


async def _read_body(request: Request) -> dict[str, Any]:
    """Read a JSON object or a multipart form; uploaded files become bytes."""
    if _is_multipart(request):
        form = await request.form()
        body: dict[str, Any] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                body[key] = await value.read()
                body[f"{key}_content_type"] = value.content_type
            else:
                body[key] = value
        return body

    try:
        body = await request.json()
    except ValueError as e:
        raise ClientError("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise ClientError("Request body must be a JSON object")
    return body


async def _run(
    request: Request,
    task_kind: TaskKind,
    normalize: Normalizer,
    body: Optional[dict[str, Any]] = None,
    needs_client: bool = False,
) -> JSONResponse:
    gateway = request.app.state.gateway
    subtask = None
    try:
        if body is None:
            body = await _read_body(request)
        subtask = body.get("task") or None
        # Unknown sub-tasks fail before any image is fetched
        gateway.catalog.table(task_kind, subtask)
        if needs_client:
            inference_request = await normalize(body, request.app.state.http_client)
        else:
            inference_request = normalize(body)
        envelope = await gateway.respond(inference_request)
    except GatewayError as e:
        message, hint, available = gateway.failure_details(task_kind, e, subtask)
        if isinstance(e, ClientError):
            logging.info(f"{task_kind.value}: rejected request: {e.message}")
        else:
            logging.error(f"{task_kind.value}: {e.message}", extra={"error_type": type(e).__name__})
        return JSONResponse(
            status_code=e.status_code,
            content=failure_envelope(message, hint, available),
        )
    return JSONResponse(content=envelope)


@main_router.get("/models")
async def list_models(request: Request):
    return {"success": True, "tasks": request.app.state.gateway.catalog.describe()}


@main_router.post("/text", responses=TASK_RESPONSES)
async def generate_text(request: Request):
    return await _run(request, TaskKind.TEXT_GENERATION, normalizer.normalize_text)


@main_router.post("/image", responses=TASK_RESPONSES)
async def generate_image(request: Request):
    return await _run(request, TaskKind.IMAGE_GENERATION, normalizer.normalize_image)


@main_router.post("/audio", responses=TASK_RESPONSES)
async def process_audio(request: Request):
    """Multipart uploads are transcribed; JSON bodies are synthesized to speech."""
    if _is_multipart(request):
        return await _run(request, TaskKind.SPEECH_TO_TEXT, normalizer.normalize_speech_to_text)
    return await _run(request, TaskKind.TEXT_TO_SPEECH, normalizer.normalize_text_to_speech)


@main_router.post("/vision", responses=TASK_RESPONSES)
async def process_vision(request: Request):
    return await _run(
        request, TaskKind.VISION, normalizer.normalize_vision, needs_client=True
    )


@main_router.post("/multimodal", responses=TASK_RESPONSES)
async def process_multimodal(request: Request):
    return await _run(
        request, TaskKind.MULTIMODAL, normalizer.normalize_multimodal, needs_client=True
    )


@main_router.post("/chat", responses=TASK_RESPONSES)
async def chat(request: Request):
    return await _run(request, TaskKind.CHAT, normalizer.normalize_chat)


@main_router.post("/video")
async def generate_video(request: Request):
    try:
        body = await _read_body(request)
    except ClientError:
        body = {}
    prompt = body.get("prompt") or ""
    logging.info(
        f"Video generation requested (model: {body.get('model') or 'default'}), "
        f"not available on the free tier",
        extra={"prompt": prompt[:100]},
    )
    return JSONResponse(status_code=503, content=VIDEO_UNAVAILABLE)
