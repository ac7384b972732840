"""
Validation and defaulting of inbound job descriptions.

Every failure here is a ClientError raised before any provider is called.
Field names follow the public JSON API (camelCase); snake_case spellings
are accepted as well.
"""

import base64
import binascii
import re
from typing import Any, Callable, Optional

import httpx

from inference_gateway.core.errors import ClientError
from inference_gateway.core.types import InferenceRequest, TaskKind

DEFAULT_MAX_TOKENS = 512
DEFAULT_TEMPERATURE = 0.7
DEFAULT_NEGATIVE_PROMPT = "low quality, blurry, distorted, ugly, deformed"
DEFAULT_IMAGE_SIZE = 1024
DEFAULT_INFERENCE_STEPS = 25
DEFAULT_GUIDANCE_SCALE = 7.5
DEFAULT_CHAT_MAX_TOKENS = 4096

QUESTION_SUBTASKS = frozenset({"visual-qa", "document-qa"})
CHAT_ROLES = frozenset({"system", "user", "assistant"})

_DATA_URL_PREFIX = re.compile(r"^data:[\w/+.-]+;base64,")


def _field(body: dict[str, Any], *names: str) -> Any:
    for name in names:
        value = body.get(name)
        if value is not None:
            return value
    return None


def _required_text(body: dict[str, Any], message: str, *names: str) -> str:
    value = _field(body, *names)
    if not isinstance(value, str) or not value.strip():
        raise ClientError(message)
    return value


def _number(
    body: dict[str, Any],
    names: tuple[str, ...],
    default: Any,
    cast: Callable[[Any], Any],
    minimum: Optional[float] = None,
) -> Any:
    value = _field(body, *names)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ClientError(f"'{names[0]}' must be a number")
    try:
        number = cast(value)
    except (TypeError, ValueError) as e:
        raise ClientError(f"'{names[0]}' must be a number") from e
    if minimum is not None and number < minimum:
        raise ClientError(f"'{names[0]}' must be at least {minimum}")
    return number


def _model_key(body: dict[str, Any]) -> Optional[str]:
    model = body.get("model")
    return model if isinstance(model, str) and model else None


def decode_base64_image(value: str) -> bytes:
    """Decode a bare base64 string or a `data:` URL into bytes."""
    encoded = _DATA_URL_PREFIX.sub("", value.strip(), count=1)
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ClientError("Invalid base64 image data") from e
    if not data:
        raise ClientError("No image provided")
    return data


async def _fetch_image(url: str, client: Optional[httpx.AsyncClient]) -> bytes:
    if not url.startswith(("http://", "https://")):
        raise ClientError("imageUrl must be an http(s) URL")
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(url, follow_redirects=True, timeout=30.0)
        else:
            response = await client.get(url, follow_redirects=True, timeout=30.0)
    except httpx.HTTPError as e:
        raise ClientError(f"Could not fetch image from imageUrl: {e}") from e
    if not response.is_success:
        raise ClientError(
            f"Could not fetch image from imageUrl: HTTP {response.status_code}"
        )
    return response.content


async def load_image(
    body: dict[str, Any], client: Optional[httpx.AsyncClient] = None
) -> bytes:
    image = body.get("image")
    if isinstance(image, (bytes, bytearray)):
        if not image:
            raise ClientError("No image provided")
        return bytes(image)
    if isinstance(image, str) and image:
        return decode_base64_image(image)
    url = _field(body, "imageUrl", "image_url")
    if isinstance(url, str) and url:
        return await _fetch_image(url, client)
    raise ClientError("No image provided")


def normalize_text(body: dict[str, Any]) -> InferenceRequest:
    prompt = _required_text(body, "Prompt is required", "prompt")
    return InferenceRequest(
        task_kind=TaskKind.TEXT_GENERATION,
        model_key=_model_key(body),
        payload={
            "prompt": prompt,
            "system_prompt": _field(body, "systemPrompt", "system_prompt"),
        },
        constraints={
            "max_tokens": _number(body, ("maxTokens", "max_tokens"), DEFAULT_MAX_TOKENS, int, 1),
            "temperature": _number(body, ("temperature",), DEFAULT_TEMPERATURE, float, 0),
        },
    )


def normalize_image(body: dict[str, Any]) -> InferenceRequest:
    prompt = _required_text(body, "Prompt is required", "prompt")
    negative_prompt = _field(body, "negativePrompt", "negative_prompt")
    return InferenceRequest(
        task_kind=TaskKind.IMAGE_GENERATION,
        model_key=_model_key(body),
        payload={
            "prompt": prompt,
            "negative_prompt": negative_prompt or DEFAULT_NEGATIVE_PROMPT,
        },
        constraints={
            "width": _number(body, ("width",), DEFAULT_IMAGE_SIZE, int, 1),
            "height": _number(body, ("height",), DEFAULT_IMAGE_SIZE, int, 1),
            "num_inference_steps": _number(
                body, ("numInferenceSteps", "num_inference_steps"), DEFAULT_INFERENCE_STEPS, int, 1
            ),
            "guidance_scale": _number(
                body, ("guidanceScale", "guidance_scale"), DEFAULT_GUIDANCE_SCALE, float, 0
            ),
        },
    )


def normalize_speech_to_text(body: dict[str, Any]) -> InferenceRequest:
    audio = body.get("audio")
    if not isinstance(audio, (bytes, bytearray)) or not audio:
        raise ClientError("Audio file is required")
    return InferenceRequest(
        task_kind=TaskKind.SPEECH_TO_TEXT,
        model_key=_model_key(body),
        payload={
            "audio": bytes(audio),
            "content_type": body.get("audio_content_type"),
        },
    )


def normalize_text_to_speech(body: dict[str, Any]) -> InferenceRequest:
    text = _required_text(body, "Text is required for text-to-speech", "text")
    return InferenceRequest(
        task_kind=TaskKind.TEXT_TO_SPEECH,
        model_key=_model_key(body),
        payload={"text": text},
    )


async def normalize_vision(
    body: dict[str, Any], client: Optional[httpx.AsyncClient] = None
) -> InferenceRequest:
    return InferenceRequest(
        task_kind=TaskKind.VISION,
        model_key=_model_key(body),
        subtask=body.get("task") or None,
        payload={"image": await load_image(body, client)},
    )


async def normalize_multimodal(
    body: dict[str, Any], client: Optional[httpx.AsyncClient] = None
) -> InferenceRequest:
    subtask = body.get("task") or None
    question = body.get("question")
    if subtask in QUESTION_SUBTASKS and not (isinstance(question, str) and question.strip()):
        raise ClientError(f"A question is required for {subtask}")
    return InferenceRequest(
        task_kind=TaskKind.MULTIMODAL,
        model_key=_model_key(body),
        subtask=subtask,
        payload={"image": await load_image(body, client), "question": question},
    )


def normalize_chat(body: dict[str, Any]) -> InferenceRequest:
    if body.get("stream") is True:
        raise ClientError("Streaming responses are not supported, send stream: false")
    messages = body.get("messages")
    if messages is None:
        prompt = _required_text(body, "Messages or a prompt are required", "prompt", "message")
        messages = [{"role": "user", "content": prompt}]
    if not isinstance(messages, list) or not messages:
        raise ClientError("Messages must be a non-empty list")

    cleaned = []
    for message in messages:
        if (
            not isinstance(message, dict)
            or message.get("role") not in CHAT_ROLES
            or not isinstance(message.get("content"), str)
        ):
            raise ClientError("Each message needs a role (system, user, assistant) and text content")
        cleaned.append({"role": message["role"], "content": message["content"]})

    system_prompt = _field(body, "systemPrompt", "system_prompt")
    if system_prompt and cleaned[0]["role"] != "system":
        cleaned.insert(0, {"role": "system", "content": system_prompt})

    return InferenceRequest(
        task_kind=TaskKind.CHAT,
        model_key=_model_key(body),
        payload={"messages": cleaned},
        constraints={
            "max_tokens": _number(body, ("maxTokens", "max_tokens"), DEFAULT_CHAT_MAX_TOKENS, int, 1),
            "temperature": _number(body, ("temperature",), DEFAULT_TEMPERATURE, float, 0),
        },
    )
