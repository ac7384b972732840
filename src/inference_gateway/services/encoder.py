import base64
import json
from typing import Any

from inference_gateway.core.errors import ProviderError
from inference_gateway.core.types import InferenceResult


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def binary_mime_type(content_type: str, family: str, default: str) -> str:
    """Use the provider's content type when it belongs to `family` (image, audio)."""
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if mime.startswith(f"{family}/"):
        return mime
    return default


def generated_text(result: Any) -> str:
    """Pull `generated_text` out of a text-generation response."""
    if isinstance(result, list) and result and isinstance(result[0], dict):
        result = result[0]
    if isinstance(result, dict) and isinstance(result.get("generated_text"), str):
        return result["generated_text"].strip()
    raise ProviderError(f"Unexpected text generation response: {str(result)[:200]}")


def multimodal_text(result: Any) -> str:
    """Captions and answers come back in a few shapes; fall back to the JSON text."""
    first = result[0] if isinstance(result, list) and result else result
    if isinstance(first, dict):
        for key in ("generated_text", "answer"):
            if isinstance(first.get(key), str):
                return first[key].strip()
    return json.dumps(result)


def chat_text(result: Any) -> str:
    try:
        return result["choices"][0]["message"]["content"].strip()
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ProviderError(f"Unexpected chat completion response: {str(result)[:200]}") from e


def to_envelope(result: InferenceResult, payload_field: str) -> dict[str, Any]:
    """
    Build the success envelope. `model` is always the backend that actually
    served the request, which may differ from the one requested.
    """
    return {
        "success": True,
        payload_field: result.payload,
        "model": result.used_model,
        **result.metadata,
    }
