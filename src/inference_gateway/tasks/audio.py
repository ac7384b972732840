from typing import Any

from inference_gateway.core.errors import ProviderError
from inference_gateway.core.types import (
    Encoding,
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)
from inference_gateway.services.encoder import binary_mime_type, to_data_url
from inference_gateway.tasks.base import BaseTaskHandler


class SpeechToTextHandler(BaseTaskHandler):
    task_kind = TaskKind.SPEECH_TO_TEXT
    payload_field = "text"

    async def run(
        self,
        provider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        response = await provider.post_bytes(
            candidate.backend_id,
            request.payload["audio"],
            request.payload.get("content_type"),
        )
        result = response.json()
        if not isinstance(result, dict):
            raise ProviderError(f"Unexpected transcription response: {str(result)[:200]}")
        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=(result.get("text") or "").strip(),
            encoding=Encoding.TEXT,
            metadata={"mode": "speech-to-text"},
        )


class TextToSpeechHandler(BaseTaskHandler):
    task_kind = TaskKind.TEXT_TO_SPEECH
    payload_field = "audio"

    async def run(
        self,
        provider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        response = await provider.post_json(
            candidate.backend_id, {"inputs": request.payload["text"]}
        )
        mime_type = binary_mime_type(response.content_type, "audio", "audio/wav")
        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=to_data_url(response.content, mime_type),
            encoding=Encoding.DATA_URL,
            metadata={"mode": "text-to-speech"},
        )
