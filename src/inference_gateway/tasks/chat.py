from typing import Any

from inference_gateway.core.types import (
    Encoding,
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)
from inference_gateway.services.encoder import chat_text
from inference_gateway.tasks.base import BaseTaskHandler


class ChatHandler(BaseTaskHandler):
    task_kind = TaskKind.CHAT
    payload_field = "text"

    async def run(
        self,
        provider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        response = await provider.post_json(
            candidate.backend_id,
            {
                "messages": request.payload["messages"],
                "temperature": constraints["temperature"],
                "max_tokens": constraints["max_tokens"],
                "stream": False,
            },
        )
        result = response.json()
        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=chat_text(result),
            encoding=Encoding.TEXT,
            metadata={"usage": result.get("usage") or {}},
        )
