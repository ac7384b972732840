from typing import Any

from inference_gateway.core.types import (
    Encoding,
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)
from inference_gateway.services.encoder import generated_text
from inference_gateway.services.prompt_formats import format_prompt
from inference_gateway.tasks.base import BaseTaskHandler


class TextGenerationHandler(BaseTaskHandler):
    task_kind = TaskKind.TEXT_GENERATION
    payload_field = "text"

    async def run(
        self,
        provider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        temperature = constraints["temperature"]
        inputs = format_prompt(
            candidate.prompt_format,
            request.payload["prompt"],
            request.payload.get("system_prompt"),
        )
        response = await provider.post_json(
            candidate.backend_id,
            {
                "inputs": inputs,
                "parameters": {
                    "max_new_tokens": constraints["max_tokens"],
                    "temperature": temperature,
                    "return_full_text": False,
                    "do_sample": temperature > 0,
                    "top_p": 0.95,
                    "repetition_penalty": 1.1,
                },
            },
        )
        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=generated_text(response.json()),
            encoding=Encoding.TEXT,
        )
