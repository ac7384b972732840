from typing import Any

from inference_gateway.core.types import (
    Encoding,
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)
from inference_gateway.services.encoder import binary_mime_type, to_data_url
from inference_gateway.tasks.base import BaseTaskHandler


class ImageGenerationHandler(BaseTaskHandler):
    task_kind = TaskKind.IMAGE_GENERATION
    payload_field = "image"

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
                "inputs": request.payload["prompt"],
                "parameters": {
                    "negative_prompt": request.payload["negative_prompt"],
                    "width": constraints["width"],
                    "height": constraints["height"],
                    "num_inference_steps": constraints["num_inference_steps"],
                    "guidance_scale": constraints["guidance_scale"],
                },
            },
        )
        mime_type = binary_mime_type(response.content_type, "image", "image/png")
        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=to_data_url(response.content, mime_type),
            encoding=Encoding.DATA_URL,
            metadata={
                "prompt": request.payload["prompt"],
                "dimensions": {
                    "width": constraints["width"],
                    "height": constraints["height"],
                },
            },
        )
