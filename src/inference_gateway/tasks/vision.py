import base64
from typing import Any

from inference_gateway.core.types import (
    Encoding,
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)
from inference_gateway.services.encoder import (
    binary_mime_type,
    multimodal_text,
    to_data_url,
)
from inference_gateway.services.normalizer import QUESTION_SUBTASKS
from inference_gateway.tasks.base import BaseTaskHandler


class VisionHandler(BaseTaskHandler):
    """Classification, detection, depth and segmentation on a raw image."""

    task_kind = TaskKind.VISION
    payload_field = "result"

    async def run(
        self,
        provider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        response = await provider.post_bytes(candidate.backend_id, request.payload["image"])
        metadata = {"task": request.subtask}

        # Depth maps come back as images, everything else as JSON
        if response.content_type.startswith("image/"):
            mime_type = binary_mime_type(response.content_type, "image", "image/png")
            return InferenceResult(
                used_model=candidate.backend_id,
                alias=candidate.alias,
                payload=to_data_url(response.content, mime_type),
                encoding=Encoding.DATA_URL,
                metadata={**metadata, "resultType": "image"},
            )

        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=response.json(),
            encoding=Encoding.JSON,
            metadata={**metadata, "resultType": "json"},
        )


class MultimodalHandler(BaseTaskHandler):
    """Captioning and question answering over an image."""

    task_kind = TaskKind.MULTIMODAL
    payload_field = "result"

    async def run(
        self,
        provider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        image = request.payload["image"]
        question = request.payload.get("question")

        if request.subtask in QUESTION_SUBTASKS:
            response = await provider.post_json(
                candidate.backend_id,
                {
                    "inputs": {
                        "image": base64.b64encode(image).decode("ascii"),
                        "question": question,
                    }
                },
            )
        else:
            response = await provider.post_bytes(candidate.backend_id, image)

        return InferenceResult(
            used_model=candidate.backend_id,
            alias=candidate.alias,
            payload=multimodal_text(response.json()),
            encoding=Encoding.TEXT,
            metadata={"task": request.subtask},
        )
