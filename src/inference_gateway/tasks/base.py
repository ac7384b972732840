from typing import Any

from inference_gateway.core.protocols import InferenceProvider
from inference_gateway.core.types import (
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)


class BaseTaskHandler:
    """Base class for the per-task call and encoding logic."""

    task_kind: TaskKind
    payload_field: str = "result"

    async def run(
        self,
        provider: InferenceProvider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult:
        raise NotImplementedError
