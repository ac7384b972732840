from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from inference_gateway.core.types import (
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    TaskKind,
)

# Seconds on a monotonic scale, and the matching suspension primitive
Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


@runtime_checkable
class InferenceProvider(Protocol):
    """Contract for an upstream inference API."""

    name: str

    async def post_json(self, model_id: str, payload: dict[str, Any]) -> Any: ...


@runtime_checkable
class TaskHandler(Protocol):
    """Turns a normalized request into one provider call for a given candidate."""

    task_kind: TaskKind
    payload_field: str

    async def run(
        self,
        provider: InferenceProvider,
        candidate: ModelCandidate,
        request: InferenceRequest,
        constraints: dict[str, Any],
    ) -> InferenceResult: ...
