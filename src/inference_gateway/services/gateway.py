import asyncio
import time
from typing import Any, Mapping, Optional

from inference_gateway.core import logging
from inference_gateway.core.error_handling import RATE_LIMIT_HINT, RATE_LIMIT_MESSAGE
from inference_gateway.core.errors import AllCandidatesFailedError, GatewayError
from inference_gateway.core.protocols import Clock, Sleeper, TaskHandler
from inference_gateway.core.types import (
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    OutcomeStatus,
    TaskKind,
)
from inference_gateway.models.catalog import ModelCatalog
from inference_gateway.models.resolver import resolve_candidates
from inference_gateway.services.encoder import to_envelope
from inference_gateway.services.invoker import RetryingInvoker
from inference_gateway.tasks import default_handlers


class InferenceGateway:
    """Resolves, invokes and encodes one inference request."""

    def __init__(
        self,
        catalog: ModelCatalog,
        providers,
        handlers: Optional[Mapping[TaskKind, TaskHandler]] = None,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.catalog = catalog
        self.providers = providers
        self.handlers = dict(handlers or default_handlers())
        self.clock = clock
        self.sleep = sleep

    async def execute(self, request: InferenceRequest) -> InferenceResult:
        table = self.catalog.table(request.task_kind, request.subtask)
        request = request.model_copy(update={"subtask": table.subtask})
        candidates = resolve_candidates(
            self.catalog, request.task_kind, request.model_key, request.subtask
        )
        handler = self.handlers[request.task_kind]
        invoker = RetryingInvoker(table.retry, clock=self.clock, sleep=self.sleep)

        logging.info(
            f"{request.task_kind.value}: requested '{request.model_key}', "
            f"trying {[c.alias for c in candidates]}"
        )

        async def call(candidate: ModelCandidate) -> InferenceResult:
            constraints = candidate.limits.clamp(request.constraints)
            provider = self.providers.get(candidate.provider)
            return await handler.run(provider, candidate, request, constraints)

        candidate, result = await invoker.invoke(candidates, call)
        logging.info(
            f"{request.task_kind.value}: served by {candidate.backend_id}",
            extra={"candidate": candidate.backend_id, "requested": request.model_key},
        )
        return result

    async def respond(self, request: InferenceRequest) -> dict[str, Any]:
        """Execute and wrap the result in the success envelope."""
        result = await self.execute(request)
        return to_envelope(result, self.handlers[request.task_kind].payload_field)

    def failure_details(
        self, task_kind: TaskKind, error: GatewayError, subtask: Optional[str] = None
    ) -> tuple[str, str, list[str]]:
        """Return (message, hint, available models) for a failed request."""
        group = self.catalog.group(task_kind)
        if group.default_subtask is None:
            table = group.tables[None]
        else:
            table = group.tables.get(subtask or group.default_subtask)
        hint = table.hint if table else ""
        message = error.message

        if isinstance(error, AllCandidatesFailedError) and error.timed_out:
            if error.last_status is OutcomeStatus.RATE_LIMITED:
                message, hint = RATE_LIMIT_MESSAGE, RATE_LIMIT_HINT
            elif table and table.timeout_hint:
                hint = table.timeout_hint

        return message, hint, self.catalog.available_models(task_kind, subtask)
