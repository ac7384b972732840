import asyncio
import time
from typing import Awaitable, Callable, Sequence, TypeVar

from inference_gateway.core import logging
from inference_gateway.core.errors import (
    AllCandidatesFailedError,
    CandidateNotFoundError,
    CandidateTimeoutError,
    ProviderError,
    ProviderFatalError,
)
from inference_gateway.core.protocols import Clock, Sleeper
from inference_gateway.core.types import (
    AttemptOutcome,
    ModelCandidate,
    OutcomeStatus,
    RetryPolicy,
)
from inference_gateway.services.classifier import classify

T = TypeVar("T")


class RetryingInvoker:
    """
    Runs one call against an ordered list of candidates.

    Candidates are attempted strictly one after another. Cold-start and
    rate-limit failures are retried on the same candidate with exponential
    backoff until the policy's retry count or time budget runs out; a
    not-found failure moves straight to the next candidate; any other
    failure aborts the whole invocation.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.policy = policy
        self.clock = clock
        self.sleep = sleep

    async def invoke(
        self,
        candidates: Sequence[ModelCandidate],
        call: Callable[[ModelCandidate], Awaitable[T]],
    ) -> tuple[ModelCandidate, T]:
        """Return the first candidate that succeeds together with its result."""
        last_error = "no candidates to try"
        last_status = None
        attempted = []

        for candidate in candidates:
            attempted.append(candidate.backend_id)
            try:
                result = await self._invoke_candidate(candidate, call)
                return candidate, result
            except CandidateNotFoundError as e:
                last_error, last_status = e.message, OutcomeStatus.NOT_FOUND
            except CandidateTimeoutError as e:
                last_error, last_status = e.message, e.last_status
            logging.info(
                f"Abandoning {candidate.backend_id}: {last_error}",
                extra={"candidate": candidate.backend_id, "outcome": last_status.value},
            )

        logging.warning(
            f"All candidates failed: {attempted}",
            extra={"attempted": attempted, "last_error": last_error},
        )
        raise AllCandidatesFailedError(last_error, attempted, last_status)

    async def _invoke_candidate(
        self,
        candidate: ModelCandidate,
        call: Callable[[ModelCandidate], Awaitable[T]],
    ) -> T:
        policy = self.policy
        started = self.clock()
        next_delay = policy.initial_delay
        attempt = 0
        last_status = OutcomeStatus.LOADING

        while True:
            elapsed = self.clock() - started
            if elapsed > policy.total_timeout:
                raise CandidateTimeoutError(
                    f"{candidate.backend_id} timed out after {elapsed:.0f} seconds",
                    candidate.backend_id,
                    last_status,
                )

            attempt += 1
            try:
                result = await call(candidate)
            except ProviderError as e:
                status, wait_hint = classify(e, policy.server_error)
                outcome = AttemptOutcome(
                    candidate=candidate, status=status, wait_hint=wait_hint, message=e.message
                )
            else:
                self._log_attempt(candidate, attempt, OutcomeStatus.SUCCESS, None)
                return result

            if outcome.status is OutcomeStatus.NOT_FOUND:
                self._log_attempt(candidate, attempt, outcome.status, None)
                raise CandidateNotFoundError(outcome.message, candidate.backend_id)

            if outcome.status is OutcomeStatus.FATAL:
                self._log_attempt(candidate, attempt, outcome.status, None)
                raise ProviderFatalError(outcome.message, candidate.backend_id)

            last_status = outcome.status
            wait = next_delay
            if outcome.wait_hint is not None:
                wait = min(outcome.wait_hint, policy.max_delay)
            growth = (
                policy.loading_growth
                if outcome.status is OutcomeStatus.LOADING
                else policy.rate_limit_growth
            )
            next_delay = min(next_delay * growth, policy.max_delay)
            self._log_attempt(candidate, attempt, outcome.status, wait)

            if attempt > policy.max_retries:
                raise CandidateTimeoutError(
                    f"{candidate.backend_id} gave up after {attempt} attempts: {outcome.message}",
                    candidate.backend_id,
                    last_status,
                )

            elapsed = self.clock() - started
            if elapsed + wait > policy.total_timeout:
                raise CandidateTimeoutError(
                    f"{candidate.backend_id} timed out after {elapsed:.0f} seconds: {outcome.message}",
                    candidate.backend_id,
                    last_status,
                )

            await self.sleep(wait)

    @staticmethod
    def _log_attempt(candidate, attempt, status, wait):
        logging.info(
            f"Attempt {attempt} on {candidate.backend_id}: {status.value}"
            + (f", waiting {wait:.1f}s" if wait is not None else ""),
            extra={
                "candidate": candidate.backend_id,
                "attempt": attempt,
                "outcome": status.value,
                "wait": wait,
            },
        )
