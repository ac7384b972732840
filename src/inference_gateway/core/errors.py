from typing import Any, Mapping, Optional

from inference_gateway.core.types import OutcomeStatus


class GatewayError(Exception):
    """Base class for every failure the gateway reports to its callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientError(GatewayError):
    """A required field is missing or malformed. Never retried."""

    status_code = 400


class ConfigurationError(GatewayError):
    """The service itself is misconfigured (missing API key, broken catalog)."""


class ProviderError(GatewayError):
    """A single call to an upstream inference provider failed."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.body = body
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}


class CandidateNotFoundError(GatewayError):
    """The provider does not serve this candidate; try the next one."""

    def __init__(self, message: str, backend_id: str):
        super().__init__(message)
        self.backend_id = backend_id


class CandidateTimeoutError(GatewayError):
    """A candidate exhausted its retry count or time budget."""

    def __init__(self, message: str, backend_id: str, last_status: OutcomeStatus):
        super().__init__(message)
        self.backend_id = backend_id
        self.last_status = last_status


class ProviderFatalError(GatewayError):
    """A non-recoverable provider failure; remaining candidates are skipped."""

    def __init__(self, message: str, backend_id: str):
        super().__init__(message)
        self.backend_id = backend_id


class AllCandidatesFailedError(GatewayError):
    """Every candidate in the fallback list was abandoned."""

    def __init__(
        self,
        last_error: str,
        attempted: list[str],
        last_status: Optional[OutcomeStatus] = None,
    ):
        super().__init__(f"All models failed. Last error: {last_error}")
        self.last_error = last_error
        self.attempted = attempted
        self.last_status = last_status

    @property
    def timed_out(self) -> bool:
        return self.last_status in (OutcomeStatus.LOADING, OutcomeStatus.RATE_LIMITED)


class ProviderUnreachableError(ProviderError):
    """No HTTP exchange completed: connection failures and read timeouts."""
